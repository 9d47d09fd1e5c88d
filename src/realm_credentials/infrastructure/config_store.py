"""Configuration store adapters exposing credential properties."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from pathlib import Path

from realm_credentials.application.ports.config_store_port import (
    ConfigStoreError,
    ConfigStorePort,
)
from realm_credentials.domain.credentials import CredentialUpdate

logger = logging.getLogger(__name__)

_COMMENT_PREFIXES = ("#", ";")


class MappingConfigStore(ConfigStorePort):
    """In-memory store backed by a plain dict."""

    def __init__(self, properties: Mapping[str, str] | None = None) -> None:
        self._properties: dict[str, str] = dict(properties or {})

    def get_property(self, key: str) -> str | None:
        return self._properties.get(key)

    def apply(self, update: CredentialUpdate) -> None:
        """Persist one credential update into the in-memory mapping."""

        update.apply_to(self._properties)

    def snapshot(self) -> dict[str, str]:
        """Return a copy of all stored properties."""

        return dict(self._properties)


def parse_properties(text: str) -> dict[str, str]:
    """Parse `key=value` lines, skipping blanks and comment lines.

    Keys and values are stripped; the first `=` splits key from value, so
    values may themselves contain `=` (base64 padding).
    """

    properties: dict[str, str] = {}
    for line_number, raw_line in enumerate(text.splitlines(), start=1):
        line = raw_line.strip()
        if not line or line.startswith(_COMMENT_PREFIXES):
            continue
        key, separator, value = line.partition("=")
        key = key.strip()
        if not separator or not key:
            logger.debug("config_line_skipped line=%s", line_number)
            continue
        properties[key] = value.strip()
    return properties


class PropertiesFileConfigStore(ConfigStorePort):
    """Read-only store over a `key=value` configuration file."""

    def __init__(self, path: str | Path) -> None:
        self._path = Path(path)
        self._properties: dict[str, str] = {}
        self.reload()

    @property
    def path(self) -> Path:
        return self._path

    def reload(self) -> None:
        """Re-read the backing file; a missing file yields an empty store."""

        if not self._path.exists():
            logger.info("config_file_missing path=%s", self._path)
            self._properties = {}
            return
        try:
            text = self._path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            raise ConfigStoreError(f"failed to read config file: {self._path}") from exc
        self._properties = parse_properties(text)
        logger.info(
            "config_file_loaded path=%s properties=%s",
            self._path,
            len(self._properties),
        )

    def get_property(self, key: str) -> str | None:
        return self._properties.get(key)
