"""Logging setup for processes that embed credential verification."""

from __future__ import annotations

import logging

_LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"
_PACKAGE_LOGGER = "realm_credentials"


def resolve_log_level(level: str) -> int:
    """Map a level name to a logging constant, falling back to INFO."""

    normalized_level = level.strip().upper() or "INFO"
    resolved_level = logging.getLevelName(normalized_level)
    if not isinstance(resolved_level, int):
        return logging.INFO
    return resolved_level


def configure_logging(*, level: str) -> int:
    """Configure root logging format and the package logger level."""

    resolved_level = resolve_log_level(level)
    logging.basicConfig(level=resolved_level, format=_LOG_FORMAT)
    logging.getLogger(_PACKAGE_LOGGER).setLevel(resolved_level)
    return resolved_level
