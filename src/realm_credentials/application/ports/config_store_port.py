"""Port for reading credential properties from a flat configuration store."""

from __future__ import annotations

from typing import Protocol


class ConfigStoreError(RuntimeError):
    """Raised when a configuration store backend cannot be read."""


class ConfigStorePort(Protocol):
    """Read-only key/value configuration store contract."""

    def get_property(self, key: str) -> str | None:
        """Return the stored text for one key or None when unset."""
