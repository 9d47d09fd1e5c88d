"""Port for deriving a fixed-size key from a salt and password bytes."""

from __future__ import annotations

from typing import Protocol


class KeyDerivationError(RuntimeError):
    """Raised when a key cannot be derived for the given inputs."""


class KeyDerivationUnavailableError(KeyDerivationError):
    """Raised when the derivation primitive is missing from this runtime."""


class KeyDerivationPort(Protocol):
    """Deterministic salted key-derivation contract."""

    def derive(self, salt: bytes, password: bytes) -> bytes:
        """Return the 32-byte key derived from salt and UTF-8 password bytes."""
