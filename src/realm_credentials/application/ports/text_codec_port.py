"""Port for the reversible text-safe byte encoding used in stored values."""

from __future__ import annotations

from typing import Protocol


class TextCodecPort(Protocol):
    """Reversible bytes-to-text codec contract."""

    def encode(self, data: bytes) -> str:
        """Encode raw bytes to store-safe text."""

    def decode(self, text: str) -> bytes | None:
        """Decode stored text to raw bytes or return None when invalid."""
