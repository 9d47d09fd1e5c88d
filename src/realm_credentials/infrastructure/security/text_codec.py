"""Base64 codec adapter for stored credential values."""

from __future__ import annotations

import base64
import binascii

from realm_credentials.application.ports.text_codec_port import TextCodecPort

# alphabet tail used by existing router configuration files
ROUTER_ALTCHARS = "-~"
STANDARD_ALTCHARS = "+/"


class Base64TextCodec(TextCodecPort):
    """Strict base64 codec with a configurable 62nd/63rd character pair."""

    def __init__(self, *, altchars: str = ROUTER_ALTCHARS) -> None:
        if len(altchars) != 2 or not altchars.isascii() or altchars[0] == altchars[1]:
            raise ValueError("altchars must be two distinct ASCII characters")
        if any(char.isalnum() or char == "=" for char in altchars):
            raise ValueError("altchars must not overlap the base64 alphabet or padding")
        self._altchars = altchars.encode("ascii")
        self._foreign = bytes(char for char in b"+/" if char not in self._altchars)

    def encode(self, data: bytes) -> str:
        return base64.b64encode(data, altchars=self._altchars).decode("ascii")

    def decode(self, text: str) -> bytes | None:
        try:
            raw = text.encode("ascii")
        except UnicodeEncodeError:
            return None
        # standard characters outside the configured alphabet are not valid input
        if any(char in raw for char in self._foreign):
            return None
        try:
            return base64.b64decode(raw, altchars=self._altchars, validate=True)
        except (binascii.Error, ValueError):
            return None
