from __future__ import annotations

import pytest

from realm_credentials.infrastructure.security.text_codec import (
    STANDARD_ALTCHARS,
    Base64TextCodec,
)


def test_default_alphabet_uses_router_characters() -> None:
    codec = Base64TextCodec()

    assert codec.encode(b"\xfb\xff") == "-~8="
    assert codec.decode("-~8=") == b"\xfb\xff"


def test_standard_alphabet_is_supported() -> None:
    codec = Base64TextCodec(altchars=STANDARD_ALTCHARS)

    assert codec.encode(b"\xfb\xff") == "+/8="
    assert codec.decode("+/8=") == b"\xfb\xff"


def test_standard_characters_are_rejected_by_router_alphabet() -> None:
    assert Base64TextCodec().decode("+/8=") is None


@pytest.mark.parametrize("text", ["not base64!", "abc", "sécret"])
def test_invalid_text_decodes_to_none(text: str) -> None:
    assert Base64TextCodec().decode(text) is None


def test_round_trips_arbitrary_bytes() -> None:
    codec = Base64TextCodec()
    data = bytes(range(256))

    assert codec.decode(codec.encode(data)) == data


@pytest.mark.parametrize("altchars", ["-", "--", "+a", "/=", "é~"])
def test_invalid_altchars_are_rejected(altchars: str) -> None:
    with pytest.raises(ValueError):
        Base64TextCodec(altchars=altchars)
