"""MD5 helpers compatible with RFC 2617 digest-auth credential files.

Nothing here is used to verify the salted-hash format; these helpers only
reproduce the `HA1 = MD5(user:realm:password)` value that external digest
authenticators expect, byte for byte.
"""

from __future__ import annotations

import hashlib
import logging

logger = logging.getLogger(__name__)

# single byte per character, matching the deployed digest-auth convention
_LEGACY_TEXT_ENCODING = "iso-8859-1"


def raw_digest(data: bytes) -> bytes | None:
    """Return the 16-byte MD5 digest of data, or None when MD5 is unavailable."""

    try:
        hasher = hashlib.new("md5", usedforsecurity=False)
    except ValueError:
        logger.warning("md5_digest_unavailable")
        return None
    hasher.update(data)
    return hasher.digest()


def compatibility_digest_hex_of(text: str) -> str | None:
    """Return lower-case 32-char hex MD5 of the ISO-8859-1 bytes of text.

    Characters outside ISO-8859-1 are replaced with `?`, as Java and Jetty do
    when building the same bytes. Returns None only when MD5 is unavailable.
    """

    digest = raw_digest(text.encode(_LEGACY_TEXT_ENCODING, errors="replace"))
    if digest is None:
        return None
    return digest.hex()


def compatibility_digest_hex(user: str, subrealm: str, password: str) -> str | None:
    """Return the digest-auth HA1 hex for `user:subrealm:password`.

    All three values are expected to be trimmed by the caller.
    """

    return compatibility_digest_hex_of(f"{user}:{subrealm}:{password}")
