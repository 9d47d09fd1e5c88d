"""Storage-key layout and encoded-value model for realm credentials."""

from __future__ import annotations

from collections.abc import MutableMapping
from dataclasses import dataclass, field
from enum import StrEnum

SALT_LENGTH = 16
DIGEST_LENGTH = 32
SALTED_HASH_LENGTH = SALT_LENGTH + DIGEST_LENGTH
COMPATIBILITY_DIGEST_LENGTH = 16

# stored as plain text
PLAIN_SUFFIX = ".password"
# stored as base64 of the UTF-8 bytes
OBFUSCATED_SUFFIX = ".b64"
# hex MD5 of the ISO-8859-1 bytes of "user:realm:password"; read-only legacy form
LEGACY_MD5_SUFFIX = ".md5"
# base64 of the 16 byte salt followed by the 32 byte derived key
SALTED_HASH_SUFFIX = ".shash"

ALL_SUFFIXES = (PLAIN_SUFFIX, OBFUSCATED_SUFFIX, LEGACY_MD5_SUFFIX, SALTED_HASH_SUFFIX)


class CredentialInputError(ValueError):
    """Raised when a caller violates a credential operation precondition."""


class CredentialFormat(StrEnum):
    """Encodings this package can produce for a stored credential."""

    PLAIN = "plain"
    OBFUSCATED = "obfuscated"
    SALTED_HASH = "salted_hash"

    @property
    def suffix(self) -> str:
        return _FORMAT_SUFFIXES[self]


_FORMAT_SUFFIXES = {
    CredentialFormat.PLAIN: PLAIN_SUFFIX,
    CredentialFormat.OBFUSCATED: OBFUSCATED_SUFFIX,
    CredentialFormat.SALTED_HASH: SALTED_HASH_SUFFIX,
}


@dataclass(frozen=True)
class EncodedCredential:
    """One credential value ready to be written under its format suffix."""

    format: CredentialFormat
    value: str

    def property_key(self, storage_key: str) -> str:
        """Return the full property name for this value under one storage key."""

        return storage_key + self.format.suffix


def require_realm(*, realm: str) -> str:
    """Return realm unchanged or reject missing and blank values."""

    if not isinstance(realm, str) or not realm:
        raise CredentialInputError("realm must be a non-empty string")
    return realm


def require_password(*, password: str) -> str:
    """Return password unchanged or reject non-string values."""

    if not isinstance(password, str):
        raise CredentialInputError("password must be a string")
    return password


def build_storage_key(*, realm: str, user: str | None) -> str:
    """Build the property prefix for one realm and optional user.

    `None` and the empty string both mean "no user dimension" and yield the
    bare realm.
    """

    prefix = require_realm(realm=realm)
    if user:
        prefix += "." + user
    return prefix


@dataclass(frozen=True)
class CredentialUpdate:
    """Property changes a caller should persist for one credential write."""

    set_properties: dict[str, str] = field(default_factory=dict)
    remove_properties: tuple[str, ...] = ()

    def apply_to(self, properties: MutableMapping[str, str]) -> None:
        """Apply removals then assignments to a mutable property mapping."""

        for key in self.remove_properties:
            properties.pop(key, None)
        properties.update(self.set_properties)
