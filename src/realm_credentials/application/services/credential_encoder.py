"""Produce stored credential values and the property updates that write them."""

from __future__ import annotations

import logging
import secrets
from collections.abc import Callable

from realm_credentials.application.ports.key_derivation_port import KeyDerivationPort
from realm_credentials.application.ports.text_codec_port import TextCodecPort
from realm_credentials.domain.credentials import (
    ALL_SUFFIXES,
    DIGEST_LENGTH,
    LEGACY_MD5_SUFFIX,
    OBFUSCATED_SUFFIX,
    PLAIN_SUFFIX,
    SALT_LENGTH,
    CredentialFormat,
    CredentialInputError,
    CredentialUpdate,
    EncodedCredential,
    build_storage_key,
    require_password,
)

logger = logging.getLogger(__name__)

SaltSource = Callable[[int], bytes]


class CredentialEncoder:
    """Encode new credentials; the caller persists the returned updates.

    The legacy `.md5` form is never produced.
    """

    def __init__(
        self,
        *,
        key_derivation: KeyDerivationPort,
        codec: TextCodecPort,
        salt_source: SaltSource = secrets.token_bytes,
    ) -> None:
        self._key_derivation = key_derivation
        self._codec = codec
        self._salt_source = salt_source

    def encode_obfuscated(self, password: str) -> EncodedCredential:
        """Return base64 of the UTF-8 password bytes; reversible, not secret."""

        require_password(password=password)
        return EncodedCredential(
            format=CredentialFormat.OBFUSCATED,
            value=self._codec.encode(password.encode("utf-8")),
        )

    def encode_salted_hash(self, password: str) -> EncodedCredential:
        """Return base64 of a fresh 16-byte salt followed by the derived key.

        Raises KeyDerivationError when the derivation cannot run.
        """

        require_password(password=password)
        if not password:
            raise CredentialInputError("password cannot be empty for a salted hash")
        salt = self._salt_source(SALT_LENGTH)
        if len(salt) != SALT_LENGTH:
            raise RuntimeError(f"salt source returned {len(salt)} bytes, expected {SALT_LENGTH}")
        derived = self._key_derivation.derive(salt, password.encode("utf-8"))
        if len(derived) != DIGEST_LENGTH:
            raise RuntimeError(
                f"key derivation returned {len(derived)} bytes, expected {DIGEST_LENGTH}"
            )
        return EncodedCredential(
            format=CredentialFormat.SALTED_HASH,
            value=self._codec.encode(salt + derived),
        )

    def salted_hash_update(
        self,
        realm: str,
        user: str | None,
        password: str,
    ) -> CredentialUpdate:
        """Set the salted hash and drop every weaker sibling format."""

        storage_key = build_storage_key(realm=realm, user=user)
        encoded = self.encode_salted_hash(password)
        logger.info("salted_hash_update_built key=%s", storage_key)
        return CredentialUpdate(
            set_properties={encoded.property_key(storage_key): encoded.value},
            remove_properties=(
                storage_key + PLAIN_SUFFIX,
                storage_key + OBFUSCATED_SUFFIX,
                storage_key + LEGACY_MD5_SUFFIX,
            ),
        )

    def obfuscated_update(
        self,
        realm: str,
        user: str | None,
        password: str,
    ) -> CredentialUpdate:
        """Set the obfuscated form and drop any plaintext copy."""

        storage_key = build_storage_key(realm=realm, user=user)
        encoded = self.encode_obfuscated(password)
        logger.info("obfuscated_update_built key=%s", storage_key)
        return CredentialUpdate(
            set_properties={encoded.property_key(storage_key): encoded.value},
            remove_properties=(storage_key + PLAIN_SUFFIX,),
        )

    @staticmethod
    def removal_update(realm: str, user: str | None) -> CredentialUpdate:
        """Remove every stored format for one realm and user."""

        storage_key = build_storage_key(realm=realm, user=user)
        return CredentialUpdate(
            remove_properties=tuple(storage_key + suffix for suffix in ALL_SUFFIXES),
        )
