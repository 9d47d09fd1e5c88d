"""Verify passwords against realm credentials stored in several encodings."""

from __future__ import annotations

import hmac
import logging

from realm_credentials.application.ports.config_store_port import ConfigStorePort
from realm_credentials.application.ports.key_derivation_port import (
    KeyDerivationError,
    KeyDerivationPort,
)
from realm_credentials.application.ports.text_codec_port import TextCodecPort
from realm_credentials.domain import digest
from realm_credentials.domain.credentials import (
    COMPATIBILITY_DIGEST_LENGTH,
    DIGEST_LENGTH,
    LEGACY_MD5_SUFFIX,
    OBFUSCATED_SUFFIX,
    PLAIN_SUFFIX,
    SALT_LENGTH,
    SALTED_HASH_LENGTH,
    SALTED_HASH_SUFFIX,
    build_storage_key,
    require_password,
)

logger = logging.getLogger(__name__)


class CredentialVerifier:
    """Check plaintext passwords against stored realm credentials.

    Holds no state besides its collaborators, so one instance can be shared
    across threads. Malformed stored values count as "no match"; only caller
    precondition violations raise.
    """

    def __init__(
        self,
        *,
        store: ConfigStorePort,
        key_derivation: KeyDerivationPort,
        codec: TextCodecPort,
    ) -> None:
        self._store = store
        self._key_derivation = key_derivation
        self._codec = codec
        self._checks = (self.check_plain, self.check_obfuscated, self.check_salted_hash)

    def check(self, realm: str, user: str | None, password: str) -> bool:
        """Return True when any stored format matches.

        Formats are tried plain, then obfuscated, then salted hash, stopping
        at the first match.
        """

        return any(check(realm, user, password) for check in self._checks)

    def check_plain(self, realm: str, user: str | None, password: str) -> bool:
        require_password(password=password)
        return self.get_plain(realm, user) == password

    def check_obfuscated(self, realm: str, user: str | None, password: str) -> bool:
        require_password(password=password)
        stored = self._read(realm, user, OBFUSCATED_SUFFIX)
        if stored is None:
            return False
        return stored == self._codec.encode(password.encode("utf-8"))

    def check_salted_hash(self, realm: str, user: str | None, password: str) -> bool:
        require_password(password=password)
        key = build_storage_key(realm=realm, user=user) + SALTED_HASH_SUFFIX
        stored = self._store.get_property(key)
        if stored is None:
            return False

        decoded = self._codec.decode(stored)
        if decoded is None or len(decoded) != SALTED_HASH_LENGTH:
            logger.debug("salted_hash_malformed key=%s", key)
            return False

        salt = decoded[:SALT_LENGTH]
        stored_digest = decoded[SALT_LENGTH:]
        try:
            candidate_digest = self._key_derivation.derive(salt, password.encode("utf-8"))
        except KeyDerivationError as exc:
            logger.warning("salted_hash_derivation_failed key=%s error=%s", key, exc)
            return False
        if len(candidate_digest) != DIGEST_LENGTH:
            logger.warning(
                "salted_hash_derivation_bad_length key=%s length=%s",
                key,
                len(candidate_digest),
            )
            return False
        return hmac.compare_digest(candidate_digest, stored_digest)

    def check_compatibility_digest(
        self,
        realm: str,
        user: str | None,
        password: str,
        *,
        subrealm: str,
    ) -> bool:
        """Check the legacy `.md5` property written by external tooling.

        Never consulted by `check`. The stored value is the digest-auth HA1 of
        `user:subrealm:password`, so a non-empty user is required.
        """

        require_password(password=password)
        if not user:
            return False
        key = build_storage_key(realm=realm, user=user) + LEGACY_MD5_SUFFIX
        stored = self._store.get_property(key)
        if stored is None:
            return False
        stored_hex = stored.strip().lower()
        if len(stored_hex) != 2 * COMPATIBILITY_DIGEST_LENGTH:
            logger.debug("legacy_md5_malformed key=%s", key)
            return False
        expected = digest.compatibility_digest_hex(user, subrealm, password)
        if expected is None:
            return False
        return hmac.compare_digest(
            expected.encode("ascii"),
            stored_hex.encode("utf-8"),
        )

    def get(self, realm: str, user: str | None) -> str | None:
        """Return the recoverable password, plain first, else obfuscated."""

        plain = self.get_plain(realm, user)
        if plain is not None:
            return plain
        return self.get_obfuscated(realm, user)

    def get_plain(self, realm: str, user: str | None) -> str | None:
        return self._read(realm, user, PLAIN_SUFFIX)

    def get_obfuscated(self, realm: str, user: str | None) -> str | None:
        key = build_storage_key(realm=realm, user=user) + OBFUSCATED_SUFFIX
        stored = self._store.get_property(key)
        if stored is None:
            return None
        decoded = self._codec.decode(stored)
        if decoded is None:
            logger.debug("obfuscated_value_malformed key=%s", key)
            return None
        try:
            return decoded.decode("utf-8")
        except UnicodeDecodeError:
            logger.debug("obfuscated_value_not_utf8 key=%s", key)
            return None

    @staticmethod
    def compatibility_digest_hex(user: str, subrealm: str, password: str) -> str | None:
        return digest.compatibility_digest_hex(user, subrealm, password)

    @staticmethod
    def raw_digest(data: bytes) -> bytes | None:
        return digest.raw_digest(data)

    def _read(self, realm: str, user: str | None, suffix: str) -> str | None:
        return self._store.get_property(build_storage_key(realm=realm, user=user) + suffix)
