"""Salted key-derivation adapters backing the stored salted-hash format."""

from __future__ import annotations

import hashlib

import bcrypt

from realm_credentials.application.ports.key_derivation_port import (
    KeyDerivationError,
    KeyDerivationPort,
    KeyDerivationUnavailableError,
)
from realm_credentials.domain.credentials import DIGEST_LENGTH, SALT_LENGTH

DEFAULT_BCRYPT_ROUNDS = 50
DEFAULT_PBKDF2_ITERATIONS = 1000


def _require_salt(salt: bytes) -> None:
    if len(salt) != SALT_LENGTH:
        raise KeyDerivationError(f"salt must be {SALT_LENGTH} bytes, got {len(salt)}")


class BcryptKeyDerivation(KeyDerivationPort):
    """Key derivation adapter using bcrypt-pbkdf."""

    def __init__(self, *, rounds: int = DEFAULT_BCRYPT_ROUNDS) -> None:
        if rounds <= 0:
            raise ValueError("rounds must be positive")
        self._rounds = rounds

    def derive(self, salt: bytes, password: bytes) -> bytes:
        _require_salt(salt)
        try:
            return bcrypt.kdf(
                password=password,
                salt=salt,
                desired_key_bytes=DIGEST_LENGTH,
                rounds=self._rounds,
                ignore_few_rounds=True,
            )
        except ValueError as exc:
            # bcrypt rejects empty passwords
            raise KeyDerivationError("bcrypt kdf rejected input") from exc


class Pbkdf2KeyDerivation(KeyDerivationPort):
    """Key derivation adapter using PBKDF2-HMAC-SHA256."""

    def __init__(self, *, iterations: int = DEFAULT_PBKDF2_ITERATIONS) -> None:
        if iterations <= 0:
            raise ValueError("iterations must be positive")
        self._iterations = iterations

    def derive(self, salt: bytes, password: bytes) -> bytes:
        _require_salt(salt)
        try:
            return hashlib.pbkdf2_hmac(
                "sha256",
                password,
                salt,
                self._iterations,
                dklen=DIGEST_LENGTH,
            )
        except ValueError as exc:
            raise KeyDerivationUnavailableError("sha256 is not available for pbkdf2") from exc
