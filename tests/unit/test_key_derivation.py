from __future__ import annotations

import hashlib

import pytest

from realm_credentials.application.ports.key_derivation_port import (
    KeyDerivationError,
    KeyDerivationUnavailableError,
)
from realm_credentials.infrastructure.security.key_derivation import (
    BcryptKeyDerivation,
    Pbkdf2KeyDerivation,
)

SALT = bytes(range(16))


def test_bcrypt_derivation_is_deterministic_and_fixed_size() -> None:
    kdf = BcryptKeyDerivation(rounds=4)

    first = kdf.derive(SALT, b"secret")
    second = kdf.derive(SALT, b"secret")

    assert first == second
    assert len(first) == 32


def test_bcrypt_derivation_depends_on_salt_and_password() -> None:
    kdf = BcryptKeyDerivation(rounds=4)
    baseline = kdf.derive(SALT, b"secret")

    assert kdf.derive(SALT, b"Secret") != baseline
    assert kdf.derive(bytes(16), b"secret") != baseline


def test_bcrypt_rejects_empty_password_as_derivation_error() -> None:
    with pytest.raises(KeyDerivationError):
        BcryptKeyDerivation(rounds=4).derive(SALT, b"")


def test_pbkdf2_matches_hashlib_reference() -> None:
    kdf = Pbkdf2KeyDerivation(iterations=10)

    assert kdf.derive(SALT, b"secret") == hashlib.pbkdf2_hmac(
        "sha256", b"secret", SALT, 10, dklen=32
    )


def test_pbkdf2_unavailable_hash_is_reported(monkeypatch: pytest.MonkeyPatch) -> None:
    def _unavailable(*args: object, **kwargs: object) -> bytes:
        raise ValueError("unsupported hash type")

    monkeypatch.setattr(hashlib, "pbkdf2_hmac", _unavailable)

    with pytest.raises(KeyDerivationUnavailableError):
        Pbkdf2KeyDerivation(iterations=10).derive(SALT, b"secret")


@pytest.mark.parametrize("salt", [b"", bytes(15), bytes(17)])
def test_wrong_salt_size_is_rejected(salt: bytes) -> None:
    with pytest.raises(KeyDerivationError):
        Pbkdf2KeyDerivation(iterations=10).derive(salt, b"secret")


def test_non_positive_work_factors_are_rejected() -> None:
    with pytest.raises(ValueError):
        BcryptKeyDerivation(rounds=0)
    with pytest.raises(ValueError):
        Pbkdf2KeyDerivation(iterations=0)
