"""Wire credential services from runtime settings."""

from __future__ import annotations

import logging

from realm_credentials.application.ports.config_store_port import ConfigStorePort
from realm_credentials.application.ports.key_derivation_port import KeyDerivationPort
from realm_credentials.application.services.credential_encoder import CredentialEncoder
from realm_credentials.application.services.credential_verifier import CredentialVerifier
from realm_credentials.config.settings import Settings, load_settings
from realm_credentials.infrastructure.config_store import (
    MappingConfigStore,
    PropertiesFileConfigStore,
)
from realm_credentials.infrastructure.logging import configure_logging
from realm_credentials.infrastructure.security.key_derivation import (
    BcryptKeyDerivation,
    Pbkdf2KeyDerivation,
)
from realm_credentials.infrastructure.security.text_codec import Base64TextCodec

logger = logging.getLogger(__name__)


def build_key_derivation(settings: Settings) -> KeyDerivationPort:
    """Select the configured key-derivation adapter."""

    if settings.kdf == "pbkdf2":
        return Pbkdf2KeyDerivation(iterations=settings.pbkdf2_iterations)
    return BcryptKeyDerivation(rounds=settings.kdf_rounds)


def build_config_store(settings: Settings) -> ConfigStorePort:
    """Open the configured properties file, or an empty in-memory store."""

    if settings.config_file is None:
        return MappingConfigStore()
    return PropertiesFileConfigStore(settings.config_file)


def build_credential_verifier(
    settings: Settings,
    *,
    store: ConfigStorePort | None = None,
) -> CredentialVerifier:
    """Build a verifier over the given store or the configured one."""

    resolved_store = store if store is not None else build_config_store(settings)
    logger.info(
        "credential_verifier_built kdf=%s store=%s",
        settings.kdf,
        type(resolved_store).__name__,
    )
    return CredentialVerifier(
        store=resolved_store,
        key_derivation=build_key_derivation(settings),
        codec=Base64TextCodec(altchars=settings.b64_altchars),
    )


def build_credential_encoder(settings: Settings) -> CredentialEncoder:
    """Build an encoder whose output the configured verifier accepts."""

    return CredentialEncoder(
        key_derivation=build_key_derivation(settings),
        codec=Base64TextCodec(altchars=settings.b64_altchars),
    )


def load_credential_verifier(*, store: ConfigStorePort | None = None) -> CredentialVerifier:
    """Configure process logging from cached settings and build the verifier."""

    settings = load_settings()
    configure_logging(level=settings.log_level)
    return build_credential_verifier(settings, store=store)
