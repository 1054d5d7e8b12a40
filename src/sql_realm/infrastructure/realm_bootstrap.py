"""Composition root building an activated realm from settings."""

from __future__ import annotations

import logging

from sql_realm.application.ports.password_hasher_port import PasswordHasherPort
from sql_realm.application.services.credential_realm import CredentialRealm
from sql_realm.config.settings import Settings, load_settings
from sql_realm.infrastructure.db.row_source import SqlAlchemyRowSource
from sql_realm.infrastructure.db.session import create_row_source_engine
from sql_realm.infrastructure.logging import configure_logging
from sql_realm.infrastructure.security.jasypt_password_hasher import JasyptStrongPasswordHasher
from sql_realm.infrastructure.security.password_hasher import BcryptPasswordHasher

logger = logging.getLogger(__name__)


def build_password_hasher(scheme: str) -> PasswordHasherPort:
    """Return the password hasher for one configured scheme name."""

    if scheme == "bcrypt":
        return BcryptPasswordHasher()
    if scheme == "jasypt-strong":
        return JasyptStrongPasswordHasher()
    raise ValueError(f"unsupported password scheme: {scheme}")


def build_row_source(settings: Settings) -> SqlAlchemyRowSource:
    """Create one engine per configured data-source reference."""

    engines = {
        reference: create_row_source_engine(
            url,
            connect_timeout_seconds=settings.connect_timeout_seconds,
            statement_timeout_seconds=settings.statement_timeout_seconds,
        )
        for reference, url in settings.data_sources.items()
    }
    return SqlAlchemyRowSource(engines)


def build_credential_realm(settings: Settings | None = None) -> CredentialRealm:
    """Configure logging, wire adapters and activate a credential realm.

    Without explicit settings the cached environment settings are used.
    """

    if settings is None:
        settings = load_settings()
    configure_logging(level=settings.log_level)
    row_source = build_row_source(settings)
    realm = CredentialRealm(
        row_source=row_source,
        password_hasher=build_password_hasher(settings.password_scheme),
    )
    realm.activate(settings.realm_properties())

    data_source_ref = realm.config.data_source_ref
    if data_source_ref not in row_source.references:
        logger.warning("realm_data_source_unregistered data_source=%s", data_source_ref)
    return realm
