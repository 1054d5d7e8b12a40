"""SQL-backed credential realm: activation, password verification, group lookup."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from types import MappingProxyType
from typing import Final

from sql_realm.application.ports.password_hasher_port import PasswordHasherPort
from sql_realm.application.ports.realm_port import RealmCapability
from sql_realm.application.ports.row_source_port import RowSourceError, RowSourcePort
from sql_realm.domain.realm_config import (
    REQUIRED_PROPERTIES,
    RealmConfig,
    RealmState,
    parse_realm_config,
)

logger = logging.getLogger(__name__)

AUTH_TYPE: Final = "sql-credential-realm"


class RealmNotActivatedError(RuntimeError):
    """Raised when a lookup is attempted before successful activation."""

    def __init__(self) -> None:
        super().__init__("realm has not been activated")


class GroupLookupError(LookupError):
    """Raised when group names cannot be resolved for one user."""

    def __init__(self, *, username: str) -> None:
        super().__init__(f"Failed to get groups for user {username}")
        self.username = username


class CredentialRealm(RealmCapability):
    """Verify passwords and resolve groups through configured SQL queries.

    Configuration is held as one immutable ``RealmConfig`` reference. Lookups
    read that reference once per call, so concurrent attempts never observe a
    half-applied activation.
    """

    def __init__(
        self,
        *,
        row_source: RowSourcePort,
        password_hasher: PasswordHasherPort,
    ) -> None:
        self._row_source = row_source
        self._password_hasher = password_hasher
        self._config: RealmConfig | None = None

    @property
    def auth_type(self) -> str:
        return AUTH_TYPE

    @property
    def state(self) -> RealmState:
        if self._config is None:
            return RealmState.UNINITIALIZED
        return RealmState.READY

    @property
    def config(self) -> RealmConfig:
        """Return active configuration or raise when not activated."""

        config = self._config
        if config is None:
            raise RealmNotActivatedError()
        return config

    @property
    def properties(self) -> Mapping[str, str]:
        """Return active configuration keyed by property name, for audit."""

        if self._config is None:
            return MappingProxyType({})
        return MappingProxyType(self._config.as_properties())

    def activate(self, raw_properties: Mapping[str, str | None]) -> RealmConfig:
        """Validate required properties and make the realm ready.

        Stops at the first missing property. Nothing is applied on failure.
        """

        logger.info("realm_activation_started auth_type=%s", AUTH_TYPE)
        config = parse_realm_config(raw_properties)
        activated = config.as_properties()
        for name in REQUIRED_PROPERTIES:
            logger.info("realm_property_activated name=%s value=%s", name, activated[name])
        self._config = config
        logger.info("realm_activation_finished state=%s", self.state)
        return config

    def authenticate(self, username: str, password: str) -> bool:
        """Return whether password matches the stored hash for username.

        Unknown users, wrong passwords and row-source failures all return
        ``False``. The failure category is only visible in logs.
        """

        config = self.config
        try:
            with self._row_source.connection(config.data_source_ref) as connection:
                logger.info(
                    "password_query_started data_source=%s username=%s",
                    config.data_source_ref,
                    username,
                )
                rows = connection.fetch_rows(config.password_query, username)
        except RowSourceError as error:
            logger.error(
                "authentication_failed category=infrastructure_failure username=%s error=%s",
                username,
                error,
            )
            return False

        if not rows:
            logger.info(
                "authentication_failed category=credential_failure "
                "reason=password_not_found username=%s",
                username,
            )
            return False

        password_hash = rows[0][0]
        if password_hash is None:
            logger.info(
                "authentication_failed category=credential_failure "
                "reason=password_null username=%s",
                username,
            )
            return False

        authenticated = self._password_hasher.verify_password(
            password=password,
            password_hash=str(password_hash),
        )
        if not authenticated:
            logger.info(
                "authentication_failed category=credential_failure "
                "reason=password_mismatch username=%s",
                username,
            )
            return False

        logger.info("authentication_succeeded username=%s", username)
        return True

    def group_names_of(self, username: str) -> list[str]:
        """Return non-null group names for username in query result order."""

        config = self.config
        try:
            with self._row_source.connection(config.data_source_ref) as connection:
                logger.info(
                    "groups_query_started data_source=%s username=%s",
                    config.data_source_ref,
                    username,
                )
                rows = connection.fetch_rows(config.groups_query, username)
        except RowSourceError as error:
            logger.error("group_lookup_failed username=%s error=%s", username, error)
            raise GroupLookupError(username=username) from error

        group_names = [str(row[0]) for row in rows if row[0] is not None]
        logger.info("groups_resolved username=%s count=%s", username, len(group_names))
        return group_names
