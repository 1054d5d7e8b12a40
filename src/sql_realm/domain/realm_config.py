"""Realm activation properties and the immutable configuration they produce."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from enum import StrEnum
from typing import Final

JAAS_CONTEXT_PROPERTY: Final = "jaas-context"
SQL_JNDI_PROPERTY: Final = "sql-jndi"
SQL_PASSWORD_PROPERTY: Final = "sql-password"
SQL_GROUPS_PROPERTY: Final = "sql-groups"

# Activation reads properties in this order and stops at the first missing one.
REQUIRED_PROPERTIES: Final[tuple[str, ...]] = (
    JAAS_CONTEXT_PROPERTY,
    SQL_JNDI_PROPERTY,
    SQL_PASSWORD_PROPERTY,
    SQL_GROUPS_PROPERTY,
)


class RealmState(StrEnum):
    """Realm lifecycle states."""

    UNINITIALIZED = "uninitialized"
    READY = "ready"


class RealmConfigurationError(ValueError):
    """Raised when a required realm property is missing at activation."""

    def __init__(self, *, property_name: str) -> None:
        super().__init__(f"Property '{property_name}' not set")
        self.property_name = property_name


@dataclass(frozen=True)
class RealmConfig:
    """Activated realm configuration, read-only for the realm lifetime."""

    jaas_context: str
    data_source_ref: str
    password_query: str
    groups_query: str

    def as_properties(self) -> dict[str, str]:
        """Return configuration keyed by activation property names."""

        return {
            JAAS_CONTEXT_PROPERTY: self.jaas_context,
            SQL_JNDI_PROPERTY: self.data_source_ref,
            SQL_PASSWORD_PROPERTY: self.password_query,
            SQL_GROUPS_PROPERTY: self.groups_query,
        }


def require_property(properties: Mapping[str, str | None], property_name: str) -> str:
    """Return one property value or raise naming the missing property."""

    value = properties.get(property_name)
    if value is None:
        raise RealmConfigurationError(property_name=property_name)
    return value


def parse_realm_config(properties: Mapping[str, str | None]) -> RealmConfig:
    """Build realm configuration, failing on the first missing property."""

    values = [require_property(properties, name) for name in REQUIRED_PROPERTIES]
    jaas_context, data_source_ref, password_query, groups_query = values
    return RealmConfig(
        jaas_context=jaas_context,
        data_source_ref=data_source_ref,
        password_query=password_query,
        groups_query=groups_query,
    )
