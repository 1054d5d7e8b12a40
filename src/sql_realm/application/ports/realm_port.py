"""Capability contracts a host plugin layer adapts to its own ABI."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Protocol

from sql_realm.domain.realm_config import RealmConfig


class RealmCapability(Protocol):
    """Realm lifecycle and lookup contract."""

    def activate(self, raw_properties: Mapping[str, str | None]) -> RealmConfig:
        """Validate properties and make the realm ready."""

    def authenticate(self, username: str, password: str) -> bool:
        """Return whether the password matches the stored hash for username."""

    def group_names_of(self, username: str) -> list[str]:
        """Return group names for username in query result order."""


class LoginFlow(Protocol):
    """One login attempt from start to commit or failure."""

    def run(self) -> list[str]:
        """Run the attempt, returning committed group names or raising."""
