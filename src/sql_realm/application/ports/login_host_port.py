"""Port for the host callbacks invoked by a login flow."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Protocol


class LoginHostPort(Protocol):
    """Host security framework callbacks."""

    def commit_authentication(self, group_names: Sequence[str]) -> None:
        """Record a successful login with the resolved group names."""
