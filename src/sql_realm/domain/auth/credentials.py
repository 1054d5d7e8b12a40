"""Credential value supplied for one login attempt."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True)
class Credential:
    """Username and cleartext password pair; never persisted."""

    username: str
    password: str = field(repr=False)
