"""Login attempt state enum."""

from __future__ import annotations

from enum import StrEnum


class LoginState(StrEnum):
    """States of one login attempt driven by the login adapter."""

    STARTED = "started"
    AUTHENTICATED = "authenticated"
    COMMITTED = "committed"
    FAILED = "failed"
