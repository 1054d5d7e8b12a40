"""Transition guards for the login attempt state machine."""

from __future__ import annotations

from typing import Final

from sql_realm.domain.login_state import LoginState


class InvalidLoginTransitionError(ValueError):
    """Raised when an attempted login state transition is not allowed."""


_ALLOWED_TRANSITIONS: Final[dict[LoginState, frozenset[LoginState]]] = {
    LoginState.STARTED: frozenset({LoginState.AUTHENTICATED, LoginState.FAILED}),
    LoginState.AUTHENTICATED: frozenset({LoginState.COMMITTED, LoginState.FAILED}),
    LoginState.COMMITTED: frozenset(),
    LoginState.FAILED: frozenset(),
}


def can_transition(from_state: LoginState, to_state: LoginState) -> bool:
    """Return whether the transition is valid for the login state machine."""

    return to_state in _ALLOWED_TRANSITIONS[from_state]


def assert_transition(from_state: LoginState, to_state: LoginState) -> None:
    """Assert a transition is allowed, else raise a domain error."""

    if not can_transition(from_state, to_state):
        raise InvalidLoginTransitionError(
            f"Invalid login state transition: {from_state.value} -> {to_state.value}"
        )
