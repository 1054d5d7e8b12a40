"""Login flow adapting realm results into the host pass/fail/commit protocol."""

from __future__ import annotations

import logging

from sql_realm.application.ports.login_host_port import LoginHostPort
from sql_realm.application.ports.realm_port import LoginFlow
from sql_realm.application.services.credential_realm import (
    CredentialRealm,
    GroupLookupError,
    RealmNotActivatedError,
)
from sql_realm.domain.auth.credentials import Credential
from sql_realm.domain.login_state import LoginState
from sql_realm.domain.login_transitions import InvalidLoginTransitionError, assert_transition

logger = logging.getLogger(__name__)


class LoginFailedError(Exception):
    """Authentication failure signal raised to the host pipeline."""


class RealmTypeMismatchError(LoginFailedError):
    """Raised when the host configured a realm this flow cannot drive."""

    def __init__(self, *, realm_type: str) -> None:
        super().__init__(f"Realm is not a CredentialRealm: {realm_type}")
        self.realm_type = realm_type


class LoginAdapter(LoginFlow):
    """Run one login attempt against a credential realm.

    States move ``started -> authenticated -> committed`` on success; any
    failure moves to ``failed`` and raises ``LoginFailedError``. Messages
    name the username and never the password.
    """

    def __init__(
        self,
        *,
        realm: object,
        credential: Credential,
        host: LoginHostPort,
    ) -> None:
        self._realm = realm
        self._credential = credential
        self._host = host
        self._state = LoginState.STARTED

    @property
    def state(self) -> LoginState:
        return self._state

    def run(self) -> list[str]:
        """Authenticate, resolve groups and commit them to the host."""

        if self._state is not LoginState.STARTED:
            raise InvalidLoginTransitionError(
                f"Login attempt already finished in state {self._state.value}"
            )

        username = self._credential.username
        realm = self._realm
        if not isinstance(realm, CredentialRealm):
            raise self._fail(
                RealmTypeMismatchError(realm_type=type(realm).__name__),
                reason="realm_type_mismatch",
            )

        try:
            authenticated = realm.authenticate(username, self._credential.password)
        except RealmNotActivatedError as error:
            raise self._fail(
                LoginFailedError(f"Failed to authenticate {username}: realm not activated"),
                reason="realm_not_activated",
            ) from error
        if not authenticated:
            raise self._fail(
                LoginFailedError(f"Failed to authenticate {username}"),
                reason="invalid_credentials",
            )
        self._transition(LoginState.AUTHENTICATED)

        try:
            group_names = realm.group_names_of(username)
        except GroupLookupError as error:
            raise self._fail(
                LoginFailedError(str(error)),
                reason="group_lookup_failed",
            ) from error

        self._host.commit_authentication(tuple(group_names))
        self._transition(LoginState.COMMITTED)
        logger.info("login_committed username=%s groups=%s", username, len(group_names))
        return group_names

    def _transition(self, to_state: LoginState) -> None:
        assert_transition(self._state, to_state)
        self._state = to_state

    def _fail(self, error: LoginFailedError, *, reason: str) -> LoginFailedError:
        """Move to failed and return the error for the caller to raise."""

        self._transition(LoginState.FAILED)
        logger.info(
            "login_failed username=%s reason=%s",
            self._credential.username,
            reason,
        )
        return error
