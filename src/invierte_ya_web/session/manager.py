"""Session lifecycle for one browser session.

States::

    UNAUTHENTICATED -> AUTHENTICATING -> AUTHENTICATED -> UNAUTHENTICATED

The manager is the only writer of the stored token (through the API
client) and of the cached user profile. Pages receive it explicitly and
read ``user`` / ``is_authenticated`` from it; they never touch the token.

When the API client reports a rejected token, the manager ends the
session and notifies its session-ended listeners (the web app navigates to
the login page). Ending is idempotent: concurrent rejections end the
session once. A token rejected while restoring or logging in is discarded
without notifying anyone; the caller sees the error instead. A failed
profile refresh ends the session as well.

Profile listeners run after every successful profile load, so widgets
that show the balance follow the server without re-rendering the page.
"""

from __future__ import annotations

from collections.abc import Callable
from enum import Enum

from invierte_ya_web.api_client import InvierteYaAPIClient
from invierte_ya_web.domain.entities import RegistrationForm, User
from invierte_ya_web.exceptions import (
    AuthenticationError,
    InvierteYaError,
    SessionExpiredError,
)
from invierte_ya_web.logging_config import bind_context, get_logger, unbind_context

logger = get_logger(__name__)

SessionEndedCallback = Callable[[str], None]
ProfileCallback = Callable[[User], None]

CREDENTIALS_REJECTED = "Credenciales inválidas"


class SessionState(str, Enum):
    UNAUTHENTICATED = "unauthenticated"
    AUTHENTICATING = "authenticating"
    AUTHENTICATED = "authenticated"


class SessionManager:
    def __init__(self, api: InvierteYaAPIClient) -> None:
        self._api = api
        self._state = SessionState.UNAUTHENTICATED
        self._user: User | None = None
        self._listeners: list[SessionEndedCallback] = []
        self._profile_listeners: list[ProfileCallback] = []
        self._unsubscribe = api.on_session_invalid(self._on_session_invalid)

    @property
    def api(self) -> InvierteYaAPIClient:
        return self._api

    @property
    def state(self) -> SessionState:
        return self._state

    @property
    def user(self) -> User | None:
        return self._user

    @property
    def is_authenticated(self) -> bool:
        return (
            self._state is SessionState.AUTHENTICATED
            and self._user is not None
            and self._api.is_authenticated()
        )

    @property
    def is_loading(self) -> bool:
        return self._state is SessionState.AUTHENTICATING

    def add_session_ended_listener(self, callback: SessionEndedCallback) -> None:
        """``callback(reason)`` runs once each time an active session ends."""
        self._listeners.append(callback)

    def add_profile_listener(self, callback: ProfileCallback) -> None:
        """``callback(user)`` runs after every successful profile load."""
        self._profile_listeners.append(callback)

    def close(self) -> None:
        self._unsubscribe()
        self._listeners.clear()
        self._profile_listeners.clear()

    async def restore(self) -> bool:
        """Re-validate a token persisted by an earlier visit.

        Returns whether the session ended up authenticated. Any failure
        discards the token.
        """
        if not self._api.is_authenticated():
            self._state = SessionState.UNAUTHENTICATED
            return False
        self._state = SessionState.AUTHENTICATING
        try:
            await self._load_profile()
        except InvierteYaError as e:
            logger.warning("session_restore_failed", error=e.error_code)
            self._discard()
            return False
        logger.info("session_restored")
        return True

    async def login(self, email: str, password: str) -> User:
        self._state = SessionState.AUTHENTICATING
        try:
            await self._api.login(email, password)
            user = await self._load_profile()
        except SessionExpiredError as e:
            # a fresh token refused by /users/me; there was no session to expire
            logger.info("login_failed", error=e.error_code)
            self._discard()
            raise AuthenticationError(CREDENTIALS_REJECTED) from e
        except InvierteYaError as e:
            logger.info("login_failed", error=e.error_code)
            self._discard()
            raise
        logger.info("login_succeeded", user_id=user.user_id)
        return user

    async def register(self, form: RegistrationForm) -> User:
        self._state = SessionState.AUTHENTICATING
        try:
            await self._api.register(form)
            user = await self._load_profile()
        except SessionExpiredError as e:
            logger.info("registration_failed", error=e.error_code)
            self._discard()
            raise AuthenticationError(CREDENTIALS_REJECTED) from e
        except InvierteYaError as e:
            logger.info("registration_failed", error=e.error_code)
            self._discard()
            raise
        logger.info("registration_succeeded", user_id=user.user_id)
        return user

    def logout(self) -> None:
        logger.info("logout")
        self._end_session("logout")

    async def refresh_profile(self) -> User:
        """Re-fetch the profile; the balance shown anywhere comes from here.

        Raises AuthenticationError when there is no token. Any failure ends
        the session before the error propagates.
        """
        if not self._api.is_authenticated():
            raise AuthenticationError()
        try:
            return await self._load_profile()
        except InvierteYaError as e:
            logger.warning("profile_refresh_failed", error=e.error_code)
            self._end_session("refresh_failed")
            raise

    async def refresh_after_change(self) -> User | None:
        """Re-fetch the profile after a mutation the server already committed.

        Returns None when the fetch failed; the session has ended by then.
        """
        try:
            return await self.refresh_profile()
        except InvierteYaError:
            return None

    async def _load_profile(self) -> User:
        user = await self._api.get_profile()
        self._user = user
        self._state = SessionState.AUTHENTICATED
        bind_context(user_id=user.user_id)
        for callback in list(self._profile_listeners):
            callback(user)
        return user

    def _discard(self) -> None:
        self._api.logout()
        self._user = None
        unbind_context("user_id")
        self._state = SessionState.UNAUTHENTICATED

    def _on_session_invalid(self) -> None:
        self._end_session("expired")

    def _end_session(self, reason: str) -> None:
        was_active = self._state is SessionState.AUTHENTICATED
        self._discard()
        if not was_active:
            return
        logger.info("session_ended", reason=reason)
        for callback in list(self._listeners):
            callback(reason)
