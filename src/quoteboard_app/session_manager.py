from __future__ import annotations

import dataclasses
import logging
import threading
from typing import Any, Callable

from quoteboard_sdk import ApiSession
from quoteboard_sdk.exceptions import ApiError, AuthError, NotAuthenticatedError
from quoteboard_sdk.models import AuthPayload

from .logging_setup import log_action
from .state import OperationResult, SessionState, SessionStatus

logger = logging.getLogger(__name__)
audit_logger = logging.getLogger("quoteboard.audit")

SessionListener = Callable[[SessionState], None]

TOKEN_INVALID_MESSAGE = "Token expired or invalid"
SESSION_EXPIRED_MESSAGE = "Session expired. Please login again."
AUTH_IN_PROGRESS_MESSAGE = "Authentication already in progress"


class SessionManager:
    """Owns the authenticated-user state machine.

    One instance per process, built by the application root and handed to
    every consumer. State is an immutable :class:`SessionState`; it only
    changes through the operations below, and listeners see every change.
    Network-facing operations never raise: failures come back as an
    :class:`OperationResult` and as ``last_error`` on the state.
    """

    def __init__(self, api: ApiSession) -> None:
        self.api = api
        self._state = SessionState()
        self._listeners: list[SessionListener] = []
        self._lock = threading.Lock()
        self._auth_in_flight = False
        api.on_unauthorized(self._handle_unauthorized)

    @property
    def state(self) -> SessionState:
        return self._state

    def subscribe(self, listener: SessionListener) -> Callable[[], None]:
        self._listeners.append(listener)

        def _unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return _unsubscribe

    def initialize(self) -> SessionState:
        token = self.api.stored_token()
        if not token:
            self.api.token = None
            self._set(SessionState.anonymous())
            return self._state

        self.api.token = token
        self._set(SessionState(status=SessionStatus.AUTHENTICATING))
        try:
            user = self.api.auth_client().me()
        except ApiError as exc:
            logger.warning("token_validation_failed", extra={"status_code": exc.status_code, "code": exc.code})
            self.api.clear()
            self._set(SessionState.anonymous(TOKEN_INVALID_MESSAGE))
            return self._state
        except Exception:
            logger.exception("token_validation_crashed")
            self.api.clear()
            self._set(SessionState.anonymous(TOKEN_INVALID_MESSAGE))
            return self._state

        self._set(SessionState(user=user, credential=token, status=SessionStatus.AUTHENTICATED))
        logger.info("session_restored", extra={"user_id": user.id})
        return self._state

    def login(self, credentials: dict[str, Any]) -> OperationResult:
        return self._authenticate("login", credentials, "Login failed")

    def register(self, profile_data: dict[str, Any]) -> OperationResult:
        return self._authenticate("register", profile_data, "Registration failed")

    def logout(self) -> None:
        user_id = self._state.user.id if self._state.user else None
        self.api.clear()
        self._set(SessionState.anonymous())
        log_action(audit_logger, "auth", "logout", user_id, "success")

    def update_profile(self, partial: dict[str, Any]) -> OperationResult:
        try:
            patch = self.api.auth_client().update_profile(partial)
        except ApiError as exc:
            logger.warning("profile_update_failed", extra={"status_code": exc.status_code, "code": exc.code})
            if isinstance(exc, AuthError):
                self._reset_anonymous(exc.message)
            return OperationResult.failure(exc.message or "Failed to update profile", exc.status_code)

        current = self._state
        if current.is_authenticated and current.user is not None:
            self._set(dataclasses.replace(current, user=patch.apply_to(current.user)))
        return OperationResult.ok()

    def refresh(self) -> OperationResult:
        token = self.api.stored_token()
        if not token:
            self.api.clear()
            self._set(SessionState.anonymous(SESSION_EXPIRED_MESSAGE))
            return OperationResult.failure("No token found")

        self.api.token = token
        try:
            user = self.api.auth_client().me()
        except ApiError as exc:
            logger.warning("session_refresh_failed", extra={"status_code": exc.status_code, "code": exc.code})
            self.api.clear()
            self._set(SessionState.anonymous(SESSION_EXPIRED_MESSAGE))
            return OperationResult.failure(exc.message, exc.status_code)

        self._set(SessionState(user=user, credential=token, status=SessionStatus.AUTHENTICATED))
        return OperationResult.ok()

    def clear_error(self) -> None:
        if self._state.last_error is not None:
            self._set(dataclasses.replace(self._state, last_error=None))

    def require_authenticated(self) -> SessionState:
        if not self._state.is_authenticated:
            raise NotAuthenticatedError(
                code="NOT_AUTHENTICATED",
                message="Please login to continue",
                details=None,
                status_code=401,
            )
        return self._state

    def _authenticate(self, operation: str, body: dict[str, Any], fallback_message: str) -> OperationResult:
        if not self._begin_auth():
            logger.info("auth_double_submit_ignored", extra={"operation": operation})
            return OperationResult.failure(AUTH_IN_PROGRESS_MESSAGE)
        try:
            self.api.token = None
            self._set(SessionState(status=SessionStatus.AUTHENTICATING))
            client = self.api.auth_client()
            try:
                payload: AuthPayload = client.login(body) if operation == "login" else client.register(body)
            except ApiError as exc:
                message = exc.message or fallback_message
                self.api.clear()
                self._set(SessionState.anonymous(message))
                log_action(audit_logger, "auth", operation, None, "failure", exc.status_code)
                return OperationResult.failure(message, exc.status_code)

            self.api.establish(payload.token)
            self._set(
                SessionState(user=payload.user, credential=payload.token, status=SessionStatus.AUTHENTICATED)
            )
            log_action(audit_logger, "auth", operation, payload.user.id, "success")
            return OperationResult.ok()
        finally:
            self._end_auth()

    def _begin_auth(self) -> bool:
        with self._lock:
            if self._auth_in_flight:
                return False
            self._auth_in_flight = True
            return True

    def _end_auth(self) -> None:
        with self._lock:
            self._auth_in_flight = False

    def _handle_unauthorized(self, error: ApiError) -> None:
        # The transport already dropped the stored credential.
        if self._state.is_authenticated:
            self._reset_anonymous(error.message)

    def _reset_anonymous(self, message: str | None) -> None:
        self.api.clear()
        if self._state.status is not SessionStatus.FAILED or self._state.last_error != message:
            self._set(SessionState.anonymous(message))

    def _set(self, state: SessionState) -> None:
        previous = self._state
        self._state = state
        if previous.status is not state.status:
            logger.info("session_transition", extra={"from_status": previous.status.value, "to_status": state.status.value})
        for listener in list(self._listeners):
            try:
                listener(state)
            except Exception:
                logger.exception("session_listener_failed", extra={"to_status": state.status.value})
