from __future__ import annotations

from typing import Mapping, NamedTuple

from .exceptions import (
    ApiError,
    AuthError,
    ConflictError,
    NotFoundError,
    PermissionError,
    RateLimitError,
    ServerError,
    ValidationError,
)

AUTH_FAILED_MESSAGE = "Authentication failed. Please login again."
ACCESS_DENIED_MESSAGE = "Access denied. You do not have permission for this action."


class _Rule(NamedTuple):
    error_class: type[ApiError]
    default_code: str = "HTTP_ERROR"
    fixed_message: str | None = None


_RULES: dict[int, _Rule] = {
    400: _Rule(ValidationError),
    401: _Rule(AuthError, "UNAUTHORIZED", AUTH_FAILED_MESSAGE),
    403: _Rule(PermissionError, "PERMISSION_DENIED", ACCESS_DENIED_MESSAGE),
    404: _Rule(NotFoundError),
    409: _Rule(ConflictError),
    422: _Rule(ValidationError),
    429: _Rule(RateLimitError),
}


def _rule_for(status_code: int) -> _Rule:
    if status_code in _RULES:
        return _RULES[status_code]
    return _Rule(ServerError) if status_code >= 500 else _Rule(ApiError)


def _server_message(payload: Mapping[str, object], status_code: int) -> str:
    for key in ("message", "error"):
        value = payload.get(key)
        if isinstance(value, str) and value.strip():
            return value
    return f"HTTP error! status: {status_code}"


def map_error(status_code: int, payload: Mapping[str, object] | None) -> ApiError:
    """Build the typed error for a non-2xx answer.

    401 and 403 always carry the fixed user-facing message; every other
    status keeps whatever the server said.
    """
    body = dict(payload or {})
    rule = _rule_for(status_code)
    return rule.error_class(
        code=str(body.get("code") or rule.default_code),
        message=rule.fixed_message or _server_message(body, status_code),
        details=body.get("details"),
        status_code=status_code,
        raw_payload=body,
    )
