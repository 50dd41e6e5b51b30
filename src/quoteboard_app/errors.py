from __future__ import annotations

from dataclasses import dataclass

from quoteboard_sdk.exceptions import (
    ApiError,
    AuthError,
    ConflictError,
    ForbiddenError,
    NotFoundError,
    RateLimitError,
    ServerError,
    TransportError,
    UnexpectedResponseError,
    ValidationError,
)
from quoteboard_sdk.validation import ClientValidationError


@dataclass(frozen=True)
class PresentedError:
    category: str
    user_message: str
    code: str
    status_code: int | None = None
    safe_to_retry: bool = False
    field_errors: dict[str, str] | None = None


class ErrorPresenter:
    """Maps client failures to consistent user-facing payloads."""

    _CATEGORY_MESSAGES = {
        "authentication": "Authentication failed. Please login again.",
        "authorization": "Access denied. You do not have permission for this action.",
        "not_found": "The requested item was not found.",
        "validation": "Please review the highlighted fields and try again.",
        "conflict": "This action cannot be completed in the current state.",
        "network": "Network error",
        "unexpected_response": "Unexpected data format received from server",
        "server": "Service error. Try again shortly.",
        "unknown": "Unexpected error. Please try again.",
    }

    def present(self, error: Exception, *, not_found_message: str | None = None) -> PresentedError:
        if isinstance(error, ClientValidationError):
            return PresentedError(
                category="validation",
                user_message=str(error),
                code="CLIENT_VALIDATION",
                field_errors=error.field_errors,
            )
        if not isinstance(error, ApiError):
            return PresentedError(
                category="unknown",
                user_message=str(error) or self._CATEGORY_MESSAGES["unknown"],
                code="UNKNOWN",
            )

        category = self._categorize(error)
        if category == "not_found" and not_found_message:
            message = not_found_message
        elif category in {"authentication", "authorization", "network", "unexpected_response"}:
            message = self._CATEGORY_MESSAGES[category]
        else:
            message = error.message.strip() or self._CATEGORY_MESSAGES[category]
        return PresentedError(
            category=category,
            user_message=message,
            code=error.code,
            status_code=error.status_code,
            safe_to_retry=category in {"network", "server"},
        )

    @staticmethod
    def _categorize(error: ApiError) -> str:
        if isinstance(error, AuthError):
            return "authentication"
        if isinstance(error, ForbiddenError):
            return "authorization"
        if isinstance(error, NotFoundError):
            return "not_found"
        if isinstance(error, ValidationError):
            return "validation"
        if isinstance(error, ConflictError):
            return "conflict"
        if isinstance(error, UnexpectedResponseError):
            return "unexpected_response"
        if isinstance(error, TransportError):
            return "network"
        if isinstance(error, (ServerError, RateLimitError)):
            return "server"
        return "unknown"


_presenter = ErrorPresenter()


def present_error(error: Exception, *, not_found_message: str | None = None) -> PresentedError:
    return _presenter.present(error, not_found_message=not_found_message)
