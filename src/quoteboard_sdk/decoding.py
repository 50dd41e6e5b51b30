"""Single decode step for the quotes API response contract.

Contract:

* envelope ``{"success": true, "data": X}`` unwraps to ``X``; any other object is ``X``;
* auth payload is ``{"user": {...}, "token": "..."}``;
* profile is a user object or ``{"user": {...}}``;
* quote list is a list of quotes or ``{"quotes": [...], "total": n}``;
* reaction result carries optional ``likes_count``, ``dislikes_count`` and ``userReaction``.

With ``strict=True`` a payload outside the contract raises
:class:`UnexpectedResponseError`. Otherwise list-like and partial results degrade
to a neutral value and a warning is logged. Payloads with no neutral stand-in
(credentials, single records) always raise.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, TypeVar

from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from .exceptions import UnexpectedResponseError
from .models import AuthPayload, Quote, QuotePage, ReactionResult, UserProfile, UserProfilePatch, UserStats

logger = logging.getLogger(__name__)

M = TypeVar("M", bound=BaseModel)


def _unexpected(operation: str, payload: Any, reason: str) -> UnexpectedResponseError:
    return UnexpectedResponseError(
        code="UNEXPECTED_RESPONSE",
        message=f"Invalid response format from {operation} API",
        details={"reason": reason},
        status_code=0,
        raw_payload=payload,
    )


def unwrap_envelope(payload: Any, operation: str) -> Any:
    if isinstance(payload, dict) and "success" in payload:
        if not payload.get("success"):
            raise _unexpected(operation, payload, "envelope reports success=false")
        if "data" in payload:
            return payload["data"]
    return payload


@dataclass(frozen=True)
class ResponseDecoder:
    strict: bool = True

    def auth_payload(self, payload: Any, operation: str) -> AuthPayload:
        body = unwrap_envelope(payload, operation)
        if not isinstance(body, dict) or not body.get("token") or not isinstance(body.get("user"), dict):
            logger.warning("unexpected_response_shape", extra={"operation": operation})
            raise _unexpected(operation, payload, "expected user and token")
        return self._validate(AuthPayload, body, operation, payload)

    def profile(self, payload: Any, operation: str = "profile") -> UserProfile:
        body = self._profile_body(payload, operation)
        if not isinstance(body, dict):
            raise _unexpected(operation, payload, "expected a user object")
        return self._validate(UserProfile, body, operation, payload)

    def profile_patch(self, payload: Any, operation: str = "profile update") -> UserProfilePatch:
        body = self._profile_body(payload, operation)
        if not isinstance(body, dict):
            self._degrade(operation, payload, "expected a user object")
            return UserProfilePatch()
        return self._validate(UserProfilePatch, body, operation, payload)

    def quote(self, payload: Any, operation: str = "quote") -> Quote:
        body = unwrap_envelope(payload, operation)
        if isinstance(body, dict) and isinstance(body.get("quote"), dict):
            body = body["quote"]
        if not isinstance(body, dict):
            raise _unexpected(operation, payload, "expected a quote object")
        return self._validate(Quote, body, operation, payload)

    def quote_page(self, payload: Any, *, page: int, limit: int, operation: str = "quotes") -> QuotePage:
        body = unwrap_envelope(payload, operation)
        total: Any = None
        if isinstance(body, list):
            rows = body
        elif isinstance(body, dict) and isinstance(body.get("quotes"), list):
            rows = body["quotes"]
            total = body.get("total")
        else:
            self._degrade(operation, payload, "expected a quote list")
            return QuotePage(page=page, limit=limit)

        quotes = self._validate_rows(Quote, rows, operation, payload)
        resolved_total = total if isinstance(total, int) and total >= 0 else len(quotes)
        return QuotePage(quotes=quotes, total=resolved_total, page=page, limit=limit)

    def reaction_result(self, payload: Any, operation: str = "reaction") -> ReactionResult:
        if payload is None:
            return ReactionResult()
        body = unwrap_envelope(payload, operation)
        if not isinstance(body, dict):
            self._degrade(operation, payload, "expected a reaction object")
            return ReactionResult()
        return self._validate(ReactionResult, body, operation, payload)

    def users(self, payload: Any, operation: str = "users") -> list[UserProfile]:
        body = unwrap_envelope(payload, operation)
        if isinstance(body, dict) and isinstance(body.get("users"), list):
            body = body["users"]
        if not isinstance(body, list):
            self._degrade(operation, payload, "expected a user list")
            return []
        return self._validate_rows(UserProfile, body, operation, payload)

    def user_stats(self, payload: Any, operation: str = "user stats") -> UserStats:
        body = unwrap_envelope(payload, operation)
        if not isinstance(body, dict):
            raise _unexpected(operation, payload, "expected a stats object")
        return self._validate(UserStats, body, operation, payload)

    def _profile_body(self, payload: Any, operation: str) -> Any:
        body = unwrap_envelope(payload, operation)
        if isinstance(body, dict) and isinstance(body.get("user"), dict):
            return body["user"]
        return body

    def _validate(self, model: type[M], body: dict[str, Any], operation: str, payload: Any) -> M:
        try:
            return model.model_validate(body)
        except PydanticValidationError as exc:
            logger.warning("unexpected_response_shape", extra={"operation": operation, "errors": exc.error_count()})
            raise _unexpected(operation, payload, str(exc)) from exc

    def _validate_rows(self, model: type[M], rows: list[Any], operation: str, payload: Any) -> list[M]:
        decoded: list[M] = []
        for index, row in enumerate(rows):
            try:
                decoded.append(model.model_validate(row))
            except PydanticValidationError as exc:
                if self.strict:
                    raise _unexpected(operation, payload, f"row {index}: {exc}") from exc
                logger.warning("response_row_dropped", extra={"operation": operation, "row_index": index})
        return decoded

    def _degrade(self, operation: str, payload: Any, reason: str) -> None:
        if self.strict:
            raise _unexpected(operation, payload, reason)
        logger.warning("unexpected_response_shape", extra={"operation": operation, "reason": reason})
