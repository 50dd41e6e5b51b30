from __future__ import annotations

import logging
from dataclasses import dataclass

from quoteboard_sdk.exceptions import ApiError
from quoteboard_sdk.models import Quote
from quoteboard_sdk.validation import ClientValidationError, validate_quote_content

from .errors import PresentedError, present_error
from .session_manager import SessionManager

logger = logging.getLogger(__name__)

NOT_OWNER_MESSAGE = "You do not have permission to edit this quote"
NOT_FOUND_MESSAGE = "Quote not found"


@dataclass(frozen=True)
class EditorResult:
    success: bool
    quote: Quote | None = None
    error: PresentedError | None = None


class QuoteEditor:
    def __init__(self, session: SessionManager) -> None:
        self.session = session

    def create(self, content: str) -> EditorResult:
        try:
            cleaned = validate_quote_content(content)
            self.session.require_authenticated()
            quote = self.session.api.quotes_client().create(cleaned)
        except (ClientValidationError, ApiError) as exc:
            return self._failure("create", exc)
        logger.info("quote_created", extra={"quote_id": quote.id})
        return EditorResult(success=True, quote=quote)

    def load_for_edit(self, quote_id: str) -> EditorResult:
        try:
            state = self.session.require_authenticated()
            quote = self.session.api.quotes_client().get(quote_id)
        except ApiError as exc:
            return self._failure("load", exc)
        if state.user is None or quote.author_id != state.user.id:
            return EditorResult(
                success=False,
                quote=quote,
                error=PresentedError(
                    category="authorization",
                    user_message=NOT_OWNER_MESSAGE,
                    code="NOT_OWNER",
                    status_code=403,
                ),
            )
        return EditorResult(success=True, quote=quote)

    def update(self, quote_id: str, content: str) -> EditorResult:
        try:
            cleaned = validate_quote_content(content)
            self.session.require_authenticated()
            quote = self.session.api.quotes_client().update(quote_id, cleaned)
        except (ClientValidationError, ApiError) as exc:
            return self._failure("update", exc)
        logger.info("quote_updated", extra={"quote_id": quote.id})
        return EditorResult(success=True, quote=quote)

    def delete(self, quote_id: str) -> EditorResult:
        try:
            self.session.require_authenticated()
            self.session.api.quotes_client().delete(quote_id)
        except ApiError as exc:
            return self._failure("delete", exc)
        logger.info("quote_deleted", extra={"quote_id": quote_id})
        return EditorResult(success=True)

    @staticmethod
    def _failure(operation: str, exc: Exception) -> EditorResult:
        presented = present_error(exc, not_found_message=NOT_FOUND_MESSAGE)
        if presented.category == "authorization":
            presented = PresentedError(
                category=presented.category,
                user_message=NOT_OWNER_MESSAGE,
                code=presented.code,
                status_code=presented.status_code,
            )
        logger.info("quote_%s_failed", operation, extra={"category": presented.category, "code": presented.code})
        return EditorResult(success=False, error=presented)
