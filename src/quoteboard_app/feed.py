from __future__ import annotations

import logging

from quoteboard_sdk.exceptions import ApiError
from quoteboard_sdk.models import Quote, QuotePage, ReactionResult

from .errors import PresentedError, present_error
from .reactions import ReactionReconciler, ViewListener
from .session_manager import SessionManager
from .stats import QuoteStats, summarize_quotes
from .view_state import ViewState, resolve_state

logger = logging.getLogger(__name__)


class QuoteFeed:
    """Page-increment quote listing, either global or scoped to one author."""

    def __init__(
        self,
        session: SessionManager,
        *,
        author_id: str | None = None,
        page_size: int | None = None,
    ) -> None:
        self.session = session
        self.author_id = author_id
        self.page_size = page_size or session.api.config.page_size
        self.quotes: list[Quote] = []
        self.page = 0
        self.total = 0
        self.has_more = False
        self.is_loading = False
        self.error: PresentedError | None = None

    @classmethod
    def for_author(cls, session: SessionManager, author_id: str, *, page_size: int | None = None) -> "QuoteFeed":
        return cls(session, author_id=author_id, page_size=page_size)

    def load_first(self) -> bool:
        return self._load(1, replace=True)

    def load_more(self) -> bool:
        if self.is_loading or not self.has_more:
            return False
        return self._load(self.page + 1, replace=False)

    def retry(self) -> bool:
        return self.load_first()

    def apply_reaction_update(self, quote_id: str, result: ReactionResult) -> None:
        changes: dict[str, object] = {}
        if result.likes_count is not None:
            changes["likes_count"] = max(0, result.likes_count)
        if result.dislikes_count is not None:
            changes["dislikes_count"] = max(0, result.dislikes_count)
        if result.provides_reaction and result.user_reaction is not None:
            changes["user_reaction"] = result.user_reaction
        if not changes:
            return
        self.quotes = [
            quote.model_copy(update=changes) if quote.id == quote_id else quote for quote in self.quotes
        ]

    def remove(self, quote_id: str) -> PresentedError | None:
        try:
            self.session.api.quotes_client().delete(quote_id)
        except ApiError as exc:
            logger.warning("quote_delete_failed", extra={"quote_id": quote_id, "status_code": exc.status_code})
            return present_error(exc, not_found_message="Quote not found")
        self.quotes = [quote for quote in self.quotes if quote.id != quote_id]
        self.total = max(0, self.total - 1)
        return None

    def reconciler_for(self, quote: Quote, *, on_change: ViewListener | None = None) -> ReactionReconciler:
        return ReactionReconciler(
            quote,
            self.session,
            on_change=on_change,
            on_reaction_update=self.apply_reaction_update,
        )

    def summary(self) -> QuoteStats:
        return summarize_quotes(self.quotes)

    def view_state(self) -> ViewState:
        return resolve_state(
            is_loading=self.is_loading,
            error=self.error.user_message if self.error else None,
            has_data=bool(self.quotes),
            connection_lost=self.error is not None and self.error.category == "network",
        )

    def _fetch(self, page: int) -> QuotePage:
        client = self.session.api.quotes_client()
        if self.author_id:
            return client.list_by_user(self.author_id, page=page, limit=self.page_size)
        return client.list(page=page, limit=self.page_size)

    def _load(self, page: int, *, replace: bool) -> bool:
        self.is_loading = True
        self.error = None
        try:
            result = self._fetch(page)
        except ApiError as exc:
            logger.warning(
                "feed_load_failed",
                extra={"page": page, "author_id": self.author_id, "status_code": exc.status_code},
            )
            self.error = present_error(exc)
            return False
        finally:
            self.is_loading = False

        self.page = page
        self.quotes = list(result.quotes) if replace else self.quotes + list(result.quotes)
        self.total = result.total
        self.has_more = len(result.quotes) == self.page_size
        return True
