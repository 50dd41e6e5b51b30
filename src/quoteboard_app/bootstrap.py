from __future__ import annotations

import logging

from quoteboard_sdk import ApiSession, ClientConfig, load_config

from .editor import QuoteEditor
from .feed import QuoteFeed
from .session_manager import SessionManager
from .state import SessionState
from .stats import AuthorDirectory

logger = logging.getLogger(__name__)


class QuoteboardApp:
    """Application root: builds the single session and hands it to every consumer."""

    def __init__(self, config: ClientConfig | None = None, api: ApiSession | None = None) -> None:
        self.config = config or load_config()
        self.api = api or ApiSession(self.config)
        self.session = SessionManager(self.api)
        self.editor = QuoteEditor(self.session)

    def start(self) -> SessionState:
        state = self.session.initialize()
        logger.info("app_started", extra={"status": state.status.value})
        return state

    def feed(self, *, author_id: str | None = None, page_size: int | None = None) -> QuoteFeed:
        return QuoteFeed(self.session, author_id=author_id, page_size=page_size)

    def my_quotes(self) -> QuoteFeed:
        state = self.session.require_authenticated()
        return QuoteFeed.for_author(self.session, state.user.id)

    def directory(self) -> AuthorDirectory:
        return AuthorDirectory(self.session)
