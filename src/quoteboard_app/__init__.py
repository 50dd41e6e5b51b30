from .bootstrap import QuoteboardApp
from .editor import EditorResult, QuoteEditor
from .errors import ErrorPresenter, PresentedError, present_error
from .feed import QuoteFeed
from .reactions import (
    QuoteReactionView,
    ReactionOutcome,
    ReactionReconciler,
    predict_reaction,
    reconcile_reaction,
)
from .session_manager import SessionManager
from .state import OperationResult, SessionState, SessionStatus
from .stats import AuthorDirectory, QuoteStats, aggregate_authors, author_ratios, summarize_quotes

__all__ = [
    "AuthorDirectory",
    "EditorResult",
    "ErrorPresenter",
    "OperationResult",
    "PresentedError",
    "QuoteEditor",
    "QuoteFeed",
    "QuoteReactionView",
    "QuoteStats",
    "QuoteboardApp",
    "ReactionOutcome",
    "ReactionReconciler",
    "SessionManager",
    "SessionState",
    "SessionStatus",
    "aggregate_authors",
    "author_ratios",
    "predict_reaction",
    "present_error",
    "reconcile_reaction",
    "summarize_quotes",
]
