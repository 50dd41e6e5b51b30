"""Optimistic like/dislike handling for a single rendered quote.

``react`` runs in three phases: predict, commit the request, then reconcile
with the server verdict or roll back to the snapshot taken before the
prediction was applied.
"""

from __future__ import annotations

import dataclasses
import logging
import threading
from dataclasses import dataclass
from typing import Callable

from quoteboard_sdk.exceptions import ApiError
from quoteboard_sdk.models import Quote, Reaction, ReactionResult

from .errors import PresentedError, present_error
from .session_manager import SessionManager

logger = logging.getLogger(__name__)

ViewListener = Callable[["QuoteReactionView"], None]
ReactionUpdateCallback = Callable[[str, ReactionResult], None]


@dataclass(frozen=True)
class QuoteReactionView:
    quote_id: str
    likes_count: int = 0
    dislikes_count: int = 0
    user_reaction: Reaction = Reaction.NONE

    @classmethod
    def from_quote(cls, quote: Quote) -> "QuoteReactionView":
        return cls(
            quote_id=quote.id,
            likes_count=max(0, quote.likes_count),
            dislikes_count=max(0, quote.dislikes_count),
            user_reaction=quote.user_reaction,
        )

    @property
    def has_liked(self) -> bool:
        return self.user_reaction is Reaction.LIKE

    @property
    def has_disliked(self) -> bool:
        return self.user_reaction is Reaction.DISLIKE


def predict_reaction(view: QuoteReactionView, action: Reaction) -> QuoteReactionView:
    """Toggle/swap prediction: same reaction clears it, the other one swaps."""
    if action is Reaction.NONE:
        raise ValueError("reaction action must be LIKE or DISLIKE")

    likes = view.likes_count
    dislikes = view.dislikes_count
    if view.user_reaction is action:
        if action is Reaction.LIKE:
            likes -= 1
        else:
            dislikes -= 1
        next_reaction = Reaction.NONE
    else:
        if view.user_reaction is Reaction.LIKE:
            likes -= 1
        elif view.user_reaction is Reaction.DISLIKE:
            dislikes -= 1
        if action is Reaction.LIKE:
            likes += 1
        else:
            dislikes += 1
        next_reaction = action

    return dataclasses.replace(
        view,
        likes_count=max(0, likes),
        dislikes_count=max(0, dislikes),
        user_reaction=next_reaction,
    )


def reconcile_reaction(view: QuoteReactionView, result: ReactionResult) -> QuoteReactionView:
    changes: dict[str, object] = {}
    if result.likes_count is not None:
        changes["likes_count"] = max(0, result.likes_count)
    if result.dislikes_count is not None:
        changes["dislikes_count"] = max(0, result.dislikes_count)
    if result.provides_reaction:
        changes["user_reaction"] = result.user_reaction or Reaction.NONE
    return dataclasses.replace(view, **changes)


@dataclass(frozen=True)
class ReactionOutcome:
    view: QuoteReactionView
    success: bool
    error: PresentedError | None = None


class ReactionReconciler:
    def __init__(
        self,
        quote: Quote | QuoteReactionView,
        session: SessionManager,
        *,
        on_change: ViewListener | None = None,
        on_reaction_update: ReactionUpdateCallback | None = None,
    ) -> None:
        self.session = session
        self.on_change = on_change
        self.on_reaction_update = on_reaction_update
        self._view = quote if isinstance(quote, QuoteReactionView) else QuoteReactionView.from_quote(quote)
        self._lock = threading.Lock()
        self._in_flight: Reaction | None = None
        self._attached = True

    @property
    def view(self) -> QuoteReactionView:
        return self._view

    @property
    def attached(self) -> bool:
        return self._attached

    def is_busy(self, action: Reaction | None = None) -> bool:
        if action is None:
            return self._in_flight is not None
        return self._in_flight is action

    def can_react(self) -> bool:
        return self.session.state.is_authenticated and not self.is_busy()

    def detach(self) -> None:
        self._attached = False

    def like(self) -> ReactionOutcome | None:
        return self.react(Reaction.LIKE)

    def dislike(self) -> ReactionOutcome | None:
        return self.react(Reaction.DISLIKE)

    def react(self, action: Reaction) -> ReactionOutcome | None:
        if action is Reaction.NONE:
            raise ValueError("reaction action must be LIKE or DISLIKE")
        if not self.session.state.is_authenticated:
            return None
        if not self._begin(action):
            logger.info("reaction_ignored_in_flight", extra={"quote_id": self._view.quote_id})
            return None

        try:
            snapshot = self._view
            self._apply(predict_reaction(snapshot, action))
            try:
                result = self.session.api.reactions_client().react(snapshot.quote_id, action)
            except ApiError as exc:
                logger.warning(
                    "reaction_rollback",
                    extra={"quote_id": snapshot.quote_id, "status_code": exc.status_code, "code": exc.code},
                )
                self._apply(snapshot)
                return ReactionOutcome(view=snapshot, success=False, error=present_error(exc))

            reconciled = reconcile_reaction(self._view, result)
            self._apply(reconciled)
            if self._attached and self.on_reaction_update:
                self.on_reaction_update(snapshot.quote_id, result)
            return ReactionOutcome(view=reconciled, success=True)
        finally:
            self._end()

    def _apply(self, view: QuoteReactionView) -> None:
        if not self._attached:
            return
        self._view = view
        if self.on_change:
            self.on_change(view)

    def _begin(self, action: Reaction) -> bool:
        with self._lock:
            if self._in_flight is not None:
                return False
            self._in_flight = action
            return True

    def _end(self) -> None:
        with self._lock:
            self._in_flight = None
