from __future__ import annotations

from ..models import Reaction, ReactionResult
from .base import BaseClient


class ReactionsClient(BaseClient):
    def like(self, quote_id: str) -> ReactionResult:
        return self.react(quote_id, Reaction.LIKE)

    def dislike(self, quote_id: str) -> ReactionResult:
        return self.react(quote_id, Reaction.DISLIKE)

    def react(self, quote_id: str, action: Reaction) -> ReactionResult:
        if action is Reaction.NONE:
            raise ValueError("reaction action must be LIKE or DISLIKE")
        data = self._request(
            "POST", f"/quotes/{quote_id}/{action.value}", module="reactions", operation=action.value
        )
        return self.decoder.reaction_result(data, "reaction")
