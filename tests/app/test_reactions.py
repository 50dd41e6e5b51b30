from __future__ import annotations

import json

import pytest
import requests
import responses

from quoteboard_sdk.models import Quote, Reaction, ReactionResult
from quoteboard_app.reactions import (
    QuoteReactionView,
    ReactionReconciler,
    predict_reaction,
    reconcile_reaction,
)
from quoteboard_app.session_manager import SessionManager

LIKE_URL = "https://api.example.com/quotes/q1/like"
DISLIKE_URL = "https://api.example.com/quotes/q1/dislike"


def _quote(likes: int = 3, dislikes: int = 1, reaction: str | None = None) -> Quote:
    return Quote.model_validate(
        {
            "id": "q1",
            "content": "the only quote",
            "likes_count": likes,
            "dislikes_count": dislikes,
            "userReaction": reaction,
        }
    )


def test_like_twice_returns_to_start() -> None:
    start = QuoteReactionView("q1", likes_count=5, dislikes_count=2)

    once = predict_reaction(start, Reaction.LIKE)
    twice = predict_reaction(once, Reaction.LIKE)

    assert once.likes_count == 6 and once.user_reaction is Reaction.LIKE
    assert twice == start


def test_like_then_dislike_swaps_counts() -> None:
    liked = predict_reaction(QuoteReactionView("q1", likes_count=5, dislikes_count=2), Reaction.LIKE)

    swapped = predict_reaction(liked, Reaction.DISLIKE)

    assert swapped.likes_count == liked.likes_count - 1
    assert swapped.dislikes_count == liked.dislikes_count + 1
    assert swapped.user_reaction is Reaction.DISLIKE


def test_prediction_never_goes_negative() -> None:
    inconsistent = QuoteReactionView("q1", likes_count=0, dislikes_count=0, user_reaction=Reaction.LIKE)

    cleared = predict_reaction(inconsistent, Reaction.LIKE)

    assert cleared.likes_count == 0
    assert cleared.user_reaction is Reaction.NONE


def test_prediction_rejects_none_action() -> None:
    with pytest.raises(ValueError):
        predict_reaction(QuoteReactionView("q1"), Reaction.NONE)


def test_reconcile_overwrites_only_provided_fields() -> None:
    predicted = QuoteReactionView("q1", likes_count=4, dislikes_count=1, user_reaction=Reaction.LIKE)

    merged = reconcile_reaction(predicted, ReactionResult(likes_count=10))
    cleared = reconcile_reaction(predicted, ReactionResult.model_validate({"userReaction": None}))

    assert merged == QuoteReactionView("q1", likes_count=10, dislikes_count=1, user_reaction=Reaction.LIKE)
    assert cleared.user_reaction is Reaction.NONE
    assert cleared.likes_count == 4


@responses.activate
def test_dislike_is_applied_before_request_and_confirmed(signed_in: SessionManager) -> None:
    seen_during_request: list[QuoteReactionView] = []
    reconciler = ReactionReconciler(_quote(), signed_in)

    def _callback(request):
        seen_during_request.append(reconciler.view)
        return (200, {}, json.dumps({"dislikes_count": 2}))

    responses.add_callback(responses.POST, DISLIKE_URL, callback=_callback, content_type="application/json")

    outcome = reconciler.dislike()

    optimistic = seen_during_request[0]
    assert optimistic.dislikes_count == 2
    assert optimistic.user_reaction is Reaction.DISLIKE
    assert outcome is not None and outcome.success
    assert reconciler.view == optimistic
    assert reconciler.view.likes_count == 3


@responses.activate
def test_failed_reaction_rolls_back(signed_in: SessionManager) -> None:
    responses.add(responses.POST, LIKE_URL, json={"message": "boom"}, status=500)
    reconciler = ReactionReconciler(_quote(likes=7, dislikes=2, reaction="dislike"), signed_in)
    before = reconciler.view
    changes: list[QuoteReactionView] = []
    reconciler.on_change = changes.append

    outcome = reconciler.like()

    assert outcome is not None
    assert outcome.success is False
    assert outcome.error is not None and outcome.error.category == "server"
    assert reconciler.view == before
    assert changes[0].user_reaction is Reaction.LIKE
    assert changes[-1] == before
    assert not reconciler.is_busy()


@responses.activate
def test_network_failure_rolls_back_without_retry(signed_in: SessionManager) -> None:
    responses.add(responses.POST, LIKE_URL, body=requests.ConnectionError("offline"))
    reconciler = ReactionReconciler(_quote(), signed_in)
    before = reconciler.view

    outcome = reconciler.like()

    assert outcome is not None and outcome.error is not None
    assert outcome.error.user_message == "Network error"
    assert reconciler.view == before
    assert len(responses.calls) == 1


@responses.activate
def test_server_counts_win_over_prediction(signed_in: SessionManager) -> None:
    responses.add(
        responses.POST, LIKE_URL, json={"likes_count": 9, "dislikes_count": 0, "userReaction": "like"}, status=200
    )
    updates: list[tuple[str, ReactionResult]] = []
    reconciler = ReactionReconciler(
        _quote(), signed_in, on_reaction_update=lambda quote_id, result: updates.append((quote_id, result))
    )

    reconciler.like()

    assert reconciler.view == QuoteReactionView("q1", likes_count=9, dislikes_count=0, user_reaction=Reaction.LIKE)
    assert updates[0][0] == "q1"
    assert updates[0][1].likes_count == 9


@responses.activate
def test_anonymous_user_cannot_react(manager: SessionManager) -> None:
    manager.initialize()
    reconciler = ReactionReconciler(_quote(), manager)

    assert reconciler.like() is None
    assert reconciler.view.likes_count == 3
    assert len(responses.calls) == 0
    assert reconciler.can_react() is False


@responses.activate
def test_reaction_in_flight_blocks_second_click(signed_in: SessionManager) -> None:
    reconciler = ReactionReconciler(_quote(), signed_in)
    nested: list[object] = []

    def _callback(request):
        assert reconciler.is_busy(Reaction.LIKE)
        nested.append(reconciler.dislike())
        return (200, {}, json.dumps({"likes_count": 4}))

    responses.add_callback(responses.POST, LIKE_URL, callback=_callback, content_type="application/json")

    outcome = reconciler.like()

    assert nested == [None]
    assert outcome is not None and outcome.success
    assert len(responses.calls) == 1
    assert reconciler.view.user_reaction is Reaction.LIKE
    assert not reconciler.is_busy()


@responses.activate
def test_detached_view_ignores_late_completion(signed_in: SessionManager) -> None:
    reconciler = ReactionReconciler(_quote(), signed_in)
    updates: list[str] = []
    reconciler.on_reaction_update = lambda quote_id, result: updates.append(quote_id)

    def _callback(request):
        reconciler.detach()
        return (200, {}, json.dumps({"likes_count": 50}))

    responses.add_callback(responses.POST, LIKE_URL, callback=_callback, content_type="application/json")

    reconciler.like()

    assert reconciler.attached is False
    assert reconciler.view.likes_count == 4
    assert updates == []


@responses.activate
def test_unauthorized_reaction_ends_session(signed_in: SessionManager) -> None:
    responses.add(responses.POST, LIKE_URL, json={"message": "expired"}, status=401)
    reconciler = ReactionReconciler(_quote(), signed_in)

    outcome = reconciler.like()

    assert outcome is not None and outcome.error is not None
    assert outcome.error.category == "authentication"
    assert reconciler.view.likes_count == 3
    assert signed_in.state.is_authenticated is False
    assert reconciler.like() is None
