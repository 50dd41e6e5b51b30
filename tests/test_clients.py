from __future__ import annotations

import json

import pytest
import responses
from responses import matchers

from quoteboard_sdk import ApiSession
from quoteboard_sdk.clients.auth import AuthClient
from quoteboard_sdk.exceptions import NotFoundError
from quoteboard_sdk.models import Reaction


@responses.activate
def test_login_me_flow(api: ApiSession) -> None:
    responses.add(
        responses.POST,
        "https://api.example.com/auth/login",
        json={"success": True, "data": {"user": {"id": "u1", "username": "alice"}, "token": "token"}},
        status=200,
    )
    responses.add(
        responses.GET,
        "https://api.example.com/auth/me",
        json={"id": "u1", "username": "alice", "email": "alice@example.com"},
        status=200,
    )

    payload = AuthClient(http=api.http).login({"email": "alice@example.com", "password": "secret"})
    authed = AuthClient(http=api.http, access_token=payload.token)
    user = authed.me()

    assert user.email == "alice@example.com"
    assert "Authorization" not in responses.calls[0].request.headers
    assert responses.calls[1].request.headers["Authorization"] == "Bearer token"


@responses.activate
def test_update_profile_returns_patch(api: ApiSession) -> None:
    responses.add(
        responses.PUT,
        "https://api.example.com/auth/profile",
        json={"user": {"username": "alice2"}},
        status=200,
        match=[matchers.json_params_matcher({"username": "alice2"})],
    )
    api.establish("token")

    patch = api.auth_client().update_profile({"username": "alice2"})

    assert patch.username == "alice2"
    assert patch.email is None


@responses.activate
def test_quote_listing_sends_paging(api: ApiSession) -> None:
    responses.add(
        responses.GET,
        "https://api.example.com/quotes/user/u1",
        json={"quotes": [{"id": "q1", "content": "a quote here", "author_id": "u1"}], "total": 1},
        status=200,
        match=[matchers.query_param_matcher({"page": "2", "limit": "5"})],
    )

    page = api.quotes_client().list_by_user("u1", page=2, limit=5)

    assert page.total == 1
    assert page.limit == 5


@responses.activate
def test_quote_update_and_delete(api: ApiSession) -> None:
    responses.add(
        responses.PUT,
        "https://api.example.com/quotes/q1",
        json={"id": "q1", "content": "edited content", "updated_at": "2024-01-02"},
        status=200,
    )
    responses.add(responses.DELETE, "https://api.example.com/quotes/q1", json={"success": True}, status=200)
    api.establish("token")
    client = api.quotes_client()

    updated = client.update("q1", "  edited content  ")
    client.delete("q1")

    assert updated.updated_at == "2024-01-02"
    assert json.loads(responses.calls[0].request.body) == {"content": "edited content"}
    assert responses.calls[1].request.method == "DELETE"


@responses.activate
def test_quote_get_not_found(api: ApiSession) -> None:
    responses.add(responses.GET, "https://api.example.com/quotes/missing", json={"message": "Quote not found"}, status=404)

    with pytest.raises(NotFoundError, match="Quote not found"):
        api.quotes_client().get("missing")


@responses.activate
def test_reaction_routes(api: ApiSession) -> None:
    responses.add(responses.POST, "https://api.example.com/quotes/q1/like", json={"likes_count": 4}, status=200)
    responses.add(
        responses.POST,
        "https://api.example.com/quotes/q1/dislike",
        json={"dislikes_count": 1, "userReaction": "dislike"},
        status=200,
    )
    api.establish("token")
    client = api.reactions_client()

    liked = client.like("q1")
    disliked = client.dislike("q1")

    assert liked.likes_count == 4
    assert disliked.user_reaction is Reaction.DISLIKE
    with pytest.raises(ValueError):
        client.react("q1", Reaction.NONE)


@responses.activate
def test_users_directory_and_stats(api: ApiSession) -> None:
    responses.add(
        responses.GET,
        "https://api.example.com/users",
        json=[{"id": "u1", "username": "alice", "quotes_count": 2}],
        status=200,
    )
    responses.add(
        responses.GET,
        "https://api.example.com/users/u1/stats",
        json={"quoteCount": 2, "totalLikes": 5, "totalDislikes": 1},
        status=200,
    )
    client = api.users_client()

    users = client.list()
    stats = client.stats("u1")

    assert users[0].quote_count == 2
    assert stats.total_likes == 5
