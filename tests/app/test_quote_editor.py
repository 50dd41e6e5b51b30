from __future__ import annotations

import responses

from quoteboard_app.editor import NOT_FOUND_MESSAGE, NOT_OWNER_MESSAGE, QuoteEditor
from quoteboard_app.session_manager import SessionManager


@responses.activate
def test_create_rejects_short_content_without_request(signed_in: SessionManager) -> None:
    result = QuoteEditor(signed_in).create("too short")

    assert result.success is False
    assert result.error is not None
    assert result.error.category == "validation"
    assert result.error.user_message == "Quote must be at least 10 characters"
    assert len(responses.calls) == 0


@responses.activate
def test_create_sends_trimmed_content(signed_in: SessionManager) -> None:
    responses.add(
        responses.POST,
        "https://api.example.com/quotes",
        json={"success": True, "data": {"id": "q1", "content": "ten chars!", "author_id": "u1"}},
        status=201,
    )

    result = QuoteEditor(signed_in).create("  ten chars!  ")

    assert result.success is True
    assert result.quote is not None and result.quote.id == "q1"
    assert responses.calls[0].request.headers["Authorization"] == "Bearer tok-1"


@responses.activate
def test_create_requires_login(manager: SessionManager) -> None:
    manager.initialize()

    result = QuoteEditor(manager).create("a perfectly fine quote")

    assert result.success is False
    assert result.error is not None and result.error.category == "authentication"
    assert len(responses.calls) == 0


@responses.activate
def test_load_for_edit_checks_ownership(signed_in: SessionManager) -> None:
    responses.add(
        responses.GET,
        "https://api.example.com/quotes/q1",
        json={"id": "q1", "content": "someone else's words", "author_id": "u2"},
        status=200,
    )

    result = QuoteEditor(signed_in).load_for_edit("q1")

    assert result.success is False
    assert result.quote is not None
    assert result.error is not None and result.error.user_message == NOT_OWNER_MESSAGE


@responses.activate
def test_load_for_edit_owner(signed_in: SessionManager) -> None:
    responses.add(
        responses.GET,
        "https://api.example.com/quotes/q1",
        json={"id": "q1", "content": "my own words here", "author": {"id": "u1", "username": "alice"}},
        status=200,
    )

    result = QuoteEditor(signed_in).load_for_edit("q1")

    assert result.success is True


@responses.activate
def test_load_for_edit_missing_quote(signed_in: SessionManager) -> None:
    responses.add(responses.GET, "https://api.example.com/quotes/q404", json={}, status=404)

    result = QuoteEditor(signed_in).load_for_edit("q404")

    assert result.error is not None and result.error.user_message == NOT_FOUND_MESSAGE


@responses.activate
def test_update_forbidden_maps_to_ownership_message(signed_in: SessionManager) -> None:
    responses.add(responses.PUT, "https://api.example.com/quotes/q1", json={"message": "nope"}, status=403)

    result = QuoteEditor(signed_in).update("q1", "an edited version of it")

    assert result.error is not None
    assert result.error.category == "authorization"
    assert result.error.user_message == NOT_OWNER_MESSAGE
    assert signed_in.state.is_authenticated


@responses.activate
def test_update_rejects_oversized_content(signed_in: SessionManager) -> None:
    result = QuoteEditor(signed_in).update("q1", "x" * 1001)

    assert result.error is not None and result.error.field_errors == {
        "content": "Quote must be at most 1000 characters"
    }
    assert len(responses.calls) == 0


@responses.activate
def test_delete_quote(signed_in: SessionManager) -> None:
    responses.add(responses.DELETE, "https://api.example.com/quotes/q1", status=204)

    assert QuoteEditor(signed_in).delete("q1").success is True
