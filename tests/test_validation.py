from __future__ import annotations

import json

import pytest
import responses

from quoteboard_sdk import ApiSession
from quoteboard_sdk.validation import (
    QUOTE_MAX_LENGTH,
    ClientValidationError,
    validate_quote_content,
)


def test_content_shorter_than_minimum_is_rejected() -> None:
    with pytest.raises(ClientValidationError) as exc_info:
        validate_quote_content("x" * 9)

    assert str(exc_info.value) == "Quote must be at least 10 characters"
    assert exc_info.value.field_errors == {"content": "Quote must be at least 10 characters"}


def test_content_is_trimmed_before_length_check() -> None:
    with pytest.raises(ClientValidationError):
        validate_quote_content("   short    ")
    assert validate_quote_content("  ten chars!  ") == "ten chars!"


def test_content_bounds_are_inclusive() -> None:
    assert validate_quote_content("x" * 10) == "x" * 10
    assert len(validate_quote_content("x" * QUOTE_MAX_LENGTH)) == QUOTE_MAX_LENGTH
    with pytest.raises(ClientValidationError, match="at most 1000"):
        validate_quote_content("x" * (QUOTE_MAX_LENGTH + 1))


def test_none_content_is_rejected() -> None:
    with pytest.raises(ClientValidationError):
        validate_quote_content(None)


@responses.activate
def test_short_quote_never_reaches_the_network(api: ApiSession) -> None:
    with pytest.raises(ClientValidationError):
        api.quotes_client().create("x" * 9)

    assert len(responses.calls) == 0


@responses.activate
def test_minimum_length_quote_is_sent(api: ApiSession) -> None:
    responses.add(
        responses.POST,
        "https://api.example.com/quotes",
        json={"id": "q1", "content": "x" * 10, "author_id": "u1"},
        status=201,
    )

    quote = api.quotes_client().create("x" * 10)

    assert quote.content == "x" * 10
    assert len(responses.calls) == 1
    assert json.loads(responses.calls[0].request.body) == {"content": "x" * 10}
