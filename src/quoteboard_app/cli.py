from __future__ import annotations

import argparse
import json
import os
from typing import Any

from quoteboard_sdk import load_config
from quoteboard_sdk.exceptions import ApiError
from quoteboard_sdk.models import Reaction

from .bootstrap import QuoteboardApp
from .errors import PresentedError, present_error
from .logging_setup import configure_logging
from .state import OperationResult


def _emit(payload: Any) -> None:
    print(json.dumps(payload, indent=2, default=str))


def _fail(error: PresentedError) -> None:
    _emit({"error": error.code, "category": error.category, "message": error.user_message})
    raise SystemExit(1)


def _check(result: OperationResult) -> None:
    if not result.success:
        _emit({"error": "OPERATION_FAILED", "message": result.message, "status_code": result.status_code})
        raise SystemExit(1)


def _app(args: argparse.Namespace) -> QuoteboardApp:
    app = QuoteboardApp(load_config(args.env_file))
    app.start()
    return app


def cmd_login(args: argparse.Namespace) -> None:
    app = _app(args)
    _check(app.session.login({"email": args.email, "password": args.password}))
    _emit({"user": app.session.state.user.model_dump()})


def cmd_register(args: argparse.Namespace) -> None:
    app = _app(args)
    _check(app.session.register({"username": args.username, "email": args.email, "password": args.password}))
    _emit({"user": app.session.state.user.model_dump()})


def cmd_logout(args: argparse.Namespace) -> None:
    app = _app(args)
    app.session.logout()
    _emit({"status": app.session.state.status.value})


def cmd_whoami(args: argparse.Namespace) -> None:
    state = _app(args).session.state
    _emit(
        {
            "status": state.status.value,
            "user": state.user.model_dump() if state.user else None,
            "error": state.last_error,
        }
    )


def cmd_feed(args: argparse.Namespace) -> None:
    app = _app(args)
    feed = app.feed(author_id=args.author)
    if not feed.load_first():
        _fail(feed.error)
    while feed.page < args.page and feed.load_more():
        pass
    if feed.error:
        _fail(feed.error)
    _emit(
        {
            "page": feed.page,
            "has_more": feed.has_more,
            "summary": feed.summary().__dict__,
            "quotes": [quote.model_dump() for quote in feed.quotes],
        }
    )


def cmd_post(args: argparse.Namespace) -> None:
    result = _app(args).editor.create(args.content)
    if not result.success:
        _fail(result.error)
    _emit(result.quote.model_dump())


def cmd_edit(args: argparse.Namespace) -> None:
    editor = _app(args).editor
    loaded = editor.load_for_edit(args.quote_id)
    if not loaded.success:
        _fail(loaded.error)
    result = editor.update(args.quote_id, args.content)
    if not result.success:
        _fail(result.error)
    _emit(result.quote.model_dump())


def cmd_delete(args: argparse.Namespace) -> None:
    result = _app(args).editor.delete(args.quote_id)
    if not result.success:
        _fail(result.error)
    _emit({"deleted": args.quote_id})


def _react(args: argparse.Namespace, action: Reaction) -> None:
    app = _app(args)
    try:
        app.session.require_authenticated()
        quote = app.api.quotes_client().get(args.quote_id)
    except ApiError as exc:
        _fail(present_error(exc, not_found_message="Quote not found"))
    outcome = app.feed().reconciler_for(quote).react(action)
    if outcome is None:
        _emit({"error": "REACTION_SKIPPED", "message": "Reaction already in progress"})
        raise SystemExit(1)
    if not outcome.success:
        _fail(outcome.error)
    _emit(
        {
            "quote_id": outcome.view.quote_id,
            "likes_count": outcome.view.likes_count,
            "dislikes_count": outcome.view.dislikes_count,
            "user_reaction": outcome.view.user_reaction.value,
        }
    )


def cmd_like(args: argparse.Namespace) -> None:
    _react(args, Reaction.LIKE)


def cmd_dislike(args: argparse.Namespace) -> None:
    _react(args, Reaction.DISLIKE)


def cmd_authors(args: argparse.Namespace) -> None:
    directory = _app(args).directory()
    if not directory.load():
        _fail(directory.error)
    _emit(
        {
            "totals": directory.totals().__dict__,
            "from_quotes": directory.used_fallback,
            "authors": [author.model_dump() for author in directory.authors],
        }
    )


def cmd_author(args: argparse.Namespace) -> None:
    found = _app(args).directory().profile(args.user_id)
    if isinstance(found, PresentedError):
        _fail(found)
    ratios = found.ratios
    _emit(
        {
            "profile": found.profile.model_dump(),
            "stats": found.stats.model_dump() if found.stats else None,
            "ratios": ratios.__dict__ if ratios else None,
        }
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="quoteboard", description="Quoteboard command line client")
    parser.add_argument("--env-file", default=None)
    parser.add_argument("--log-level", default=os.getenv("QUOTEBOARD_LOG_LEVEL", "WARNING"))
    subparsers = parser.add_subparsers(dest="command", required=True)

    login_parser = subparsers.add_parser("login")
    login_parser.add_argument("--email", required=True)
    login_parser.add_argument("--password", required=True)
    login_parser.set_defaults(func=cmd_login)

    register_parser = subparsers.add_parser("register")
    register_parser.add_argument("--username", required=True)
    register_parser.add_argument("--email", required=True)
    register_parser.add_argument("--password", required=True)
    register_parser.set_defaults(func=cmd_register)

    subparsers.add_parser("logout").set_defaults(func=cmd_logout)
    subparsers.add_parser("whoami").set_defaults(func=cmd_whoami)

    feed_parser = subparsers.add_parser("feed")
    feed_parser.add_argument("--page", type=int, default=1)
    feed_parser.add_argument("--author", default=None)
    feed_parser.set_defaults(func=cmd_feed)

    post_parser = subparsers.add_parser("post")
    post_parser.add_argument("content")
    post_parser.set_defaults(func=cmd_post)

    edit_parser = subparsers.add_parser("edit")
    edit_parser.add_argument("quote_id")
    edit_parser.add_argument("content")
    edit_parser.set_defaults(func=cmd_edit)

    delete_parser = subparsers.add_parser("delete")
    delete_parser.add_argument("quote_id")
    delete_parser.set_defaults(func=cmd_delete)

    for name, func in (("like", cmd_like), ("dislike", cmd_dislike)):
        react_parser = subparsers.add_parser(name)
        react_parser.add_argument("quote_id")
        react_parser.set_defaults(func=func)

    subparsers.add_parser("authors").set_defaults(func=cmd_authors)

    author_parser = subparsers.add_parser("author")
    author_parser.add_argument("user_id")
    author_parser.set_defaults(func=cmd_author)
    return parser


def main(argv: list[str] | None = None) -> None:
    args = build_parser().parse_args(argv)
    configure_logging(args.log_level)
    try:
        args.func(args)
    except ApiError as exc:
        _fail(present_error(exc))


if __name__ == "__main__":
    main()
