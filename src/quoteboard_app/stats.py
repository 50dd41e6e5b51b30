from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Iterable

from quoteboard_sdk.exceptions import ApiError
from quoteboard_sdk.models import Quote, UserProfile, UserStats

from .errors import PresentedError, present_error

if TYPE_CHECKING:
    from .session_manager import SessionManager

logger = logging.getLogger(__name__)

DIRECTORY_FALLBACK_LIMIT = 100


@dataclass(frozen=True)
class QuoteStats:
    quote_count: int = 0
    total_likes: int = 0
    total_dislikes: int = 0
    average_likes: float = 0.0


def summarize_quotes(quotes: Iterable[Quote]) -> QuoteStats:
    rows = list(quotes)
    likes = sum(quote.likes_count for quote in rows)
    dislikes = sum(quote.dislikes_count for quote in rows)
    average = round(likes / len(rows), 2) if rows else 0.0
    return QuoteStats(quote_count=len(rows), total_likes=likes, total_dislikes=dislikes, average_likes=average)


@dataclass(frozen=True)
class AuthorRatios:
    average_likes_per_quote: float
    like_dislike_ratio: float | None  # None: no dislikes, ratio is unbounded
    engagement_per_quote: float
    total_activity: int


def author_ratios(stats: UserStats) -> AuthorRatios:
    engagement = stats.total_likes + stats.total_dislikes
    return AuthorRatios(
        average_likes_per_quote=round(stats.total_likes / stats.quote_count, 1) if stats.quote_count > 0 else 0.0,
        like_dislike_ratio=(
            round(stats.total_likes / stats.total_dislikes, 1) if stats.total_dislikes > 0 else None
        ),
        engagement_per_quote=round(engagement / stats.quote_count, 1) if stats.quote_count > 0 else 0.0,
        total_activity=stats.quote_count + engagement,
    )


def aggregate_authors(quotes: Iterable[Quote]) -> list[UserProfile]:
    """Unique authors in first-seen order, with counters summed over their quotes."""
    authors: dict[str, UserProfile] = {}
    for quote in quotes:
        if not quote.author_id or not quote.author_username:
            continue
        existing = authors.get(quote.author_id)
        if existing is None:
            authors[quote.author_id] = UserProfile(
                id=quote.author_id,
                username=quote.author_username,
                created_at=quote.created_at,
                quote_count=1,
                total_likes=quote.likes_count,
                total_dislikes=quote.dislikes_count,
            )
            continue
        authors[quote.author_id] = existing.model_copy(
            update={
                "quote_count": existing.quote_count + 1,
                "total_likes": existing.total_likes + quote.likes_count,
                "total_dislikes": existing.total_dislikes + quote.dislikes_count,
            }
        )
    return list(authors.values())


@dataclass(frozen=True)
class DirectoryTotals:
    authors: int
    quotes: int
    likes: int
    dislikes: int


def directory_totals(authors: Iterable[UserProfile]) -> DirectoryTotals:
    rows = list(authors)
    return DirectoryTotals(
        authors=len(rows),
        quotes=sum(author.quote_count for author in rows),
        likes=sum(author.total_likes for author in rows),
        dislikes=sum(author.total_dislikes for author in rows),
    )


@dataclass
class AuthorProfile:
    profile: UserProfile
    stats: UserStats | None = None

    @property
    def ratios(self) -> AuthorRatios | None:
        return author_ratios(self.stats) if self.stats else None


@dataclass
class AuthorDirectory:
    session: "SessionManager"
    authors: list[UserProfile] = field(default_factory=list)
    error: PresentedError | None = None
    used_fallback: bool = False

    def load(self) -> bool:
        self.error = None
        self.used_fallback = False
        try:
            self.authors = self.session.api.users_client().list()
            return True
        except ApiError as exc:
            logger.warning("users_api_failed_using_quotes", extra={"status_code": exc.status_code})

        self.used_fallback = True
        try:
            page = self.session.api.quotes_client().list(page=1, limit=DIRECTORY_FALLBACK_LIMIT)
        except ApiError as exc:
            self.authors = []
            self.error = present_error(exc)
            return False

        self.authors = aggregate_authors(page.quotes)
        if not self.authors:
            self.error = PresentedError(
                category="not_found",
                user_message="Failed to load users. Please try again.",
                code="NO_AUTHORS",
            )
            return False
        return True

    def totals(self) -> DirectoryTotals:
        return directory_totals(self.authors)

    def profile(self, user_id: str) -> AuthorProfile | PresentedError:
        try:
            profile = self.session.api.auth_client().user_profile(user_id)
        except ApiError as exc:
            logger.warning("user_profile_failed_using_quotes", extra={"user_id": user_id, "status_code": exc.status_code})
            profile_or_error = self._profile_from_quotes(user_id)
            if isinstance(profile_or_error, PresentedError):
                return profile_or_error
            profile = profile_or_error

        stats: UserStats | None
        try:
            stats = self.session.api.users_client().stats(user_id)
        except ApiError as exc:
            logger.info("user_stats_unavailable", extra={"user_id": user_id, "status_code": exc.status_code})
            stats = None
        return AuthorProfile(profile=profile, stats=stats)

    def _profile_from_quotes(self, user_id: str) -> UserProfile | PresentedError:
        try:
            page = self.session.api.quotes_client().list_by_user(user_id, page=1, limit=1)
        except ApiError as exc:
            return present_error(exc, not_found_message="User not found")
        if not page.quotes:
            return PresentedError(
                category="not_found",
                user_message="Failed to load user data. Please try again.",
                code="NO_PROFILE",
            )
        first = page.quotes[0]
        return UserProfile(
            id=user_id,
            username=first.author_username or "Unknown User",
            created_at=first.created_at,
        )
