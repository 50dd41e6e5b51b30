from __future__ import annotations

from enum import Enum
from typing import Any, List

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator, model_validator


def _id_to_str(value: Any) -> Any:
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return str(int(value))
    return value


def _count_or_zero(value: Any) -> Any:
    return 0 if value is None else value


class Reaction(str, Enum):
    NONE = "none"
    LIKE = "like"
    DISLIKE = "dislike"

    @classmethod
    def parse(cls, value: Any) -> "Reaction":
        if value is None or value == "":
            return cls.NONE
        if isinstance(value, cls):
            return value
        return cls(str(value).strip().lower())


class StoredCredential(BaseModel):
    token: str


class UserProfile(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    id: str
    username: str
    email: str | None = None
    created_at: str | None = None
    quote_count: int = Field(
        default=0, validation_alias=AliasChoices("quote_count", "quoteCount", "quotes_count")
    )
    total_likes: int = Field(
        default=0, validation_alias=AliasChoices("total_likes", "totalLikes", "likes_count")
    )
    total_dislikes: int = Field(
        default=0,
        validation_alias=AliasChoices("total_dislikes", "totalDislikes", "dislikes_count"),
    )

    @field_validator("id", mode="before")
    @classmethod
    def normalize_id(cls, value: Any) -> Any:
        return _id_to_str(value)

    @field_validator("quote_count", "total_likes", "total_dislikes", mode="before")
    @classmethod
    def normalize_counts(cls, value: Any) -> Any:
        return _count_or_zero(value)


class UserProfilePatch(BaseModel):
    """Partial profile as returned by the update endpoint; unset fields are left alone."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    id: str | None = None
    username: str | None = None
    email: str | None = None
    created_at: str | None = None
    quote_count: int | None = Field(
        default=None, validation_alias=AliasChoices("quote_count", "quoteCount", "quotes_count")
    )
    total_likes: int | None = Field(
        default=None, validation_alias=AliasChoices("total_likes", "totalLikes", "likes_count")
    )
    total_dislikes: int | None = Field(
        default=None,
        validation_alias=AliasChoices("total_dislikes", "totalDislikes", "dislikes_count"),
    )

    @field_validator("id", mode="before")
    @classmethod
    def normalize_id(cls, value: Any) -> Any:
        return _id_to_str(value)

    def apply_to(self, user: UserProfile) -> UserProfile:
        changes = {key: value for key, value in self.model_dump(exclude_unset=True).items() if value is not None}
        return user.model_copy(update=changes)


class AuthPayload(BaseModel):
    user: UserProfile
    token: str


class Quote(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    id: str
    content: str
    author_id: str | None = None
    author_username: str | None = Field(
        default=None, validation_alias=AliasChoices("author_username", "author_name")
    )
    created_at: str | None = None
    updated_at: str | None = None
    likes_count: int = Field(default=0, validation_alias=AliasChoices("likes_count", "likes"))
    dislikes_count: int = Field(default=0, validation_alias=AliasChoices("dislikes_count", "dislikes"))
    user_reaction: Reaction = Field(
        default=Reaction.NONE, validation_alias=AliasChoices("userReaction", "user_reaction")
    )

    @model_validator(mode="before")
    @classmethod
    def flatten_author(cls, data: Any) -> Any:
        if isinstance(data, dict) and isinstance(data.get("author"), dict):
            author = data["author"]
            data = dict(data)
            data.setdefault("author_id", author.get("id"))
            if not data.get("author_username") and not data.get("author_name"):
                data["author_username"] = author.get("username")
        return data

    @field_validator("id", "author_id", mode="before")
    @classmethod
    def normalize_ids(cls, value: Any) -> Any:
        return _id_to_str(value)

    @field_validator("likes_count", "dislikes_count", mode="before")
    @classmethod
    def normalize_counts(cls, value: Any) -> Any:
        return _count_or_zero(value)

    @field_validator("user_reaction", mode="before")
    @classmethod
    def parse_reaction(cls, value: Any) -> Reaction:
        return Reaction.parse(value)

    @property
    def display_author(self) -> str:
        return self.author_username or "Anonymous"


class QuotePage(BaseModel):
    quotes: List[Quote] = Field(default_factory=list)
    total: int = 0
    page: int = 1
    limit: int = 10


class ReactionResult(BaseModel):
    """Server verdict after a like/dislike; omitted fields stay as predicted."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    likes_count: int | None = None
    dislikes_count: int | None = None
    user_reaction: Reaction | None = Field(
        default=None, validation_alias=AliasChoices("userReaction", "user_reaction")
    )

    @field_validator("user_reaction", mode="before")
    @classmethod
    def parse_reaction(cls, value: Any) -> Reaction:
        return Reaction.parse(value)

    @property
    def provides_reaction(self) -> bool:
        return "user_reaction" in self.model_fields_set


class UserStats(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    quote_count: int = Field(default=0, validation_alias=AliasChoices("quote_count", "quoteCount"))
    total_likes: int = Field(default=0, validation_alias=AliasChoices("total_likes", "totalLikes"))
    total_dislikes: int = Field(
        default=0, validation_alias=AliasChoices("total_dislikes", "totalDislikes")
    )
