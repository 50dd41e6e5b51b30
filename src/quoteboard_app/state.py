from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from quoteboard_sdk.models import UserProfile


class SessionStatus(str, Enum):
    IDLE = "idle"
    AUTHENTICATING = "authenticating"
    AUTHENTICATED = "authenticated"
    FAILED = "failed"


@dataclass(frozen=True)
class SessionState:
    user: UserProfile | None = None
    credential: str | None = None
    status: SessionStatus = SessionStatus.IDLE
    last_error: str | None = None

    def __post_init__(self) -> None:
        has_identity = self.user is not None and self.credential is not None
        if self.status is SessionStatus.AUTHENTICATED and not has_identity:
            raise ValueError("authenticated session requires both user and credential")
        if self.status in {SessionStatus.IDLE, SessionStatus.FAILED} and (
            self.user is not None or self.credential is not None
        ):
            raise ValueError(f"{self.status.value} session must not carry user or credential")

    @property
    def is_authenticated(self) -> bool:
        return self.status is SessionStatus.AUTHENTICATED

    @property
    def is_loading(self) -> bool:
        return self.status in {SessionStatus.IDLE, SessionStatus.AUTHENTICATING}

    @classmethod
    def anonymous(cls, error: str | None = None) -> "SessionState":
        return cls(status=SessionStatus.FAILED, last_error=error)


@dataclass(frozen=True)
class OperationResult:
    success: bool
    message: str | None = None
    status_code: int | None = None

    @classmethod
    def ok(cls) -> "OperationResult":
        return cls(success=True)

    @classmethod
    def failure(cls, message: str, status_code: int | None = None) -> "OperationResult":
        return cls(success=False, message=message, status_code=status_code)
