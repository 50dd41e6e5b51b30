from __future__ import annotations

from dataclasses import dataclass

QUOTE_MIN_LENGTH = 10
QUOTE_MAX_LENGTH = 1000


@dataclass(frozen=True)
class ValidationIssue:
    field: str
    reason: str


class ClientValidationError(ValueError):
    def __init__(self, issues: list[ValidationIssue]) -> None:
        self.issues = issues
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        if not self.issues:
            return "Validation failed"
        return self.issues[0].reason

    @property
    def field_errors(self) -> dict[str, str]:
        return {issue.field: issue.reason for issue in self.issues}


def normalize_content(value: str | None) -> str:
    return (value or "").strip()


def validate_quote_content(value: str | None) -> str:
    """Return the trimmed content or raise before any request is issued."""
    content = normalize_content(value)
    if len(content) < QUOTE_MIN_LENGTH:
        raise ClientValidationError(
            [ValidationIssue("content", f"Quote must be at least {QUOTE_MIN_LENGTH} characters")]
        )
    if len(content) > QUOTE_MAX_LENGTH:
        raise ClientValidationError(
            [ValidationIssue("content", f"Quote must be at most {QUOTE_MAX_LENGTH} characters")]
        )
    return content

