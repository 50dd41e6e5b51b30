from .auth_store import AuthStore
from .config import ClientConfig, ConfigError, load_config
from .decoding import ResponseDecoder
from .exceptions import (
    ApiError,
    AuthError,
    ForbiddenError,
    NotAuthenticatedError,
    NotFoundError,
    TransportError,
    UnauthorizedError,
    UnexpectedResponseError,
    ValidationError,
)
from .http_client import HttpClient
from .models import (
    AuthPayload,
    Quote,
    QuotePage,
    Reaction,
    ReactionResult,
    UserProfile,
    UserProfilePatch,
    UserStats,
)
from .session import ApiSession
from .validation import ClientValidationError, ValidationIssue, validate_quote_content

__version__ = "0.1.0"

__all__ = [
    "ApiError",
    "ApiSession",
    "AuthError",
    "AuthPayload",
    "AuthStore",
    "ClientConfig",
    "ClientValidationError",
    "ConfigError",
    "ForbiddenError",
    "HttpClient",
    "NotAuthenticatedError",
    "NotFoundError",
    "Quote",
    "QuotePage",
    "Reaction",
    "ReactionResult",
    "ResponseDecoder",
    "TransportError",
    "UnauthorizedError",
    "UnexpectedResponseError",
    "UserProfile",
    "UserProfilePatch",
    "UserStats",
    "ValidationError",
    "ValidationIssue",
    "load_config",
    "validate_quote_content",
]
