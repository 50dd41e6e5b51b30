from .auth import AuthClient
from .quotes import QuotesClient
from .reactions import ReactionsClient
from .users import UsersClient

__all__ = [
    "AuthClient",
    "QuotesClient",
    "ReactionsClient",
    "UsersClient",
]
