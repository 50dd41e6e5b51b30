from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Callable

from .auth_store import AuthStore
from .clients.auth import AuthClient
from .clients.quotes import QuotesClient
from .clients.reactions import ReactionsClient
from .clients.users import UsersClient
from .config import ClientConfig
from .decoding import ResponseDecoder
from .exceptions import ApiError
from .http_client import HttpClient

logger = logging.getLogger(__name__)

UnauthorizedListener = Callable[[ApiError], None]


@dataclass
class ApiSession:
    """Process-wide handle over the transport and the persisted credential.

    Any 401 seen by the transport clears the stored credential, whichever
    client issued the request, and then notifies the registered listeners.
    """

    config: ClientConfig
    auth_store: AuthStore | None = None
    http: HttpClient | None = None
    token: str | None = None
    _unauthorized_listeners: list[UnauthorizedListener] = field(default_factory=list)

    def __post_init__(self) -> None:
        self.auth_store = self.auth_store or AuthStore(base_dir=self.config.data_dir)
        self.http = self.http or HttpClient(config=self.config)
        self.http.on_unauthorized = self._handle_unauthorized
        self.decoder = ResponseDecoder(strict=self.config.strict_decoding)
        if not self.token:
            self.token = self.auth_store.load()

    def auth_client(self) -> AuthClient:
        return AuthClient(http=self.http, access_token=self.token, decoder=self.decoder)

    def quotes_client(self) -> QuotesClient:
        return QuotesClient(http=self.http, access_token=self.token, decoder=self.decoder)

    def reactions_client(self) -> ReactionsClient:
        return ReactionsClient(http=self.http, access_token=self.token, decoder=self.decoder)

    def users_client(self) -> UsersClient:
        return UsersClient(http=self.http, access_token=self.token, decoder=self.decoder)

    def stored_token(self) -> str | None:
        return self.auth_store.load()

    def establish(self, token: str) -> None:
        self.token = token
        self.auth_store.save(token)

    def clear(self) -> None:
        self.token = None
        self.auth_store.clear()

    def on_unauthorized(self, listener: UnauthorizedListener) -> Callable[[], None]:
        self._unauthorized_listeners.append(listener)

        def _remove() -> None:
            if listener in self._unauthorized_listeners:
                self._unauthorized_listeners.remove(listener)

        return _remove

    def _handle_unauthorized(self, error: ApiError) -> None:
        logger.warning("credential_rejected", extra={"code": error.code})
        self.clear()
        for listener in list(self._unauthorized_listeners):
            listener(error)
