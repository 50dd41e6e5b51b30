from __future__ import annotations

from ..models import Quote, QuotePage
from ..validation import validate_quote_content
from .base import BaseClient


class QuotesClient(BaseClient):
    def list(self, *, page: int = 1, limit: int = 10) -> QuotePage:
        data = self._request(
            "GET",
            "/quotes",
            params={"page": page, "limit": limit},
            module="quotes",
            operation="list",
        )
        return self.decoder.quote_page(data, page=page, limit=limit, operation="quotes")

    def list_by_user(self, user_id: str, *, page: int = 1, limit: int = 10) -> QuotePage:
        data = self._request(
            "GET",
            f"/quotes/user/{user_id}",
            params={"page": page, "limit": limit},
            module="quotes",
            operation="list_by_user",
        )
        return self.decoder.quote_page(data, page=page, limit=limit, operation="user quotes")

    def get(self, quote_id: str) -> Quote:
        data = self._request("GET", f"/quotes/{quote_id}", module="quotes", operation="get")
        return self.decoder.quote(data, "quote")

    def create(self, content: str) -> Quote:
        payload = {"content": validate_quote_content(content)}
        data = self._request("POST", "/quotes", json_body=payload, module="quotes", operation="create")
        return self.decoder.quote(data, "quote creation")

    def update(self, quote_id: str, content: str) -> Quote:
        payload = {"content": validate_quote_content(content)}
        data = self._request(
            "PUT", f"/quotes/{quote_id}", json_body=payload, module="quotes", operation="update"
        )
        return self.decoder.quote(data, "quote update")

    def delete(self, quote_id: str) -> None:
        self._request("DELETE", f"/quotes/{quote_id}", module="quotes", operation="delete")
