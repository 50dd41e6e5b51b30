from __future__ import annotations

from ..models import UserProfile, UserStats
from .base import BaseClient


class UsersClient(BaseClient):
    def list(self) -> list[UserProfile]:
        data = self._request("GET", "/users", module="users", operation="list")
        return self.decoder.users(data, "users")

    def stats(self, user_id: str) -> UserStats:
        data = self._request("GET", f"/users/{user_id}/stats", module="users", operation="stats")
        return self.decoder.user_stats(data, "user stats")
