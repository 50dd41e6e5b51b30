from __future__ import annotations

from typing import Any

from ..models import AuthPayload, UserProfile, UserProfilePatch
from .base import BaseClient


class AuthClient(BaseClient):
    def register(self, profile_data: dict[str, Any]) -> AuthPayload:
        data = self.http.request(
            "POST", "/auth/register", json_body=profile_data, module="auth", operation="register"
        )
        return self.decoder.auth_payload(data, "registration")

    def login(self, credentials: dict[str, Any]) -> AuthPayload:
        data = self.http.request(
            "POST", "/auth/login", json_body=credentials, module="auth", operation="login"
        )
        return self.decoder.auth_payload(data, "login")

    def me(self) -> UserProfile:
        data = self._request("GET", "/auth/me", module="auth", operation="me")
        return self.decoder.profile(data, "profile")

    def update_profile(self, partial: dict[str, Any]) -> UserProfilePatch:
        data = self._request(
            "PUT", "/auth/profile", json_body=partial, module="auth", operation="update_profile"
        )
        return self.decoder.profile_patch(data, "profile update")

    def user_profile(self, user_id: str) -> UserProfile:
        data = self._request("GET", f"/auth/profile/{user_id}", module="auth", operation="user_profile")
        return self.decoder.profile(data, "user profile")
