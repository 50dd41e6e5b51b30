from __future__ import annotations

import pytest
import responses

from quoteboard_sdk import ApiSession
from quoteboard_app.session_manager import SessionManager

ALICE = {"id": "u1", "username": "alice", "email": "alice@example.com"}


@pytest.fixture
def manager(api: ApiSession) -> SessionManager:
    return SessionManager(api)


@pytest.fixture
def signed_in(manager: SessionManager) -> SessionManager:
    manager.api.establish("tok-1")
    with responses.RequestsMock() as rsps:
        rsps.add(responses.GET, "https://api.example.com/auth/me", json=ALICE, status=200)
        manager.initialize()
    assert manager.state.is_authenticated
    return manager
