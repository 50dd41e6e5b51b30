from __future__ import annotations

from pathlib import Path

import pytest

from quoteboard_sdk import ApiSession, AuthStore, ClientConfig

BASE_URL = "https://api.example.com"


@pytest.fixture
def config(tmp_path: Path) -> ClientConfig:
    return ClientConfig(
        env_name="test",
        api_base_url=BASE_URL,
        strict_decoding=True,
        data_dir=str(tmp_path),
    )


@pytest.fixture
def store(tmp_path: Path) -> AuthStore:
    return AuthStore(base_dir=tmp_path)


@pytest.fixture
def api(config: ClientConfig, store: AuthStore) -> ApiSession:
    return ApiSession(config, auth_store=store)
