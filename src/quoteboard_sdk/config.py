from __future__ import annotations

import os
from dataclasses import dataclass

from dotenv import load_dotenv

DEFAULT_API_BASE_URL = "http://localhost:5002/api"


class ConfigError(ValueError):
    pass


@dataclass(frozen=True)
class ClientConfig:
    env_name: str = "dev"
    api_base_url: str = DEFAULT_API_BASE_URL
    connect_timeout_seconds: float = 5.0
    read_timeout_seconds: float = 15.0
    verify_ssl: bool = True
    strict_decoding: bool = True
    data_dir: str | None = None
    page_size: int = 10


def _coerce_bool(value: str | None, default: bool) -> bool:
    if value is None or not value.strip():
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


def _read_float(name: str, default: str) -> float:
    raw = os.getenv(name, default)
    try:
        return float(raw)
    except (TypeError, ValueError) as exc:
        raise ConfigError(f"Invalid {name}: expected a number, got {raw!r}") from exc


def _read_int(name: str, default: str) -> int:
    raw = os.getenv(name, default)
    try:
        return int(raw)
    except (TypeError, ValueError) as exc:
        raise ConfigError(f"Invalid {name}: expected an integer, got {raw!r}") from exc


def _validate(condition: bool, message: str) -> None:
    if not condition:
        raise ConfigError(message)


def load_config(env_file: str | None = None) -> ClientConfig:
    """Load config from environment with optional .env override."""
    load_dotenv(env_file)

    env_name = (os.getenv("QUOTEBOARD_ENV") or "dev").strip()
    env_key = env_name.upper()

    api_base_url = (
        (os.getenv(f"QUOTEBOARD_API_BASE_URL_{env_key}") or "").strip()
        or (os.getenv("QUOTEBOARD_API_BASE_URL") or "").strip()
        or DEFAULT_API_BASE_URL
    )
    _validate(
        api_base_url.startswith(("http://", "https://")),
        f"Invalid QUOTEBOARD_API_BASE_URL: expected an http(s) URL, got {api_base_url!r}",
    )

    timeout_seconds = _read_float("QUOTEBOARD_TIMEOUT_SECONDS", "10")
    _validate(
        timeout_seconds > 0,
        f"Invalid QUOTEBOARD_TIMEOUT_SECONDS: expected > 0, got {timeout_seconds}",
    )

    connect_timeout_seconds = _read_float(
        "QUOTEBOARD_CONNECT_TIMEOUT_SECONDS", str(min(timeout_seconds, 5.0))
    )
    _validate(
        connect_timeout_seconds > 0,
        (
            "Invalid QUOTEBOARD_CONNECT_TIMEOUT_SECONDS: "
            f"expected > 0, got {connect_timeout_seconds}"
        ),
    )

    read_timeout_seconds = _read_float(
        "QUOTEBOARD_READ_TIMEOUT_SECONDS",
        str(max(timeout_seconds, connect_timeout_seconds)),
    )
    _validate(
        read_timeout_seconds > 0,
        f"Invalid QUOTEBOARD_READ_TIMEOUT_SECONDS: expected > 0, got {read_timeout_seconds}",
    )

    page_size = _read_int("QUOTEBOARD_PAGE_SIZE", "10")
    _validate(page_size >= 1, f"Invalid QUOTEBOARD_PAGE_SIZE: expected >= 1, got {page_size}")

    # Contract violations fail loudly while developing, degrade elsewhere.
    strict_decoding = _coerce_bool(
        os.getenv("QUOTEBOARD_STRICT_DECODING"), env_name.lower() == "dev"
    )

    return ClientConfig(
        env_name=env_name,
        api_base_url=api_base_url.rstrip("/"),
        connect_timeout_seconds=connect_timeout_seconds,
        read_timeout_seconds=read_timeout_seconds,
        verify_ssl=_coerce_bool(os.getenv("QUOTEBOARD_VERIFY_SSL"), True),
        strict_decoding=strict_decoding,
        data_dir=(os.getenv("QUOTEBOARD_DATA_DIR") or "").strip() or None,
        page_size=page_size,
    )
