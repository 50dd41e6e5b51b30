from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Callable
from urllib.parse import urljoin

import requests

from .config import ClientConfig
from .error_mapper import map_error
from .exceptions import ApiError, TransportError

logger = logging.getLogger(__name__)

UnauthorizedHook = Callable[[ApiError], None]

JsonBody = dict[str, Any] | list[Any] | None


@dataclass
class HttpClient:
    """Blocking JSON transport for the quotes API.

    Every request goes out exactly once; re-triggering a failed call is up to
    the caller. Every non-2xx answer is raised as a mapped :class:`ApiError`;
    a 401 is reported to ``on_unauthorized`` first.
    """

    config: ClientConfig
    session: requests.Session | None = None
    on_unauthorized: UnauthorizedHook | None = None

    def __post_init__(self) -> None:
        if self.session is None:
            self.session = requests.Session()

    def url_for(self, path: str) -> str:
        return urljoin(self.config.api_base_url.rstrip("/") + "/", path.lstrip("/"))

    def request(
        self,
        method: str,
        path: str,
        *,
        headers: dict[str, str] | None = None,
        json_body: dict[str, Any] | None = None,
        params: dict[str, Any] | None = None,
        module: str = "unknown",
        operation: str = "unknown",
    ) -> JsonBody:
        verb = method.upper()
        outgoing = {"Accept": "application/json", "Content-Type": "application/json", **(headers or {})}
        response = self._send(verb, path, outgoing, json_body, params)
        if response.ok:
            return self._decode_success(response)

        error = map_error(response.status_code, self._error_payload(response))
        logger.info(
            "http_error_response",
            extra={
                "method": verb,
                "path": path,
                "status_code": response.status_code,
                "code": error.code,
                "operation": f"{module}.{operation}",
            },
        )
        if response.status_code == 401 and self.on_unauthorized:
            self.on_unauthorized(error)
        raise error

    def _send(
        self,
        verb: str,
        path: str,
        headers: dict[str, str],
        json_body: dict[str, Any] | None,
        params: dict[str, Any] | None,
    ) -> requests.Response:
        if self.session is None:
            raise RuntimeError("HTTP session not initialized")
        try:
            return self.session.request(
                method=verb,
                url=self.url_for(path),
                headers=headers,
                json=json_body,
                params=params,
                timeout=(self.config.connect_timeout_seconds, self.config.read_timeout_seconds),
                verify=self.config.verify_ssl,
            )
        except requests.RequestException as exc:
            logger.warning(
                "http_transport_error",
                extra={"method": verb, "path": path, "error_type": type(exc).__name__},
            )
            raise TransportError(
                code="NETWORK_ERROR",
                message="Network error",
                details={"type": type(exc).__name__, "reason": str(exc)},
                status_code=0,
            ) from exc

    @staticmethod
    def _decode_success(response: requests.Response) -> JsonBody:
        if not response.content:
            return None
        try:
            return response.json()
        except ValueError as exc:
            raise TransportError(
                code="INVALID_JSON",
                message="Invalid JSON response from server",
                details={"content_type": response.headers.get("Content-Type")},
                status_code=response.status_code,
                raw_payload=response.text,
            ) from exc

    @staticmethod
    def _error_payload(response: requests.Response) -> dict[str, Any]:
        try:
            payload = response.json()
        except ValueError:
            return {"message": response.text} if response.text else {}
        return payload if isinstance(payload, dict) else {"details": payload}
