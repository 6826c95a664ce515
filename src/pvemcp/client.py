"""
pvemcp Proxmox VE API Client

Async HTTP client for the Proxmox VE REST API using httpx with API
token authentication. PVE wraps JSON responses in {"data": ...}; this
client unwraps them so tool handlers get the payload directly.

Request lifecycle:
    build URL → attach token header → send (30s hard timeout)
      → non-2xx: PveError / PveAuthenticationError (sanitized)
      → non-JSON body: raw text or None
      → JSON body: unwrap {"data": ...} envelope

Network failures and timeouts both surface as PveConnectionError.
"""

from __future__ import annotations

import asyncio
import time
from typing import Any

import httpx

from pvemcp.config import AppConfig
from pvemcp.exceptions import PveAuthenticationError, PveConnectionError, PveError
from pvemcp.logging import get_logger
from pvemcp.sanitizer import SecretRegistry, get_registry

logger = get_logger("pvemcp.client")

REQUEST_TIMEOUT_SECONDS = 30.0
API_PREFIX = "/api2/json"
AUTH_STATUSES = (401, 403)
AUTH_HINT = "check PVE_TOKEN_ID and PVE_TOKEN_SECRET"


class PveClient:
    """Authenticated client for a single Proxmox VE endpoint.

    The Authorization header is computed once here and reused for every
    request. The client holds no per-call state, so concurrent calls are safe.
    """

    def __init__(
        self,
        config: AppConfig,
        transport: httpx.AsyncBaseTransport | None = None,
        timeout: float = REQUEST_TIMEOUT_SECONDS,
    ):
        self.base_url = config.base_url
        self.api_base = f"{config.base_url}{API_PREFIX}"
        self._timeout = timeout
        self._auth_header = f"PVEAPIToken={config.token_id}={config.token_secret}"
        self._http = httpx.AsyncClient(
            headers={"Authorization": self._auth_header},
            timeout=timeout,
            verify=config.verify_ssl,
            transport=transport,
        )

    async def get(self, path: str) -> Any:
        """Send a GET request and return the unwrapped payload."""
        return await self.request("GET", path)

    async def post(self, path: str, body: dict[str, Any] | None = None) -> Any:
        """Send a POST request with an optional JSON body."""
        return await self.request("POST", path, body)

    async def put(self, path: str, body: dict[str, Any] | None = None) -> Any:
        """Send a PUT request with an optional JSON body."""
        return await self.request("PUT", path, body)

    async def delete(self, path: str) -> Any:
        """Send a DELETE request and return the unwrapped payload."""
        return await self.request("DELETE", path)

    async def request(self, method: str, path: str, body: dict[str, Any] | None = None) -> Any:
        """Core request method.

        Sends the request, classifies failures and unwraps the PVE
        envelope. Every exception raised from here is a PveError whose
        message has already been sanitized.
        """
        response = await self._send(method, path, body)

        if not response.is_success:
            detail = _failure_detail(response)
            if response.status_code in AUTH_STATUSES:
                raise PveAuthenticationError(
                    f"Authentication failed -- {AUTH_HINT} ({method} {path} failed: {detail})",
                    status_code=response.status_code,
                )
            raise PveError(f"{method} {path} failed: {detail}", status_code=response.status_code)

        return _unwrap(response, method, path)

    async def validate_connection(self) -> dict[str, Any]:
        """Check connectivity and credentials with GET /version.

        Logs the PVE version on success and returns the version payload.
        """
        response = await self._send("GET", "/version")

        if response.status_code in AUTH_STATUSES:
            raise PveAuthenticationError(
                f"Authentication failed -- {AUTH_HINT}",
                status_code=response.status_code,
            )
        if not response.is_success:
            raise PveConnectionError(
                f"Connection check failed: {response.status_code} {response.reason_phrase}",
                status_code=response.status_code,
            )

        try:
            payload = response.json()
        except ValueError:
            payload = {}
        data = payload.get("data") if isinstance(payload, dict) else None
        data = data if isinstance(data, dict) else {}

        version = data.get("version") or "unknown"
        release = data.get("release") or ""
        logger.info(
            "Connected to Proxmox VE at %s (version: %s%s)",
            self.base_url,
            version,
            f", release: {release}" if release else "",
        )
        return data

    async def close(self) -> None:
        await self._http.aclose()

    async def __aenter__(self) -> PveClient:
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.close()

    async def _send(self, method: str, path: str, body: dict[str, Any] | None = None) -> httpx.Response:
        url = f"{self.api_base}{path}"
        start = time.monotonic()
        try:
            response = await asyncio.wait_for(
                self._http.request(method, url, json=body),
                timeout=self._timeout,
            )
        except (asyncio.TimeoutError, httpx.TimeoutException):
            raise PveConnectionError(
                f"Cannot reach Proxmox VE at {self.base_url}: "
                f"{method} {path} timed out after {self._timeout:g}s"
            ) from None
        except httpx.HTTPError as e:
            raise PveConnectionError(
                f"Cannot reach Proxmox VE at {self.base_url}: "
                f"{method} {path} failed: {type(e).__name__}: {e}"
            ) from None

        logger.debug(
            "%s %s -> %d",
            method,
            path,
            response.status_code,
            extra={
                "method": method,
                "path": path,
                "status_code": response.status_code,
                "duration_ms": round((time.monotonic() - start) * 1000, 1),
            },
        )
        return response


def _failure_detail(response: httpx.Response) -> str:
    """Status line plus any `field: message` pairs from an errors body."""
    detail = f"{response.status_code} {response.reason_phrase}".rstrip()
    try:
        payload = response.json()
    except ValueError:
        return detail
    errors = payload.get("errors") if isinstance(payload, dict) else None
    if isinstance(errors, dict) and errors:
        messages = ", ".join(f"{k}: {v}" for k, v in errors.items())
        detail += f" - {messages}"
    return detail


def _unwrap(response: httpx.Response, method: str, path: str) -> Any:
    content_type = response.headers.get("content-type", "")
    if "json" not in content_type:
        # Some DELETE/POST endpoints answer with an empty or plain-text body.
        return response.text or None

    try:
        payload = response.json()
    except ValueError as e:
        raise PveError(
            f"{method} {path} returned invalid JSON: {e}",
            status_code=response.status_code,
        ) from None

    if isinstance(payload, dict) and "data" in payload:
        return payload["data"]
    return payload


def create_client(
    config: AppConfig,
    registry: SecretRegistry | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
) -> PveClient:
    """Register the token credentials as secrets, then build the client."""
    if registry is None:
        registry = get_registry()
    registry.register(config.token_id)
    registry.register(config.token_secret)
    return PveClient(config, transport=transport)
