"""Shared test fixtures for the pvemcp test suite."""

from typing import Any

import httpx
import pytest

from pvemcp.client import PveClient
from pvemcp.config import AppConfig
from pvemcp.core.models import AccessTier
from pvemcp.sanitizer import get_registry

BASE_URL = "https://pve.example.com:8006"
TOKEN_ID = "root@pam!mcp"
TOKEN_SECRET = "9f1c2a7e-5b3d-4e8f-a0c1-2d3e4f5a6b7c"


@pytest.fixture(autouse=True)
def clean_secret_registry():
    get_registry().clear()
    yield
    get_registry().clear()


@pytest.fixture
def config():
    return AppConfig(
        base_url=BASE_URL,
        token_id=TOKEN_ID,
        token_secret=TOKEN_SECRET,
        access_tier=AccessTier.FULL,
    )


@pytest.fixture
def env():
    return {
        "PVE_BASE_URL": BASE_URL,
        "PVE_TOKEN_ID": TOKEN_ID,
        "PVE_TOKEN_SECRET": TOKEN_SECRET,
    }


@pytest.fixture
def make_client(config):
    """Build a PveClient whose HTTP traffic goes to `handler`."""

    def _make(handler, **kwargs) -> PveClient:
        return PveClient(config, transport=httpx.MockTransport(handler), **kwargs)

    return _make


class FakeClient:
    """Stands in for PveClient in catalog tests; records every call."""

    def __init__(self, response: Any = None):
        self.response = response
        self.calls: list[tuple[str, str, dict | None]] = []

    async def request(self, method: str, path: str, body: dict | None = None) -> Any:
        self.calls.append((method, path, body))
        return self.response

    async def get(self, path: str) -> Any:
        return await self.request("GET", path)

    async def post(self, path: str, body: dict | None = None) -> Any:
        return await self.request("POST", path, body)

    async def put(self, path: str, body: dict | None = None) -> Any:
        return await self.request("PUT", path, body)

    async def delete(self, path: str) -> Any:
        return await self.request("DELETE", path)

    @property
    def last(self) -> tuple[str, str, dict | None]:
        return self.calls[-1]


@pytest.fixture
def fake_client():
    return FakeClient()
