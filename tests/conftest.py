from __future__ import annotations

import asyncio
from typing import Any, Dict, List, Optional, Tuple

import pytest
from fastapi.testclient import TestClient

from hostinger_mcp.catalog import default_catalog
from hostinger_mcp.config import Config
from hostinger_mcp.dispatcher import Dispatcher
from hostinger_mcp.errors import HostingerAPIError
from hostinger_mcp.handlers import HANDLERS
from hostinger_mcp.main import create_app
from hostinger_mcp.protocol import McpProtocol


class FakeHostingerClient:
    """Records calls; returns canned responses keyed by (method, path)."""

    def __init__(self, responses: Optional[Dict[Tuple[str, str], Any]] = None,
                 delays: Optional[Dict[str, float]] = None):
        self.responses = responses or {}
        self.delays = delays or {}
        self.calls: List[Tuple[str, str, Optional[Dict[str, Any]]]] = []

    async def invoke(self, method: str, path: str, body: Optional[Dict[str, Any]] = None) -> Any:
        self.calls.append((method, path, body))
        for fragment, delay in self.delays.items():
            if fragment in path:
                await asyncio.sleep(delay)
        resp = self.responses.get((method, path), {"ok": True})
        if isinstance(resp, Exception):
            raise resp
        return resp


class CollectingWriter:
    def __init__(self) -> None:
        self.lines: List[bytes] = []

    def write(self, data: bytes) -> None:
        self.lines.append(data)

    async def drain(self) -> None:
        return None


@pytest.fixture
def cfg() -> Config:
    return Config.from_env({"HOSTINGER_API_KEY": "test-token"})


@pytest.fixture
def fake_api() -> FakeHostingerClient:
    return FakeHostingerClient(
        responses={
            ("GET", "/v1/domains"): {"data": [{"id": "d1", "domain": "example.com"}]},
            ("GET", "/v1/vps/broken"): HostingerAPIError("API request failed: HTTP 404: not found", status=404),
        }
    )


@pytest.fixture
def dispatcher(fake_api: FakeHostingerClient) -> Dispatcher:
    return Dispatcher(default_catalog(), HANDLERS, fake_api)


@pytest.fixture
def protocol(dispatcher: Dispatcher, cfg: Config) -> McpProtocol:
    return McpProtocol(dispatcher, cfg)


@pytest.fixture
def client(protocol: McpProtocol, cfg: Config) -> TestClient:
    return TestClient(create_app(protocol, cfg))
