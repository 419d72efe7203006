"""
Pytest fixtures - fake outbound HTTP and an in-process API client.
No test reaches the network: probes go through httpx.MockTransport.
"""

from typing import Callable, List
from urllib.parse import urlparse

import httpx
import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from sitewatch import checker, main
from sitewatch.dashboard import Dashboard
from sitewatch.sites import SITES


class FakeWeb:
    """Records outbound requests and answers them with a per-host status."""

    def __init__(self, handler: Callable):
        self.handler = handler
        self.requests: List[httpx.Request] = []

    def __call__(self, request: httpx.Request):
        self.requests.append(request)
        return self.handler(request)


def status_by_host(codes: dict, default: int = 200) -> Callable:
    def handler(request: httpx.Request):
        return httpx.Response(codes.get(request.url.host, default))
    return handler


@pytest.fixture
def fake_web(monkeypatch) -> Callable[[Callable], FakeWeb]:
    """Install a handler as the transport behind every probe client."""

    def install(handler: Callable) -> FakeWeb:
        web = FakeWeb(handler)
        monkeypatch.setattr(
            checker, "make_client",
            lambda: httpx.AsyncClient(transport=httpx.MockTransport(web)),
        )
        return web

    return install


@pytest.fixture
def fresh_dashboard(monkeypatch) -> Dashboard:
    board = Dashboard(SITES)
    monkeypatch.setattr(main, "dashboard", board)
    return board


@pytest_asyncio.fixture
async def client(fresh_dashboard):
    async with AsyncClient(
        transport=ASGITransport(app=main.app),
        base_url="http://test",
    ) as ac:
        yield ac


def host(url: str) -> str:
    return urlparse(url).netloc
