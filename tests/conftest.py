"""Shared test fixtures for all test modules."""

import os

import httpx
import pytest

# ── Environment overrides (must be set before importing gamerly modules) ─────
os.environ["RAWG_KEY"] = "test-rawg-key"
os.environ.pop("RAWG_API_KEY", None)
os.environ["IGDB_CLIENT_ID"] = "test-client-id"
os.environ["IGDB_CLIENT_SECRET"] = "test-client-secret"
os.environ["GAMERLY_TRANSLATE_URL"] = ""
os.environ["GAMERLY_SITE_URL"] = "https://gamerly.net"


class UpstreamStub:
    """Records outgoing requests and answers them with ``handler``."""

    def __init__(self):
        self.requests: list[httpx.Request] = []
        self.handler = lambda request: httpx.Response(404, json={"detail": "Not found."})

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return self.handler(request)

    def to_host(self, host: str) -> list[httpx.Request]:
        return [r for r in self.requests if r.url.host == host]


@pytest.fixture
def upstream(monkeypatch):
    """Route every ``httpx.AsyncClient`` created by the app through a stub."""
    stub = UpstreamStub()
    real_async_client = httpx.AsyncClient

    def client_factory(*args, **kwargs):
        kwargs["transport"] = httpx.MockTransport(stub)
        return real_async_client(*args, **kwargs)

    monkeypatch.setattr(httpx, "AsyncClient", client_factory)
    return stub


@pytest.fixture(autouse=True)
def fresh_token_cache(monkeypatch):
    """Give each test its own Twitch token cache."""
    from gamerly.services import igdb_service

    cache = igdb_service.TwitchTokenCache()
    monkeypatch.setattr(igdb_service, "token_cache", cache)
    return cache


@pytest.fixture
def client():
    from fastapi.testclient import TestClient

    from gamerly.main import app

    with TestClient(app) as test_client:
        yield test_client
