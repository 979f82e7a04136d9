"""
tests.conftest

Shared fixtures for relay tests.

Responsibilities:
- Isolate tests from host environment variables.
- Provide a recording upstream stub (served through `httpx.MockTransport`).
- Run the app lifespan and expose an in-process client.
"""

from __future__ import annotations

from collections.abc import AsyncIterator, Callable
from contextlib import asynccontextmanager
from typing import Any

import httpx
import pytest
from fastapi import FastAPI

from alpaca_relay.api.app import create_app
from alpaca_relay.settings import Settings

KEY_ID = "test-key-id"
SECRET = "test-secret"


class UpstreamStub:
    """Records every outbound request and answers with `responder`."""

    def __init__(self) -> None:
        self.requests: list[httpx.Request] = []
        self.responder: Callable[[httpx.Request], httpx.Response] = lambda _: httpx.Response(
            200, json={}
        )

    def respond_with(self, status_code: int, body: Any = None, **kwargs: Any) -> None:
        if body is None:
            self.responder = lambda _: httpx.Response(status_code, **kwargs)
        else:
            self.responder = lambda _: httpx.Response(status_code, json=body, **kwargs)

    def fail_with(self, exc_factory: Callable[[httpx.Request], Exception]) -> None:
        def _raise(request: httpx.Request) -> httpx.Response:
            raise exc_factory(request)

        self.responder = _raise

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return self.responder(request)

    @property
    def last(self) -> httpx.Request:
        return self.requests[-1]


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in (
        "ALPACA_PAPER_API_KEY",
        "ALPACA_PAPER_API_SECRET",
        "REPLIT_DOMAINS",
        "RELAY_DEPLOYMENT_DOMAINS",
        "RELAY_ALPACA_KEY_ID",
        "RELAY_ALPACA_SECRET_KEY",
    ):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def upstream() -> UpstreamStub:
    return UpstreamStub()


@pytest.fixture
def make_settings() -> Callable[..., Settings]:
    def _make(**overrides: Any) -> Settings:
        values: dict[str, Any] = {
            "env": "test",
            "alpaca_key_id": KEY_ID,
            "alpaca_secret_key": SECRET,
        }
        values.update(overrides)
        return Settings(**values)

    return _make


@pytest.fixture
def make_app(
    upstream: UpstreamStub, make_settings: Callable[..., Settings]
) -> Callable[..., FastAPI]:
    def _make(**overrides: Any) -> FastAPI:
        return create_app(
            settings=make_settings(**overrides),
            transport=httpx.MockTransport(upstream),
        )

    return _make


@asynccontextmanager
async def running(app: FastAPI) -> AsyncIterator[httpx.AsyncClient]:
    # httpx ASGITransport does not drive the lifespan; enter it explicitly.
    async with app.router.lifespan_context(app):
        transport = httpx.ASGITransport(app=app)
        async with httpx.AsyncClient(transport=transport, base_url="http://test") as client:
            yield client
