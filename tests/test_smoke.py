"""
tests.test_smoke

Minimal smoke tests to validate the relay can boot and serve its health endpoint.

Responsibilities:
- Ensure the FastAPI app starts, answers `/health` locally and tags every response.
"""

from __future__ import annotations

import re
from datetime import datetime

import pytest

from tests.conftest import running


@pytest.mark.asyncio
async def test_health_endpoint_is_local(make_app, upstream) -> None:
    app = make_app()

    async with running(app) as client:
        r = await client.get("/health")

    assert r.status_code == 200
    body = r.json()
    assert body["status"] == "ok"
    assert body["service"] == "Alpaca Proxy Server"
    assert re.fullmatch(r"\d{4}-\d\d-\d\dT\d\d:\d\d:\d\d\.\d{3}Z", body["timestamp"])
    assert datetime.fromisoformat(body["timestamp"]).tzinfo is not None
    assert upstream.requests == []


@pytest.mark.asyncio
async def test_request_id_is_echoed_or_generated(make_app) -> None:
    app = make_app()

    async with running(app) as client:
        r = await client.get("/health", headers={"x-request-id": "abc-123"})
        assert r.headers["x-request-id"] == "abc-123"

        r = await client.get("/health")
        assert r.headers["x-request-id"]


@pytest.mark.asyncio
async def test_docs_hidden_in_prod(make_app) -> None:
    app = make_app(env="prod")

    async with running(app) as client:
        r = await client.get("/openapi.json")

    assert r.status_code == 404


# --- Module Notes -----------------------------------------------------------
# Route-level forwarding behavior lives in `test_relay_routes.py`.
