"""
alpaca_relay.api.deps

FastAPI dependency wiring for the API layer.

Responsibilities:
- Provide dependency functions for settings and the shared HTTP client.
- Resolve the requested trading mode into a bound brokerage client.
- Parse relayed request bodies.
- Encapsulate app.state access patterns.
"""

from __future__ import annotations

import json
from typing import Any

import httpx
from fastapi import Depends, HTTPException, Query, Request
from starlette.status import HTTP_400_BAD_REQUEST

from alpaca_relay.brokerage.client import BrokerageClient
from alpaca_relay.brokerage.modes import TradingMode, UpstreamTarget, resolve_target
from alpaca_relay.settings import Settings


def settings_dep(request: Request) -> Settings:
    # Set once in `alpaca_relay.api.app.create_app`.
    return request.app.state.settings  # type: ignore[attr-defined]


def http_client(request: Request) -> httpx.AsyncClient:
    # Created during app lifespan startup and closed on shutdown.
    return request.app.state.http  # type: ignore[attr-defined]


def trading_mode(
    mode: str | None = Query(default=None, description="paper (default) or live"),
) -> TradingMode:
    return TradingMode.parse(mode)


def upstream_target(
    request: Request,
    mode: TradingMode = Depends(trading_mode),
) -> UpstreamTarget:
    return resolve_target(request.app.state.targets, mode)  # type: ignore[attr-defined]


def brokerage_client(
    target: UpstreamTarget = Depends(upstream_target),
    http: httpx.AsyncClient = Depends(http_client),
    settings: Settings = Depends(settings_dep),
) -> BrokerageClient:
    return BrokerageClient(target=target, http=http, data_feed=settings.data_feed)


def _is_json_media_type(content_type: str) -> bool:
    media_type = content_type.split(";", 1)[0].strip().lower()
    return media_type == "application/json" or media_type.endswith("+json")


async def json_body(request: Request) -> Any:
    # Bodies that are not declared as JSON, and empty JSON bodies, become `{}`.
    if not _is_json_media_type(request.headers.get("content-type", "")):
        return {}
    raw = await request.body()
    if not raw.strip():
        return {}
    try:
        return json.loads(raw)
    except (UnicodeDecodeError, json.JSONDecodeError) as e:
        raise HTTPException(
            status_code=HTTP_400_BAD_REQUEST, detail="Malformed JSON body"
        ) from e


# --- Module Notes -----------------------------------------------------------
# Nothing here is cached at module level; every value comes from the app instance.
