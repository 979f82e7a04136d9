"""
alpaca_relay.api.routers.market_data

Relayed market-data endpoints (historical bars, latest quote).

Responsibilities:
- Derive the bar lookback window from timeframe + limit.
- Delegate the upstream call and response policy to `services.relay`.
"""

from __future__ import annotations

from functools import partial

import httpx
from fastapi import APIRouter, Depends, Path, Query
from starlette.responses import Response

from alpaca_relay.api.deps import brokerage_client
from alpaca_relay.brokerage.client import BrokerageClient
from alpaca_relay.brokerage.lookback import compute_lookback_window, parse_limit
from alpaca_relay.services.relay import GET_BARS, GET_QUOTE, relay

SYMBOL_PATTERN = r"^[A-Za-z0-9.-]{1,15}$"
TIMEFRAME_PATTERN = r"^[A-Za-z0-9]{1,16}$"

router = APIRouter(prefix="/api", tags=["market-data"])


@router.get("/bars/{symbol}")
async def get_bars(
    symbol: str = Path(pattern=SYMBOL_PATTERN),
    timeframe: str = Query(default="1Day", pattern=TIMEFRAME_PATTERN),
    limit: str | None = Query(default=None),
    client: BrokerageClient = Depends(brokerage_client),
) -> Response:
    bar_limit = parse_limit(limit)

    async def call() -> httpx.Response:
        # Computed inside the relayed call so an invalid timeframe maps to the 500 policy.
        window = compute_lookback_window(timeframe, bar_limit)
        return await client.get_bars(
            symbol=symbol,
            timeframe=timeframe,
            window=window,
            limit=bar_limit,
        )

    return await relay(GET_BARS, call)


@router.get("/quote/{symbol}")
async def get_latest_quote(
    symbol: str = Path(pattern=SYMBOL_PATTERN),
    client: BrokerageClient = Depends(brokerage_client),
) -> Response:
    return await relay(GET_QUOTE, partial(client.get_latest_quote, symbol=symbol))


# --- Module Notes -----------------------------------------------------------
# Both routes read the data host with the configured feed (`iex` by default).
