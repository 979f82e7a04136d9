"""
alpaca_relay.brokerage.client

HTTP client boundary for the Alpaca REST API.

Responsibilities:
- Attach the server-held credential headers to every call.
- Build upstream URLs for the trading host and the market-data host.
- Return the raw upstream response; status mapping is the relay service's job.
"""

from __future__ import annotations

from typing import Any
from urllib.parse import quote

import httpx

from alpaca_relay.brokerage.lookback import LookbackWindow
from alpaca_relay.brokerage.modes import UpstreamTarget

API_VERSION = "v2"


def _segment(value: str) -> str:
    # Path segments are percent-encoded so inbound values cannot add path components.
    return quote(value, safe="")


class BrokerageClient:
    """
    One instance per request, bound to the resolved upstream target.
    The underlying `httpx.AsyncClient` is shared across the app.
    """

    def __init__(
        self,
        *,
        target: UpstreamTarget,
        http: httpx.AsyncClient,
        data_feed: str = "iex",
    ) -> None:
        self._target = target
        self._http = http
        self._feed = data_feed

    @property
    def target(self) -> UpstreamTarget:
        return self._target

    def _trading_url(self, path: str) -> str:
        return f"{self._target.trading_base_url}/{API_VERSION}/{path}"

    def _data_url(self, path: str) -> str:
        return f"{self._target.data_base_url}/{API_VERSION}/{path}"

    async def _send(
        self,
        method: str,
        url: str,
        *,
        params: dict[str, Any] | None = None,
        json: Any = None,
    ) -> httpx.Response:
        return await self._http.request(
            method,
            url,
            params=params,
            headers=self._target.credentials.auth_headers(),
            json=json,
        )

    # Trading host

    async def get_account(self) -> httpx.Response:
        return await self._send("GET", self._trading_url("account"))

    async def list_positions(self) -> httpx.Response:
        return await self._send("GET", self._trading_url("positions"))

    async def list_orders(self, *, status: str = "all") -> httpx.Response:
        return await self._send("GET", self._trading_url("orders"), params={"status": status})

    async def submit_order(self, *, payload: Any) -> httpx.Response:
        body = payload if payload is not None else {}
        return await self._send("POST", self._trading_url("orders"), json=body)

    async def cancel_order(self, *, order_id: str) -> httpx.Response:
        return await self._send("DELETE", self._trading_url(f"orders/{_segment(order_id)}"))

    async def get_clock(self) -> httpx.Response:
        return await self._send("GET", self._trading_url("clock"))

    # Market-data host

    async def get_bars(
        self,
        *,
        symbol: str,
        timeframe: str,
        window: LookbackWindow,
        limit: int,
    ) -> httpx.Response:
        return await self._send(
            "GET",
            self._data_url(f"stocks/{_segment(symbol)}/bars"),
            params={
                "timeframe": timeframe,
                "start": window.start_iso,
                "end": window.end_iso,
                "limit": limit,
                "feed": self._feed,
            },
        )

    async def get_latest_quote(self, *, symbol: str) -> httpx.Response:
        return await self._send(
            "GET",
            self._data_url(f"stocks/{_segment(symbol)}/quotes/latest"),
            params={"feed": self._feed},
        )


# --- Module Notes -----------------------------------------------------------
# Timeouts come from the shared AsyncClient (see `api.app`); there are no retries here.
