"""
alpaca_relay.api.routers.trading

Relayed trading-host endpoints (account, positions, orders, clock).

Responsibilities:
- Validate inbound route/query parameters.
- Delegate the upstream call and response policy to `services.relay`.
"""

from __future__ import annotations

from functools import partial
from typing import Any, Literal

from fastapi import APIRouter, Depends, Path, Query
from starlette.responses import Response

from alpaca_relay.api.deps import brokerage_client, json_body
from alpaca_relay.brokerage.client import BrokerageClient
from alpaca_relay.services.relay import (
    CANCEL_ORDER,
    GET_ACCOUNT,
    GET_CLOCK,
    LIST_ORDERS,
    LIST_POSITIONS,
    SUBMIT_ORDER,
    relay,
)

ORDER_ID_PATTERN = r"^[A-Za-z0-9_-]{1,128}$"

router = APIRouter(prefix="/api", tags=["trading"])


@router.get("/account")
async def get_account(client: BrokerageClient = Depends(brokerage_client)) -> Response:
    return await relay(GET_ACCOUNT, client.get_account)


@router.get("/positions")
async def list_positions(client: BrokerageClient = Depends(brokerage_client)) -> Response:
    return await relay(LIST_POSITIONS, client.list_positions)


@router.get("/orders")
async def list_orders(
    order_status: Literal["open", "closed", "all"] = Query(default="all", alias="status"),
    client: BrokerageClient = Depends(brokerage_client),
) -> Response:
    return await relay(LIST_ORDERS, partial(client.list_orders, status=order_status))


@router.post("/orders")
async def submit_order(
    payload: Any = Depends(json_body),
    client: BrokerageClient = Depends(brokerage_client),
) -> Response:
    # Forwarded verbatim; Alpaca owns order validation.
    return await relay(SUBMIT_ORDER, partial(client.submit_order, payload=payload))


@router.delete("/orders/{order_id}")
async def cancel_order(
    order_id: str = Path(pattern=ORDER_ID_PATTERN),
    client: BrokerageClient = Depends(brokerage_client),
) -> Response:
    return await relay(CANCEL_ORDER, partial(client.cancel_order, order_id=order_id))


@router.get("/clock")
async def get_clock(client: BrokerageClient = Depends(brokerage_client)) -> Response:
    return await relay(GET_CLOCK, client.get_clock)


# --- Module Notes -----------------------------------------------------------
# Order submission is the one route whose upstream error body reaches the caller.
