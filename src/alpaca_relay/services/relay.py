"""
alpaca_relay.services.relay

Per-operation response policy for forwarded calls.

Responsibilities:
- Describe each relayed operation (generic messages, error-body policy, success shape).
- Execute one upstream call and map its outcome to a local response.
- Catch and log every failure at the handler boundary; never retry.
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable
from dataclasses import dataclass

import httpx
from starlette.responses import JSONResponse, Response
from starlette.status import HTTP_204_NO_CONTENT, HTTP_500_INTERNAL_SERVER_ERROR

from alpaca_relay.observability.logging import get_logger

log = get_logger(__name__)

UpstreamCall = Callable[[], Awaitable[httpx.Response]]


@dataclass(frozen=True, slots=True)
class RelayOperation:
    name: str
    # Body for transport/parse failures (status 500).
    failure_message: str
    # Body for upstream non-2xx; None forwards the upstream error body unchanged.
    rejection_message: str | None
    empty_success: bool = False


GET_ACCOUNT = RelayOperation(
    name="get_account",
    failure_message="Failed to fetch account data",
    rejection_message="Failed to fetch account data",
)
LIST_POSITIONS = RelayOperation(
    name="list_positions",
    failure_message="Failed to fetch positions",
    rejection_message="Failed to fetch positions",
)
LIST_ORDERS = RelayOperation(
    name="list_orders",
    failure_message="Failed to fetch orders",
    rejection_message="Failed to fetch orders",
)
GET_BARS = RelayOperation(
    name="get_bars",
    failure_message="Failed to fetch market data",
    rejection_message="Failed to fetch bars",
)
GET_QUOTE = RelayOperation(
    name="get_latest_quote",
    failure_message="Failed to fetch quote",
    rejection_message="Failed to fetch quote",
)
SUBMIT_ORDER = RelayOperation(
    name="submit_order",
    failure_message="Failed to submit order",
    # The frontend renders Alpaca's own rejection reason (buying power, invalid qty, ...).
    rejection_message=None,
)
CANCEL_ORDER = RelayOperation(
    name="cancel_order",
    failure_message="Failed to cancel order",
    rejection_message="Failed to cancel order",
    empty_success=True,
)
GET_CLOCK = RelayOperation(
    name="get_clock",
    failure_message="Failed to fetch market status",
    rejection_message="Failed to fetch clock",
)


def error_body(message: str) -> dict[str, str]:
    return {"error": message}


async def relay(op: RelayOperation, call: UpstreamCall) -> Response:
    """
    Run `call` (exactly once) and build the local response for `op`.

    - 2xx: upstream JSON re-serialized with status 200, or an empty 204 for
      operations with `empty_success`.
    - non-2xx: upstream status with a generic body, or the upstream body when the
      operation has no `rejection_message`.
    - any exception (network, timeout, invalid JSON, bad input): 500 with the
      operation's generic body.
    """
    try:
        upstream = await call()

        if not upstream.is_success:
            log.warning(
                "upstream_rejected",
                operation=op.name,
                upstream_status=upstream.status_code,
            )
            if op.rejection_message is None:
                return JSONResponse(status_code=upstream.status_code, content=upstream.json())
            return JSONResponse(
                status_code=upstream.status_code,
                content=error_body(op.rejection_message),
            )

        if op.empty_success:
            return Response(status_code=HTTP_204_NO_CONTENT)
        return JSONResponse(content=upstream.json())
    except Exception as e:
        log.exception("relay_failed", operation=op.name, error=str(e))
        return JSONResponse(
            status_code=HTTP_500_INTERNAL_SERVER_ERROR,
            content=error_body(op.failure_message),
        )


# --- Module Notes -----------------------------------------------------------
# Only order submission forwards upstream error bodies; the other operations hide
# them behind a generic message. Existing frontends depend on both shapes.
