"""
alpaca_relay.api.routers.health

Liveness endpoint.

Responsibilities:
- Provide a local-only health check (`/health`); never calls the brokerage.
"""

from __future__ import annotations

from datetime import UTC, datetime

from fastapi import APIRouter

SERVICE_ID = "Alpaca Proxy Server"

router = APIRouter()


def _utc_now_iso() -> str:
    return datetime.now(tz=UTC).isoformat(timespec="milliseconds").replace("+00:00", "Z")


@router.get("/health")
async def health() -> dict[str, str]:
    return {
        "status": "ok",
        "timestamp": _utc_now_iso(),
        "service": SERVICE_ID,
    }


# --- Module Notes -----------------------------------------------------------
# Outside `/api/`, so the rate limiter never throttles health checks.
