"""
alpaca_relay.api.app

FastAPI app factory for the relay.

Responsibilities:
- Build the FastAPI application and register routers/middleware.
- Create and dispose the shared upstream HTTP client.
- Provide a single composition root where cross-cutting concerns live.
"""

from __future__ import annotations

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

import httpx
from fastapi import FastAPI

from alpaca_relay import __version__
from alpaca_relay.api.routers.health import router as health_router
from alpaca_relay.api.routers.market_data import router as market_data_router
from alpaca_relay.api.routers.trading import router as trading_router
from alpaca_relay.brokerage.modes import build_targets
from alpaca_relay.observability.logging import configure_logging, get_logger
from alpaca_relay.observability.middleware import RequestContextMiddleware
from alpaca_relay.security.cors import build_allowed_origins, install_cors
from alpaca_relay.security.headers import SecurityHeadersMiddleware
from alpaca_relay.security.rate_limit import RateLimitMiddleware, SlidingWindowLimiter
from alpaca_relay.settings import Settings

log = get_logger(__name__)


def create_app(
    *,
    settings: Settings,
    transport: httpx.AsyncBaseTransport | None = None,
) -> FastAPI:
    """
    Compose the relay. `transport` replaces the network transport of the upstream
    client (tests pass an `httpx.MockTransport`).
    """
    configure_logging(service_name=settings.service_name, level=settings.log_level)
    origins = build_allowed_origins(settings)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        app.state.http = httpx.AsyncClient(
            timeout=httpx.Timeout(settings.upstream_timeout_s),
            transport=transport,
        )
        log.info(
            "startup",
            env=settings.env,
            port=settings.api_port,
            allowed_origins=origins,
            credentials_loaded=settings.has_credentials,
        )
        if not settings.has_credentials:
            log.warning(
                "credentials_missing",
                hint="set ALPACA_PAPER_API_KEY and ALPACA_PAPER_API_SECRET",
            )
        try:
            yield
        finally:
            await app.state.http.aclose()
            log.info("shutdown")

    app = FastAPI(
        title="Alpaca Relay",
        version=__version__,
        docs_url="/docs" if settings.env != "prod" else None,
        openapi_url="/openapi.json" if settings.env != "prod" else None,
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.targets = build_targets(settings)
    app.state.allowed_origins = origins

    # Starlette wraps in reverse order: the last middleware added runs first.
    app.add_middleware(
        RateLimitMiddleware,
        limiter=SlidingWindowLimiter(
            max_requests=settings.rate_limit_max_requests,
            window_s=settings.rate_limit_window_s,
        ),
        trust_forwarded_for=settings.trust_forwarded_for,
    )
    install_cors(app, origins=origins)
    app.add_middleware(SecurityHeadersMiddleware)
    app.add_middleware(RequestContextMiddleware)

    app.include_router(health_router, tags=["health"])
    app.include_router(trading_router)
    app.include_router(market_data_router)

    return app


# --- Module Notes -----------------------------------------------------------
# App composition stays here; upstream calls live in `brokerage`, response policy in
# `services.relay`.
