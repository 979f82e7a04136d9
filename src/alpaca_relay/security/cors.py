"""
alpaca_relay.security.cors

CORS allow-list construction.

Responsibilities:
- Build the origin allow-list from the fixed local origins and the deployment domain.
- Install Starlette's CORS middleware with credentials enabled.
"""

from __future__ import annotations

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from alpaca_relay.settings import Settings

ALLOWED_METHODS = ["GET", "HEAD", "PUT", "PATCH", "POST", "DELETE"]


def build_allowed_origins(settings: Settings) -> list[str]:
    origins = list(settings.cors_origins)
    if settings.deployment_domains:
        # Only the first configured domain is the frontend's public host.
        domain = settings.deployment_domains.split(",")[0].strip()
        if domain:
            origins.extend([f"https://{domain}", f"http://{domain}"])
    return origins


def install_cors(app: FastAPI, *, origins: list[str]) -> None:
    # Preflights from other origins get 400; simple requests get no allow-origin header.
    app.add_middleware(
        CORSMiddleware,
        allow_origins=origins,
        allow_credentials=True,
        allow_methods=ALLOWED_METHODS,
        allow_headers=["*"],
    )


# --- Module Notes -----------------------------------------------------------
# Only the first entry of a comma-separated deployment domain list is allowed.
