"""
alpaca_relay.api.__main__

Entrypoint for running the relay via `python -m alpaca_relay.api`.

Responsibilities:
- Load settings once.
- Create the app.
- Start uvicorn with structlog-compatible logging config.
"""

from __future__ import annotations

import uvicorn

from alpaca_relay.api.app import create_app
from alpaca_relay.settings import load_settings


def main() -> None:
    settings = load_settings()
    app = create_app(settings=settings)

    uvicorn.run(
        app,
        host=settings.api_host,
        port=settings.api_port,
        log_config=None,  # structlog
    )


if __name__ == "__main__":
    main()


# --- Module Notes -----------------------------------------------------------
# Binds one port; all other configuration comes from the environment (see `settings`).
