"""
alpaca_relay.brokerage

Brokerage boundary package.

Responsibilities:
- Credential/header provider and trading-mode routing.
- Lookback-window calculation for bar requests.
- HTTP client for the Alpaca trading and market-data hosts.
"""

# Package marker.


# --- Module Notes -----------------------------------------------------------
# Routers and services depend on this boundary, never on Alpaca URLs directly.
