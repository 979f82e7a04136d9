"""
alpaca_relay.api

API package for the relay service.

Responsibilities:
- FastAPI app factory and router modules.
- API-layer dependency wiring.
"""

# Package marker.


# --- Module Notes -----------------------------------------------------------
# The API layer stays thin: parameter validation + delegation to the relay service.
