"""
alpaca_relay.services

Service-layer package.

Responsibilities:
- Turn upstream responses and failures into local HTTP responses.
"""

# Package marker.


# --- Module Notes -----------------------------------------------------------
# Services take the brokerage client as an argument so tests can swap the transport.
