"""
alpaca_relay.observability

Observability package.

Responsibilities:
- Structured logging configuration.
- Request context propagation for consistent log enrichment.
"""

# Package marker.


# --- Module Notes -----------------------------------------------------------
# Credential redaction happens in the structlog processor chain, not at call sites.
