"""
alpaca_relay

Top-level package for the Alpaca brokerage relay service.

Responsibilities:
- Expose package version metadata.
"""

__all__ = ["__version__"]

__version__ = "0.1.0"


# --- Module Notes -----------------------------------------------------------
# Keep this file minimal; importing the package must not read credentials or open sockets.
