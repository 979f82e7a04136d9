"""
alpaca_relay.security

Edge protection for the relay.

Responsibilities:
- Origin allow-list for CORS.
- Per-client rolling-window rate limiting.
- HTTP security response headers.
"""

# Package marker.


# --- Module Notes -----------------------------------------------------------
# Origin checks are the relay's only caller authentication; keep the allow-list tight.
