"""
alpaca_relay.brokerage.credentials

Brokerage credential model.

Responsibilities:
- Hold the server-side key pair (never echoed to callers).
- Produce the fixed header set attached to every upstream call.
"""

from __future__ import annotations

from dataclasses import dataclass, field

KEY_ID_HEADER = "APCA-API-KEY-ID"
SECRET_KEY_HEADER = "APCA-API-SECRET-KEY"


@dataclass(frozen=True, slots=True)
class Credentials:
    key_id: str
    secret: str = field(repr=False)

    def auth_headers(self) -> dict[str, str]:
        return {
            KEY_ID_HEADER: self.key_id,
            SECRET_KEY_HEADER: self.secret,
            "Content-Type": "application/json",
        }


# --- Module Notes -----------------------------------------------------------
# Absent credentials are sent as empty strings; Alpaca answers 401/403 and the
# relay surfaces that status like any other upstream rejection.
