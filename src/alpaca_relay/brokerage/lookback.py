"""
alpaca_relay.brokerage.lookback

Lookback-window calculation for historical bar requests.

Responsibilities:
- Translate a timeframe descriptor ("5Min", "1Hour", "1Day", "2Week") and a bar limit
  into a start/end range wide enough to yield roughly `limit` bars.
- Parse the inbound `limit` query value leniently.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import UTC, datetime, timedelta

DEFAULT_LIMIT = 100

# Covers closed sessions, overnight gaps and weekends.
SAFETY_MULTIPLIER = 3

# Precedence order matters: "Min" is checked before "Hour", and so on.
_UNIT_SECONDS: tuple[tuple[str, int], ...] = (
    ("Min", 60),
    ("Hour", 60 * 60),
    ("Day", 24 * 60 * 60),
    ("Week", 7 * 24 * 60 * 60),
)
_DAY_SECONDS = 24 * 60 * 60

_LEADING_INT = re.compile(r"^\s*([+-]?\d+)")


class InvalidTimeframeError(ValueError):
    pass


@dataclass(frozen=True, slots=True)
class LookbackWindow:
    start: datetime
    end: datetime

    @property
    def start_iso(self) -> str:
        return format_timestamp(self.start)

    @property
    def end_iso(self) -> str:
        return format_timestamp(self.end)


def format_timestamp(value: datetime) -> str:
    # Millisecond precision with a trailing Z, the form the data API documents.
    return value.astimezone(UTC).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def leading_int(raw: str | None) -> int | None:
    if raw is None:
        return None
    m = _LEADING_INT.match(raw)
    return int(m.group(1)) if m else None


def parse_limit(raw: str | None) -> int:
    """
    Parse the bar limit from a query string value.

    Absent, non-numeric or zero values fall back to `DEFAULT_LIMIT`. Negative values
    are passed through for the data API to reject. Trailing garbage is ignored
    ("50abc" -> 50).
    """
    value = leading_int(raw)
    if not value:
        return DEFAULT_LIMIT
    return value


def compute_lookback_window(
    timeframe: str,
    limit: int,
    *,
    now: datetime | None = None,
) -> LookbackWindow:
    """
    Compute `start = end - limit * unit * magnitude * 3`, with `end` = now (UTC).

    Raises `InvalidTimeframeError` when a minute/hour timeframe carries no leading
    magnitude (e.g. "Min"); day/week timeframes default the magnitude to 1 and an
    unrecognized unit is treated as one day.
    """
    end = now if now is not None else datetime.now(tz=UTC)
    magnitude = leading_int(timeframe)

    unit_seconds = _DAY_SECONDS
    matched = None
    for token, seconds in _UNIT_SECONDS:
        if token in timeframe:
            matched, unit_seconds = token, seconds
            break

    if matched is None:
        magnitude = 1
    elif magnitude is None:
        if matched in ("Min", "Hour"):
            raise InvalidTimeframeError(f"timeframe {timeframe!r} has no numeric magnitude")
        magnitude = 1
    elif magnitude == 0 and matched in ("Day", "Week"):
        magnitude = 1

    lookback = timedelta(seconds=limit * unit_seconds * magnitude * SAFETY_MULTIPLIER)
    return LookbackWindow(start=end - lookback, end=end)


# --- Module Notes -----------------------------------------------------------
# The x3 multiplier is applied to every unit, including weeks, where it over-fetches;
# the data API still caps the response at `limit` bars.
