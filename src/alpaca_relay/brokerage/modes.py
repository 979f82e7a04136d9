"""
alpaca_relay.brokerage.modes

Trading-mode routing.

Responsibilities:
- Model the paper/live account context as an explicit enum.
- Resolve a mode to its upstream hosts and credentials through a lookup table.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass

from alpaca_relay.brokerage.credentials import Credentials
from alpaca_relay.observability.logging import get_logger
from alpaca_relay.settings import Settings

log = get_logger(__name__)


class TradingMode(str, enum.Enum):
    paper = "paper"
    live = "live"

    @classmethod
    def parse(cls, raw: str | None) -> TradingMode:
        # Unknown or missing values fall back to paper, matching the frontend contract.
        try:
            return cls((raw or cls.paper.value).strip().lower())
        except ValueError:
            return cls.paper


@dataclass(frozen=True, slots=True)
class UpstreamTarget:
    mode: TradingMode
    trading_base_url: str
    data_base_url: str
    credentials: Credentials


def build_targets(settings: Settings) -> dict[TradingMode, UpstreamTarget]:
    paper = UpstreamTarget(
        mode=TradingMode.paper,
        trading_base_url=settings.trading_base_url.rstrip("/"),
        data_base_url=settings.data_base_url.rstrip("/"),
        credentials=Credentials(
            key_id=settings.alpaca_key_id,
            secret=settings.alpaca_secret_key,
        ),
    )
    # TODO: wire live-account host and credentials once the live key pair is provisioned.
    return {TradingMode.paper: paper, TradingMode.live: paper}


def resolve_target(
    targets: dict[TradingMode, UpstreamTarget], mode: TradingMode
) -> UpstreamTarget:
    target = targets[mode]
    if target.mode is not mode:
        log.warning("live_mode_not_wired", requested=mode.value, resolved=target.mode.value)
    return target


# --- Module Notes -----------------------------------------------------------
# Live routing is inert: every mode resolves to the paper target.
