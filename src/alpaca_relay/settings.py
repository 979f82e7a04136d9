"""
alpaca_relay.settings

Central configuration model (Pydantic Settings).

Responsibilities:
- Provide strongly-typed, env-driven settings for all layers.
- Hide brokerage credentials from repr/logging.
- Build the settings object once at process start; the app factory carries it from there.
"""

from __future__ import annotations

from typing import Literal

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Relay configuration:
    - Strict env-driven configuration
    - Defaults match the paper-trading deployment
    - One instance per process, passed explicitly into `create_app`
    """

    model_config = SettingsConfigDict(
        env_prefix="RELAY_",
        case_sensitive=False,
        frozen=True,
        populate_by_name=True,
    )

    env: Literal["dev", "test", "prod"] = "dev"
    service_name: str = "alpaca-relay"
    log_level: str = "INFO"

    api_host: str = "0.0.0.0"
    api_port: int = 3001

    # Brokerage credentials (single fixed pair; paper account).
    alpaca_key_id: str = Field(
        default="",
        repr=False,
        validation_alias=AliasChoices("ALPACA_PAPER_API_KEY", "RELAY_ALPACA_KEY_ID"),
    )
    alpaca_secret_key: str = Field(
        default="",
        repr=False,
        validation_alias=AliasChoices("ALPACA_PAPER_API_SECRET", "RELAY_ALPACA_SECRET_KEY"),
    )

    # Upstream
    trading_base_url: str = "https://paper-api.alpaca.markets"
    data_base_url: str = "https://data.alpaca.markets"
    data_feed: str = "iex"
    upstream_timeout_s: float = Field(default=30.0, gt=0)

    # Edge
    cors_origins: tuple[str, ...] = ("http://localhost:5000", "http://127.0.0.1:5000")
    deployment_domains: str | None = Field(
        default=None,
        validation_alias=AliasChoices("REPLIT_DOMAINS", "RELAY_DEPLOYMENT_DOMAINS"),
    )
    rate_limit_max_requests: int = Field(default=1000, ge=1)
    rate_limit_window_s: float = Field(default=15 * 60, gt=0)
    trust_forwarded_for: bool = False

    @property
    def has_credentials(self) -> bool:
        return bool(self.alpaca_key_id and self.alpaca_secret_key)


def load_settings() -> Settings:
    # Called once by the entrypoint; request handlers read the instance from app.state.
    return Settings()


# --- Module Notes -----------------------------------------------------------
# The credential aliases keep the env names the frontend deployment already uses
# (ALPACA_PAPER_API_KEY / ALPACA_PAPER_API_SECRET / REPLIT_DOMAINS).
