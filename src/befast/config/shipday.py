"""Shipday dispatch provider configuration values."""

from __future__ import annotations

from dataclasses import dataclass

from befast import __version__

from .env import env_float, optional_env_var
from .http_resilience import RateLimit, ResilienceConfig, RetryPolicy

SHIPDAY_BASE_URL = "https://api.shipday.com"
SHIPDAY_TIMEOUT_SECONDS = 8.0
SHIPDAY_DEADLINE_SECONDS = 12.0


@dataclass(frozen=True)
class ShipdayConfig:
    """Holds Shipday API configuration values."""

    api_key: str
    resilience: ResilienceConfig
    deadline_seconds: float = SHIPDAY_DEADLINE_SECONDS

    @property
    def authorization(self) -> str:
        return f"Basic {self.api_key}"


def default_shipday_resilience(
    *,
    base_url: str = SHIPDAY_BASE_URL,
    timeout_seconds: float = SHIPDAY_TIMEOUT_SECONDS,
) -> ResilienceConfig:
    return ResilienceConfig(
        name="shipday",
        base_url=base_url,
        timeout_seconds=timeout_seconds,
        retry=RetryPolicy(total=2, backoff_factor=0.3, max_backoff_wait=3.0),
        ratelimit=RateLimit(max_calls=5, per_seconds=1.0),
        default_headers={"Accept": "application/json"},
        user_agent=f"befast-tracking/{__version__}",
    )


def get_shipday_config(*, resilience: ResilienceConfig | None = None) -> ShipdayConfig | None:
    """Return the Shipday configuration, or ``None`` when no credential is configured."""

    api_key = optional_env_var("SHIPDAY_API_KEY")
    if api_key is None:
        return None

    base_url = optional_env_var("SHIPDAY_BASE_URL") or SHIPDAY_BASE_URL
    return ShipdayConfig(
        api_key=api_key,
        resilience=resilience
        or default_shipday_resilience(
            base_url=base_url.rstrip("/"),
            timeout_seconds=env_float("SHIPDAY_TIMEOUT_SECONDS", SHIPDAY_TIMEOUT_SECONDS),
        ),
        deadline_seconds=env_float("SHIPDAY_DEADLINE_SECONDS", SHIPDAY_DEADLINE_SECONDS),
    )
