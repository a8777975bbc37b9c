"""Tunables for the order tracking engine."""

from __future__ import annotations

from dataclasses import dataclass

from .env import env_bool, env_float, env_int
from .errors import ConfigurationError

DEFAULT_DELIVERY_FEE = 55.0
DEFAULT_STORE_TIMEOUT_SECONDS = 5.0
DEFAULT_WRITE_BACK_WORKERS = 2


@dataclass(frozen=True, slots=True)
class TrackingConfig:
    default_delivery_fee: float = DEFAULT_DELIVERY_FEE
    store_timeout_seconds: float = DEFAULT_STORE_TIMEOUT_SECONDS
    strict_lookup: bool = False
    write_back_workers: int = DEFAULT_WRITE_BACK_WORKERS


def get_tracking_config() -> TrackingConfig:
    config = TrackingConfig(
        default_delivery_fee=env_float("BEFAST_DEFAULT_DELIVERY_FEE", DEFAULT_DELIVERY_FEE),
        store_timeout_seconds=env_float(
            "BEFAST_STORE_TIMEOUT_SECONDS", DEFAULT_STORE_TIMEOUT_SECONDS
        ),
        strict_lookup=env_bool("BEFAST_STRICT_LOOKUP", default=False),
        write_back_workers=env_int("BEFAST_WRITE_BACK_WORKERS", DEFAULT_WRITE_BACK_WORKERS),
    )
    if config.store_timeout_seconds <= 0:
        raise ConfigurationError("BEFAST_STORE_TIMEOUT_SECONDS must be positive")
    if config.write_back_workers < 1:
        raise ConfigurationError("BEFAST_WRITE_BACK_WORKERS must be at least 1")
    return config
