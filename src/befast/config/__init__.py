"""Application configuration helpers."""

from __future__ import annotations

from .env import env_bool, env_float, env_int, optional_env_var, require_env_var, require_env_vars
from .errors import ConfigurationError, MissingConfigurationError
from .http_resilience import RateLimit, ResilienceConfig, RetryPolicy
from .logging import configure_logging
from .shipday import ShipdayConfig, default_shipday_resilience, get_shipday_config
from .storage import DatabaseConfig, data_dir, default_database_uri, get_database_config
from .tracking import TrackingConfig, get_tracking_config

__all__ = [
    "ConfigurationError",
    "DatabaseConfig",
    "MissingConfigurationError",
    "RateLimit",
    "ResilienceConfig",
    "RetryPolicy",
    "ShipdayConfig",
    "TrackingConfig",
    "configure_logging",
    "data_dir",
    "default_database_uri",
    "default_shipday_resilience",
    "env_bool",
    "env_float",
    "env_int",
    "get_database_config",
    "get_shipday_config",
    "get_tracking_config",
    "optional_env_var",
    "require_env_var",
    "require_env_vars",
]
