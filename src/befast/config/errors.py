"""Errors raised while loading settings from the environment."""

from __future__ import annotations


class ConfigurationError(RuntimeError):
    """Raised when a setting is present but cannot be interpreted."""


class MissingConfigurationError(ConfigurationError):
    """Raised when a required setting is absent or blank."""
