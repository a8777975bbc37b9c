"""Logging setup shared by the CLI and the API server."""

from __future__ import annotations

import logging

from .env import optional_env_var
from .errors import ConfigurationError

# Chatty at INFO: one line per HTTP request.
_NOISY_LOGGERS = ("httpx", "uvicorn.access")


def _level_from_env(default: int) -> int:
    raw = optional_env_var("BEFAST_LOG_LEVEL")
    if raw is None:
        return default
    level = logging.getLevelNamesMapping().get(raw.upper())
    if level is None:
        raise ConfigurationError(f"BEFAST_LOG_LEVEL must be a logging level name, got {raw!r}")
    return level


def configure_logging(*, level: int | None = None, force: bool = False) -> None:
    """Initialise the root logger once.

    ``level`` defaults to ``BEFAST_LOG_LEVEL`` (or INFO). Pass ``force=True`` to
    reconfigure during tests or specialised entry points.
    """

    resolved = level if level is not None else _level_from_env(logging.INFO)
    logging.basicConfig(
        level=resolved,
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
        force=force,
    )
    for name in _NOISY_LOGGERS:
        logging.getLogger(name).setLevel(max(resolved, logging.WARNING))
