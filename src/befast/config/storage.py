"""Where the order store lives."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Final

from .env import env_bool, optional_env_var

APP_DIR_NAME: Final[str] = "befast"
DEFAULT_DB_FILENAME: Final[str] = "befast.db"


@dataclass(frozen=True, slots=True)
class DatabaseConfig:
    uri: str
    echo: bool = False
    # Long-lived API processes outlive idle database connections.
    pool_pre_ping: bool = True


def data_dir() -> Path:
    """Return the local data directory, honouring ``BEFAST_DATA_DIR`` and XDG."""

    override = optional_env_var("BEFAST_DATA_DIR")
    if override:
        return Path(override).expanduser().resolve()
    xdg_home = os.getenv("XDG_DATA_HOME")
    base = Path(xdg_home) if xdg_home else Path.home() / ".local" / "share"
    return (base / APP_DIR_NAME).expanduser().resolve()


def default_database_uri() -> str:
    directory = data_dir()
    directory.mkdir(parents=True, exist_ok=True)
    return f"sqlite+pysqlite:///{directory / DEFAULT_DB_FILENAME}"


def get_database_config(*, uri: str | None = None) -> DatabaseConfig:
    """Return store settings; an explicit ``uri`` wins over ``DATABASE_URI``."""

    return DatabaseConfig(
        uri=uri or optional_env_var("DATABASE_URI") or default_database_uri(),
        echo=env_bool("BEFAST_DATABASE_ECHO", default=False),
    )
