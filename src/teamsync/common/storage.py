"""Data storage helpers."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Final

APP_DIR_NAME: Final[str] = "teamsync"
DATA_DIR_ENV: Final[str] = "TEAMSYNC_DATA_DIR"
HTTP_CACHE_FILENAME: Final[str] = "http_cache.db"


def get_data_dir() -> Path:
    """Return ``$TEAMSYNC_DATA_DIR``, else ``$XDG_DATA_HOME/teamsync``."""

    explicit = os.getenv(DATA_DIR_ENV)
    if explicit:
        return Path(explicit).expanduser().resolve()
    xdg_data_home = os.getenv("XDG_DATA_HOME") or Path.home() / ".local" / "share"
    return (Path(xdg_data_home) / APP_DIR_NAME).expanduser().resolve()


def ensure_data_dir(path: Path | None = None) -> Path:
    data_dir = path or get_data_dir()
    data_dir.mkdir(parents=True, exist_ok=True)
    return data_dir


def get_http_cache_path() -> Path:
    """Location of the sqlite HTTP cache; creates the data directory on demand."""

    return ensure_data_dir() / HTTP_CACHE_FILENAME
