# song_catalog/config.py

"""Shared configuration and environment setup."""

from __future__ import annotations

from os import getenv
from pathlib import Path

from dotenv import load_dotenv

from song_catalog.io.client import DEFAULT_TIMEOUT

load_dotenv(override=True)

DEFAULT_DATA_FILE = "music_data.json"
DEFAULT_HISTORY_FILE = Path(".song_catalog") / "storage.json"


def get_project_root() -> Path:
    """Return the project root directory.

    Prefers SONG_CATALOG_PROJECT_ROOT env var. Falls back to current working
    directory.
    """
    if root := getenv("SONG_CATALOG_PROJECT_ROOT"):
        return Path(root).resolve()
    return Path.cwd()


def get_data_source() -> str:
    """Return the catalog location: a file path or an http(s) URL."""
    if source := getenv("SONG_CATALOG_DATA"):
        return source
    return str(get_project_root() / DEFAULT_DATA_FILE)


def get_history_path() -> Path:
    if path := getenv("SONG_CATALOG_HISTORY"):
        return Path(path)
    return get_project_root() / DEFAULT_HISTORY_FILE


def get_http_timeout() -> float:
    raw = getenv("SONG_CATALOG_TIMEOUT")
    if not raw:
        return DEFAULT_TIMEOUT
    try:
        timeout = float(raw)
    except ValueError:
        msg = f"SONG_CATALOG_TIMEOUT must be a number, got {raw!r}."
        raise ValueError(msg) from None
    if timeout <= 0:
        msg = "SONG_CATALOG_TIMEOUT must be positive."
        raise ValueError(msg)
    return timeout
