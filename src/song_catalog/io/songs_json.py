# song_catalog/io/songs_json.py

"""Conversion between raw catalog JSON and Song objects."""

from __future__ import annotations

import json
import logging
from collections.abc import Iterable
from datetime import date
from pathlib import Path
from typing import Any

from song_catalog.domain.models import Song

logger = logging.getLogger(__name__)

# Sentinels used by the upstream data feed for "unknown".
NO_TIME = "0000-00-00"
NO_YEAR = "0000"
NO_GENRE = "无信息"


class SongLoadError(Exception):
    """Raised when the catalog cannot be read or has the wrong shape."""


def _clean_str(value: Any, *, sentinel: str | None = None) -> str | None:
    if value is None:
        return None
    text = str(value).strip()
    if not text or text == sentinel:
        return None
    return text


def parse_release_date(value: str | None) -> date | None:
    """Parse 'YYYY-MM-DD', 'YYYY-MM' or 'YYYY' into a date.

    Returns None for anything that does not parse.
    """
    if not value:
        return None
    parts = value.split("-")
    try:
        numbers = [int(p) for p in parts]
        if len(numbers) == 1:
            return date(numbers[0], 1, 1)
        if len(numbers) == 2:
            return date(numbers[0], numbers[1], 1)
        if len(numbers) == 3:
            return date(numbers[0], numbers[1], numbers[2])
    except ValueError:
        return None
    return None


def _singers_from_raw(value: Any) -> tuple[str, ...]:
    if value is None:
        return ()
    if isinstance(value, str):
        return (value,) if value else ()
    if isinstance(value, list | tuple):
        return tuple(str(v) for v in value if v is not None)
    return (str(value),)


def song_from_raw(raw: dict[str, Any]) -> Song:
    """Convert a raw JSON dict into a Song instance.

    A missing song_name becomes an empty string.

    Raises:
        SongLoadError: If song_id is missing or not an integer.
    """
    try:
        song_id = int(raw["song_id"])
    except (KeyError, TypeError, ValueError) as exc:
        msg = f"Song record without usable song_id: {exc}"
        raise SongLoadError(msg) from exc
    song_name = raw.get("song_name")

    time_public = _clean_str(raw.get("song_time_public"), sentinel=NO_TIME)

    return Song(
        song_id=song_id,
        song_name="" if song_name is None else str(song_name),
        singer_name=_singers_from_raw(raw.get("singer_name")),
        singer_type=_clean_str(raw.get("singer_type")) or "",
        album_name=_clean_str(raw.get("album_name")),
        song_time_public=time_public,
        release_date=parse_release_date(time_public),
        year=_clean_str(raw.get("year"), sentinel=NO_YEAR),
        song_type=_clean_str(raw.get("song_type"), sentinel=NO_GENRE),
        language=_clean_str(raw.get("language")),
        song_url=_clean_str(raw.get("song_url")),
        lyric=raw.get("lyric") or None,
    )


def song_to_raw(song: Song) -> dict[str, Any]:
    """Convert a Song back into the feed format, restoring sentinels."""
    return {
        "song_id": song.song_id,
        "song_name": song.song_name,
        "singer_name": list(song.singer_name),
        "singer_type": song.singer_type,
        "album_name": song.album_name,
        "song_time_public": song.song_time_public or NO_TIME,
        "year": song.year or NO_YEAR,
        "song_type": song.song_type or NO_GENRE,
        "language": song.language,
        "song_url": song.song_url,
        "lyric": song.lyric,
    }


def songs_from_payload(payload: Any) -> list[Song]:
    """Convert a decoded JSON document (an array of records) into songs.

    The whole document is rejected if any element is unusable, so callers
    never see a partial catalog.
    """
    if not isinstance(payload, list):
        msg = f"Expected a JSON array of songs, got {type(payload).__name__}"
        raise SongLoadError(msg)

    songs: list[Song] = []
    for index, raw in enumerate(payload):
        if not isinstance(raw, dict):
            msg = f"Song record #{index} is not an object"
            raise SongLoadError(msg)
        songs.append(song_from_raw(raw))
    return songs


def load_songs_from_json(path: str | Path) -> list[Song]:
    """Load songs from a JSON file holding an array of song records."""
    file_path = Path(path)

    try:
        with file_path.open("r", encoding="utf-8") as f:
            payload = json.load(f)
    except OSError as exc:
        msg = f"Cannot read catalog file {file_path}: {exc}"
        raise SongLoadError(msg) from exc
    except json.JSONDecodeError as exc:
        msg = f"Invalid JSON in catalog file {file_path}: {exc}"
        raise SongLoadError(msg) from exc

    songs = songs_from_payload(payload)
    logger.debug("Loaded %d songs from %s", len(songs), file_path)
    return songs


def save_songs_to_json(songs: Iterable[Song], path: str | Path) -> None:
    """Write songs to a JSON file as an array of feed-format records."""
    file_path = Path(path)
    file_path.parent.mkdir(parents=True, exist_ok=True)

    with file_path.open("w", encoding="utf-8") as f:
        json.dump([song_to_raw(s) for s in songs], f, ensure_ascii=False, indent=2)
