# song_catalog/repository.py

"""In-memory song repository and its one-time load."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from enum import Enum
from pathlib import Path

from song_catalog.domain.models import Song
from song_catalog.io.client import DEFAULT_TIMEOUT, CatalogClient
from song_catalog.io.songs_json import SongLoadError, load_songs_from_json

logger = logging.getLogger(__name__)


class LoadStatus(str, Enum):
    LOADING = "loading"
    READY = "ready"
    FAILED = "failed"


class RepositoryUnavailableError(RuntimeError):
    """Raised when songs are requested from a repository that is not ready."""


class SongRepository:
    """Immutable song collection with a load status.

    The repository starts in LOADING and moves exactly once to READY or
    FAILED. It is read-only afterwards.
    """

    def __init__(self) -> None:
        self._status = LoadStatus.LOADING
        self._songs: tuple[Song, ...] = ()
        self._by_id: dict[int, Song] = {}
        self._error: str | None = None

    @classmethod
    def from_songs(cls, songs: Iterable[Song]) -> "SongRepository":
        repo = cls()
        repo._set_ready(songs)
        return repo

    @property
    def status(self) -> LoadStatus:
        return self._status

    @property
    def error(self) -> str | None:
        return self._error

    @property
    def is_ready(self) -> bool:
        return self._status is LoadStatus.READY

    @property
    def songs(self) -> tuple[Song, ...]:
        if not self.is_ready:
            msg = f"Song repository is not available (status={self._status.value})."
            raise RepositoryUnavailableError(msg)
        return self._songs

    def __len__(self) -> int:
        return len(self._songs)

    def get(self, song_id: int) -> Song | None:
        """Return the song with `song_id`, or None on a miss."""
        return self._by_id.get(song_id)

    def _set_ready(self, songs: Iterable[Song]) -> None:
        if self._status is not LoadStatus.LOADING:
            msg = "Song repository has already been loaded."
            raise RuntimeError(msg)
        self._songs = tuple(songs)
        # First record wins on duplicate IDs, matching a linear lookup.
        by_id: dict[int, Song] = {}
        for song in self._songs:
            by_id.setdefault(song.song_id, song)
        self._by_id = by_id
        self._status = LoadStatus.READY

    def _set_failed(self, error: str) -> None:
        if self._status is not LoadStatus.LOADING:
            msg = "Song repository has already been loaded."
            raise RuntimeError(msg)
        self._error = error
        self._status = LoadStatus.FAILED


def is_url(source: str | Path) -> bool:
    return isinstance(source, str) and source.startswith(("http://", "https://"))


def load_repository(
    source: str | Path,
    *,
    timeout: float = DEFAULT_TIMEOUT,
    client: CatalogClient | None = None,
) -> SongRepository:
    """Load the catalog from a file path or an http(s) URL.

    Never raises for load problems: the returned repository is FAILED
    instead, and the failure is logged once.
    """
    repo = SongRepository()
    try:
        if is_url(source):
            if client is not None:
                songs = client.fetch_songs(str(source))
            else:
                with CatalogClient(timeout=timeout) as own_client:
                    songs = own_client.fetch_songs(str(source))
        else:
            songs = load_songs_from_json(source)
    except SongLoadError as exc:
        logger.error("Failed to load song catalog from %s: %s", source, exc)
        repo._set_failed(str(exc))
        return repo

    repo._set_ready(songs)
    logger.info("Loaded %d songs from %s.", len(repo), source)
    return repo
