# song_catalog/io/client.py

from __future__ import annotations

import json
import logging

import httpx

from song_catalog.domain.models import Song
from song_catalog.io.songs_json import SongLoadError, songs_from_payload

logger = logging.getLogger(__name__)


DEFAULT_TIMEOUT = 10.0


class CatalogClient:
    """HTTP client for fetching a published music_data.json catalog.

    A failed fetch is reported once as SongLoadError and never retried.
    """

    def __init__(
        self,
        *,
        timeout: float = DEFAULT_TIMEOUT,
        user_agent: str | None = None,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        if timeout <= 0:
            msg = "timeout must be positive."
            raise ValueError(msg)

        headers = {
            "User-Agent": user_agent or "song-catalog/0.1",
            "Accept": "application/json",
        }

        self._client = httpx.Client(
            headers=headers,
            timeout=timeout,
            follow_redirects=True,
            transport=transport,
        )

    def close(self) -> None:
        """Close the underlying HTTP client."""
        self._client.close()

    def __enter__(self) -> "CatalogClient":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:  # type: ignore[override]
        self.close()

    def fetch_songs(self, url: str) -> list[Song]:
        """Fetch and decode the catalog at `url`.

        Raises:
            SongLoadError: On network errors, non-2xx responses, invalid JSON
                or a payload that is not an array of song records.
        """
        try:
            response = self._client.get(url)
            response.raise_for_status()
        except httpx.HTTPStatusError as exc:
            msg = f"Catalog request to {url} failed with status {exc.response.status_code}"
            raise SongLoadError(msg) from exc
        except httpx.HTTPError as exc:
            msg = f"Catalog request to {url} failed: {exc}"
            raise SongLoadError(msg) from exc

        try:
            payload = response.json()
        except json.JSONDecodeError as exc:
            msg = f"Catalog at {url} is not valid JSON: {exc}"
            raise SongLoadError(msg) from exc

        songs = songs_from_payload(payload)
        logger.debug(
            "Fetched %d songs from %s (status=%s).",
            len(songs),
            url,
            response.status_code,
        )
        return songs
