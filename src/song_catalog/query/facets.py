# song_catalog/query/facets.py

from __future__ import annotations

import logging
from collections import Counter
from collections.abc import Iterable
from typing import Callable

from song_catalog.domain.models import Facets, Song

logger = logging.getLogger(__name__)


def _distinct_values(
    songs: Iterable[Song],
    getter: Callable[[Song], str | None],
) -> Counter[str]:
    """Count non-empty values of one facet across songs.

    Sentinel values never reach this point: ingestion maps them to None.
    """
    counter: Counter[str] = Counter()
    for song in songs:
        value = getter(song)
        if not value:
            continue
        counter[value] += 1
    return counter


def _year_sort_key(year: str) -> tuple[int, float, str]:
    try:
        return (0, -float(year), year)
    except ValueError:
        # Non-numeric years go last, in text order.
        return (1, 0.0, year)


def build_facets(songs: Iterable[Song]) -> Facets:
    """Derive the selectable values of every facet from the full catalog.

    - years: newest first, numerically
    - albums, genres, languages: plain text order
    """
    songs = list(songs)

    years = _distinct_values(songs, lambda s: s.year)
    albums = _distinct_values(songs, lambda s: s.album_name)
    genres = _distinct_values(songs, lambda s: s.song_type)
    languages = _distinct_values(songs, lambda s: s.language)

    facets = Facets(
        years=tuple(sorted(years, key=_year_sort_key)),
        albums=tuple(sorted(albums)),
        genres=tuple(sorted(genres)),
        languages=tuple(sorted(languages)),
    )
    logger.debug(
        "Built facets: %d years, %d albums, %d genres, %d languages.",
        len(facets.years),
        len(facets.albums),
        len(facets.genres),
        len(facets.languages),
    )
    return facets


def get_facet_counts(
    songs: Iterable[Song],
    facet: str,
) -> list[tuple[str, int]]:
    """Return (value, count) pairs for one facet.

    Sorted by descending count, then by value.
    """
    getters: dict[str, Callable[[Song], str | None]] = {
        "year": lambda s: s.year,
        "album": lambda s: s.album_name,
        "genre": lambda s: s.song_type,
        "language": lambda s: s.language,
        "singer_type": lambda s: s.singer_type,
    }
    if facet not in getters:
        msg = f"Unknown facet: {facet}"
        raise ValueError(msg)
    counter = _distinct_values(songs, getters[facet])
    return sorted(counter.items(), key=lambda x: (-x[1], x[0]))
