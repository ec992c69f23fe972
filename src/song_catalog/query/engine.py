# song_catalog/query/engine.py

"""Filter, search and sort composition over the song catalog.

`query` is a pure function of its inputs: it never mutates the songs or the
state objects passed in, and the same inputs always give the same order.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence
from functools import cmp_to_key, partial

from song_catalog.domain.models import (
    ALL,
    UNKNOWN_YEAR,
    FilterState,
    Song,
    SortField,
    SortOrder,
    SortState,
    has_valid_time,
)
from song_catalog.query.collation import compare_names

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Filtering
# ---------------------------------------------------------------------------


def search_haystack(song: Song) -> str:
    """Lowercased text searched by the free-text facet."""
    return (
        f"{song.song_name} {' '.join(song.singer_name)} {song.album_name or ''}"
    ).lower()


def _matches_year(song: Song, year: str) -> bool:
    if year == ALL:
        return True
    if year == UNKNOWN_YEAR:
        return not has_valid_time(song)
    return song.year is not None and str(song.year) == year


def matches(song: Song, filters: FilterState) -> bool:
    """Return True if `song` satisfies every active facet in `filters`."""
    if filters.singer_type != ALL and song.singer_type != filters.singer_type:
        return False
    if not _matches_year(song, filters.year):
        return False
    if filters.album != ALL and song.album_name != filters.album:
        return False
    if filters.genre != ALL and song.song_type != filters.genre:
        return False
    if filters.language != ALL and song.language != filters.language:
        return False
    if filters.search and filters.search.lower() not in search_haystack(song):
        return False
    return True


def filter_songs(songs: Iterable[Song], filters: FilterState) -> list[Song]:
    return [song for song in songs if matches(song, filters)]


# ---------------------------------------------------------------------------
# Sorting
# ---------------------------------------------------------------------------


def _compare_validity(valid_a: bool, valid_b: bool) -> int:
    """Valid-time songs first, whatever the sort direction."""
    if valid_a and not valid_b:
        return -1
    if valid_b and not valid_a:
        return 1
    return 0


def _compare_dates(a: Song, b: Song, order: SortOrder) -> int:
    date_a = a.release_date
    date_b = b.release_date
    if date_a is None or date_b is None:
        # Unparsable dates go after parsable ones in either direction.
        return (date_a is None) - (date_b is None)
    if date_a == date_b:
        return 0
    result = -1 if date_a < date_b else 1
    return result if order is SortOrder.ASC else -result


def _compare_by_time(a: Song, b: Song, order: SortOrder) -> int:
    valid_a = has_valid_time(a)
    valid_b = has_valid_time(b)

    result = _compare_validity(valid_a, valid_b)
    if result:
        return result

    if valid_a:
        result = _compare_dates(a, b, order)
        if result:
            return result

    # Equal dates or no valid time on either side: name A-Z, direction ignored.
    return compare_names(a.song_name or "", b.song_name or "")


def _compare_by_name(a: Song, b: Song, order: SortOrder) -> int:
    result = compare_names(a.song_name or "", b.song_name or "")
    if result:
        return result if order is SortOrder.ASC else -result

    valid_a = has_valid_time(a)
    valid_b = has_valid_time(b)
    result = _compare_validity(valid_a, valid_b)
    if result:
        return result

    if valid_a:
        # Same name, both dated: newest first regardless of direction.
        return _compare_dates(a, b, SortOrder.DESC)

    return 0


def compare_songs(a: Song, b: Song, sort: SortState) -> int:
    """Three-way comparator implementing the catalog sort rules."""
    if sort.field is SortField.TIME:
        return _compare_by_time(a, b, sort.order)
    return _compare_by_name(a, b, sort.order)


def sort_songs(songs: Iterable[Song], sort: SortState) -> list[Song]:
    """Return a new, stably sorted list of `songs`."""
    return sorted(songs, key=cmp_to_key(partial(compare_songs, sort=sort)))


# ---------------------------------------------------------------------------
# Query
# ---------------------------------------------------------------------------


def query(
    songs: Sequence[Song],
    filters: FilterState,
    sort: SortState,
) -> list[Song]:
    """Return the songs matching `filters`, ordered by `sort`."""
    result = sort_songs(filter_songs(songs, filters), sort)
    logger.debug(
        "Query matched %d of %d songs (filters=%s, sort=%s/%s).",
        len(result),
        len(songs),
        filters,
        sort.field.value,
        sort.order.value,
    )
    return result
