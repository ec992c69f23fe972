# song_catalog/domain/models.py

"""Core domain models for the song catalog and its query state."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from enum import Enum

# Facet value meaning "no constraint" for every selector.
ALL = "all"
# Synthetic year facet value selecting songs without a valid release time.
UNKNOWN_YEAR = "unknown"


@dataclass(frozen=True, slots=True)
class Song:
    """A single song record as loaded from the catalog.

    Sentinel values from the data feed ("0000", "0000-00-00", "无信息") are
    already mapped to None at the ingestion boundary.
    """

    song_id: int
    song_name: str
    singer_name: tuple[str, ...] = ()
    singer_type: str = ""
    album_name: str | None = None
    song_time_public: str | None = None  # e.g. "2020-01-01"
    release_date: date | None = None
    year: str | None = None
    song_type: str | None = None  # genre
    language: str | None = None
    song_url: str | None = None
    lyric: str | None = None


def has_valid_time(song: Song) -> bool:
    """Return True if the song has both a release time and a year."""
    return bool(song.song_time_public) and bool(song.year)


class SortField(str, Enum):
    TIME = "time"
    NAME = "name"


class SortOrder(str, Enum):
    ASC = "asc"
    DESC = "desc"


@dataclass(frozen=True, slots=True)
class FilterState:
    """Facet selectors combined with AND semantics.

    Every selector is either ALL or a concrete value. The year selector also
    accepts UNKNOWN_YEAR. An empty search string means no constraint.
    """

    singer_type: str = ALL
    year: str = ALL
    album: str = ALL
    genre: str = ALL
    language: str = ALL
    search: str = ""


@dataclass(frozen=True, slots=True)
class SortState:
    field: SortField = SortField.TIME
    order: SortOrder = SortOrder.DESC


@dataclass(frozen=True, slots=True)
class Facets:
    """Distinct selectable values per facet, computed once per catalog."""

    years: tuple[str, ...] = ()
    albums: tuple[str, ...] = ()
    genres: tuple[str, ...] = ()
    languages: tuple[str, ...] = ()

    @property
    def year_options(self) -> tuple[str, ...]:
        """Year selector options; UNKNOWN_YEAR is always offered."""
        return (ALL, UNKNOWN_YEAR, *self.years)
