from __future__ import annotations

import pytest

from song_catalog.domain.models import ALL, UNKNOWN_YEAR
from song_catalog.query.facets import build_facets, get_facet_counts


@pytest.fixture
def songs(make_song):
    return [
        make_song(1, year="2003", album_name="叶惠美", song_type="流行", language="国语"),
        make_song(2, year=2020, album_name="First", song_type="摇滚", language="英语"),
        make_song(3, year="0000", album_name="", song_type="无信息"),
        make_song(4, year="1999", album_name="First", song_type="流行", language="国语"),
        make_song(5, year="2010"),
    ]


def test_years_are_distinct_newest_first(songs) -> None:
    facets = build_facets(songs)
    assert facets.years == ("2020", "2010", "2003", "1999")


def test_sentinels_and_empty_values_are_excluded(songs) -> None:
    facets = build_facets(songs)
    assert facets.albums == ("First", "叶惠美")
    assert facets.genres == ("摇滚", "流行")
    assert facets.languages == ("国语", "英语")


def test_unknown_year_option_is_always_available(make_song) -> None:
    facets = build_facets([make_song(1, song_time_public="2020-01-01", year="2020")])
    assert facets.year_options == (ALL, UNKNOWN_YEAR, "2020")
    assert build_facets([]).year_options == (ALL, UNKNOWN_YEAR)


def test_facet_counts(songs) -> None:
    assert get_facet_counts(songs, "genre") == [("流行", 2), ("摇滚", 1)]
    assert get_facet_counts(songs, "album") == [("First", 2), ("叶惠美", 1)]


def test_unknown_facet_name(songs) -> None:
    with pytest.raises(ValueError):
        get_facet_counts(songs, "mood")
