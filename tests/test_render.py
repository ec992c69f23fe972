from __future__ import annotations

from song_catalog.domain.models import Facets
from song_catalog.render import (
    NO_LYRIC,
    NO_RESULTS,
    format_detail,
    format_facets,
    format_song_list,
    format_song_row,
)


def test_row_uses_fallbacks(make_song) -> None:
    song = make_song(3, song_name="无题", singer_name=["甲", "乙"])
    row = format_song_row(song)
    assert "甲 / 乙" in row
    assert "未知专辑" in row
    assert "未知时间" in row
    assert "无信息" not in row


def test_row_highlights_query(make_song) -> None:
    song = make_song(1, song_name="Alpha")
    assert "[A]lph[a]" in format_song_row(song, "a")


def test_empty_list(make_song) -> None:
    text = format_song_list([])
    assert "共 0 首" in text
    assert NO_RESULTS in text


def test_list_count(make_song) -> None:
    text = format_song_list([make_song(1), make_song(2)])
    assert text.splitlines()[0] == "共 2 首"


def test_detail_with_all_fields(make_song) -> None:
    song = make_song(
        1,
        song_name="晴天",
        singer_name=["周杰伦"],
        album_name="叶惠美",
        song_time_public="2003-07-31",
        year="2003",
        song_type="流行",
        language="国语",
        song_url="https://example.com/1",
        lyric="故事的小黄花",
    )
    text = format_detail(song)
    assert text.splitlines()[0] == "晴天"
    assert "发行时间: 2003-07-31" in text
    assert "流派: 流行" in text
    assert "外部链接: https://example.com/1" in text
    assert text.endswith("故事的小黄花")


def test_detail_fallbacks(make_song) -> None:
    text = format_detail(make_song(9, song_name="无题"))
    assert "专辑: 未知" in text
    assert "发行时间: 未知" in text
    assert "流派: 未知" in text
    assert "外部链接: #" in text
    assert text.endswith(NO_LYRIC)


def test_facets_listing() -> None:
    facets = Facets(years=("2020",), albums=("x" * 25,), genres=("流行",))
    text = format_facets(facets)
    assert "全部年份" in text
    assert "未知时间 / 无年份" in text
    assert "2020年" in text
    assert "x" * 20 + "..." in text
