# song_catalog/render.py

"""Plain-text rendering of query results for the terminal."""

from __future__ import annotations

from collections.abc import Sequence

from song_catalog.domain.models import ALL, UNKNOWN_YEAR, Facets, Song, has_valid_time
from song_catalog.query.highlight import highlight

UNKNOWN = "未知"
UNKNOWN_ALBUM = "未知专辑"
UNKNOWN_TIME = "未知时间"
NO_LYRIC = "暂无歌词"
NO_RESULTS = "没有找到符合条件的歌曲"
LOAD_FAILED = "数据加载失败，请检查 music_data.json 文件"

YEAR_LABELS = {ALL: "全部年份", UNKNOWN_YEAR: "未知时间 / 无年份"}
ALBUM_LABEL_WIDTH = 20

# Terminal-friendly stand-ins for <mark>...</mark>.
MARK_OPEN = "["
MARK_CLOSE = "]"


def display_time(song: Song) -> str | None:
    return song.song_time_public if has_valid_time(song) else None


def format_singers(song: Song) -> str:
    return " / ".join(song.singer_name)


def format_count(count: int) -> str:
    return f"共 {count} 首"


def format_song_row(song: Song, query: str = "") -> str:
    """One list line: name, singers, album, time, language, genre, badge."""
    name = highlight(song.song_name, query, open_mark=MARK_OPEN, close_mark=MARK_CLOSE)
    parts = [
        name,
        format_singers(song),
        song.album_name or UNKNOWN_ALBUM,
        display_time(song) or UNKNOWN_TIME,
    ]
    if song.language:
        parts.append(song.language)
    if song.song_type:
        parts.append(song.song_type)
    return f"#{song.song_id}  " + "  |  ".join(parts) + f"  ({song.singer_type})"


def format_song_list(songs: Sequence[Song], query: str = "") -> str:
    if not songs:
        return "\n".join([format_count(0), NO_RESULTS])
    lines = [format_count(len(songs))]
    lines.extend(format_song_row(song, query) for song in songs)
    return "\n".join(lines)


def format_detail(song: Song) -> str:
    """Detail view: info rows followed by the lyric."""
    rows = [
        ("歌手", format_singers(song)),
        ("专辑", song.album_name or UNKNOWN),
        ("发行时间", display_time(song) or UNKNOWN),
        ("演唱形式", song.singer_type),
        ("语言", song.language or UNKNOWN),
        ("流派", song.song_type or UNKNOWN),
        ("歌曲ID", str(song.song_id)),
        ("外部链接", song.song_url or "#"),
    ]
    lines = [song.song_name, ""]
    lines.extend(f"{label}: {value}" for label, value in rows)
    lines.append("")
    lines.append(song.lyric or NO_LYRIC)
    return "\n".join(lines)


def _album_label(album: str) -> str:
    if len(album) > ALBUM_LABEL_WIDTH:
        return album[:ALBUM_LABEL_WIDTH] + "..."
    return album


def format_facets(facets: Facets) -> str:
    """List the selectable options of every facet."""
    years = [YEAR_LABELS.get(y, f"{y}年") for y in facets.year_options]
    sections = [
        ("年份", years),
        ("专辑", [_album_label(a) for a in facets.albums]),
        ("流派", list(facets.genres)),
        ("语言", list(facets.languages)),
    ]
    lines: list[str] = []
    for title, options in sections:
        lines.append(f"{title}:")
        lines.extend(f"  {option}" for option in options)
    return "\n".join(lines)
