from __future__ import annotations

import json
from collections.abc import Callable
from pathlib import Path
from typing import Any

import pytest

from song_catalog.domain.models import Song
from song_catalog.io.songs_json import song_from_raw


def _raw_song(song_id: int, **fields: Any) -> dict[str, Any]:
    raw: dict[str, Any] = {
        "song_id": song_id,
        "song_name": f"Song {song_id}",
        "singer_name": ["Singer"],
        "singer_type": "独唱",
        "album_name": None,
        "song_time_public": "0000-00-00",
        "year": "0000",
        "song_type": "无信息",
        "language": None,
    }
    raw.update(fields)
    return raw


@pytest.fixture
def make_song() -> Callable[..., Song]:
    """Build a Song through the ingestion path, as the catalog would."""

    def _make(song_id: int, **fields: Any) -> Song:
        return song_from_raw(_raw_song(song_id, **fields))

    return _make


@pytest.fixture
def catalog_records() -> list[dict[str, Any]]:
    return [
        _raw_song(
            1,
            song_name="晴天",
            singer_name=["周杰伦"],
            album_name="叶惠美",
            song_time_public="2003-07-31",
            year="2003",
            song_type="流行",
            language="国语",
            lyric="故事的小黄花",
        ),
        _raw_song(
            2,
            song_name="Alpha",
            singer_name=["Band A", "Band B"],
            singer_type="组合",
            album_name="First",
            song_time_public="2020-01-01",
            year=2020,
            song_type="摇滚",
            language="英语",
        ),
        _raw_song(3, song_name="无题", singer_name=["路人"]),
    ]


@pytest.fixture
def catalog_file(tmp_path: Path, catalog_records: list[dict[str, Any]]) -> Path:
    path = tmp_path / "music_data.json"
    path.write_text(json.dumps(catalog_records, ensure_ascii=False), encoding="utf-8")
    return path
