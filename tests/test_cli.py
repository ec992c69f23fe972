from __future__ import annotations

import json
from pathlib import Path

import pytest

from song_catalog.cli import main
from song_catalog.render import LOAD_FAILED


@pytest.fixture
def base_args(tmp_path: Path, catalog_file: Path) -> list[str]:
    return [
        "--data",
        str(catalog_file),
        "--history-file",
        str(tmp_path / "storage.json"),
    ]


def test_list_default_sort(base_args, capsys) -> None:
    assert main([*base_args, "list"]) == 0
    lines = capsys.readouterr().out.splitlines()
    assert lines[0] == "共 3 首"
    # Newest first, undated last.
    assert lines[1].startswith("#2 ")
    assert lines[2].startswith("#1 ")
    assert lines[3].startswith("#3 ")


def test_list_json_with_filters(base_args, capsys) -> None:
    assert main([*base_args, "list", "--year", "unknown", "--json"]) == 0
    records = json.loads(capsys.readouterr().out)
    assert [r["song_id"] for r in records] == [3]


def test_list_writes_output_file(base_args, tmp_path: Path, capsys) -> None:
    out = tmp_path / "result.json"
    assert main([*base_args, "list", "--language", "国语", "--output", str(out)]) == 0
    records = json.loads(out.read_text(encoding="utf-8"))
    assert [r["song_id"] for r in records] == [1]


def test_search_is_recorded_and_rerun(base_args, capsys) -> None:
    assert main([*base_args, "list", "--search", "  alpha  "]) == 0
    assert "[Alpha]" in capsys.readouterr().out

    assert main([*base_args, "history"]) == 0
    assert capsys.readouterr().out.splitlines() == ["1. alpha"]

    assert main([*base_args, "history", "--run", "1", "--json"]) == 0
    records = json.loads(capsys.readouterr().out)
    assert [r["song_id"] for r in records] == [2]


def test_blank_search_is_not_recorded(base_args, capsys) -> None:
    assert main([*base_args, "list", "--search", "   "]) == 0
    capsys.readouterr()
    assert main([*base_args, "history"]) == 0
    assert capsys.readouterr().out == ""
    assert main([*base_args, "history", "--run", "1"]) == 1


def test_history_clear(base_args, capsys) -> None:
    main([*base_args, "list", "--search", "晴"])
    assert main([*base_args, "history", "--clear"]) == 0
    capsys.readouterr()
    assert main([*base_args, "history"]) == 0
    assert capsys.readouterr().out == ""


def test_show(base_args, capsys) -> None:
    assert main([*base_args, "show", "1"]) == 0
    out = capsys.readouterr().out
    assert out.startswith("晴天")
    assert "故事的小黄花" in out


def test_show_miss(base_args, capsys) -> None:
    assert main([*base_args, "show", "404"]) == 1
    assert capsys.readouterr().out == ""


def test_facets(base_args, capsys) -> None:
    assert main([*base_args, "facets"]) == 0
    out = capsys.readouterr().out
    assert "2020年" in out
    assert "叶惠美" in out


def test_facet_counts(base_args, capsys) -> None:
    assert main([*base_args, "facets", "--counts", "language"]) == 0
    assert capsys.readouterr().out.splitlines() == ["国语: 1", "英语: 1"]


def test_load_failure(tmp_path: Path, capsys) -> None:
    args = [
        "--data",
        str(tmp_path / "missing.json"),
        "--history-file",
        str(tmp_path / "storage.json"),
        "list",
    ]
    assert main(args) == 1
    assert LOAD_FAILED in capsys.readouterr().err


@pytest.mark.parametrize("value", ["soon", "-1"])
def test_bad_timeout_setting_is_reported(base_args, monkeypatch, capsys, value) -> None:
    monkeypatch.setenv("SONG_CATALOG_TIMEOUT", value)
    assert main([*base_args, "list"]) == 1
    captured = capsys.readouterr()
    assert "SONG_CATALOG_TIMEOUT" in captured.err
    assert captured.out == ""
