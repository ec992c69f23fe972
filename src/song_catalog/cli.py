# song_catalog/cli.py

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path

from song_catalog import config
from song_catalog.domain.models import (
    ALL,
    FilterState,
    SortField,
    SortOrder,
    SortState,
)
from song_catalog.history.store import JsonFileStore, SearchHistory
from song_catalog.io.songs_json import save_songs_to_json, song_to_raw
from song_catalog.query.engine import query
from song_catalog.query.facets import build_facets, get_facet_counts
from song_catalog.render import (
    LOAD_FAILED,
    format_detail,
    format_facets,
    format_song_list,
)
from song_catalog.repository import SongRepository, load_repository

logger = logging.getLogger(__name__)

FACET_CHOICES = ["year", "album", "genre", "language", "singer_type"]


def main(argv: list[str] | None = None) -> int:
    """Entry point for the song-catalog CLI. Returns the exit status."""
    args = _build_arg_parser().parse_args(argv)

    _configure_logging(verbose=args.verbose)

    try:
        timeout = config.get_http_timeout()
    except ValueError as exc:
        print(f"Invalid configuration: {exc}", file=sys.stderr)
        return 1

    history = SearchHistory(JsonFileStore(Path(args.history_file)))

    if args.command == "history":
        return _cmd_history(args, history=history, timeout=timeout)

    repo = load_repository(args.data, timeout=timeout)
    if not repo.is_ready:
        print(LOAD_FAILED, file=sys.stderr)
        return 1

    if args.command == "list":
        return _cmd_list(args, repo=repo, history=history)
    if args.command == "facets":
        return _cmd_facets(args, repo=repo)
    if args.command == "show":
        return _cmd_show(args, repo=repo)

    msg = f"Unknown command: {args.command}"
    raise ValueError(msg)


def _add_query_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--singer-type", default=ALL, help="Singer type, e.g. 独唱.")
    parser.add_argument(
        "--year",
        default=ALL,
        help="Release year, 'unknown' for songs without a valid time, or 'all'.",
    )
    parser.add_argument("--album", default=ALL, help="Exact album name.")
    parser.add_argument("--genre", default=ALL, help="Exact genre.")
    parser.add_argument("--language", default=ALL, help="Exact language.")
    parser.add_argument(
        "--sort",
        choices=[f.value for f in SortField],
        default=SortField.TIME.value,
        help="Sort field (default: %(default)s).",
    )
    parser.add_argument(
        "--order",
        choices=[o.value for o in SortOrder],
        default=SortOrder.DESC.value,
        help="Sort direction (default: %(default)s).",
    )
    parser.add_argument(
        "--json",
        action="store_true",
        help="Print the result as a JSON array instead of text.",
    )
    parser.add_argument(
        "--output",
        default=None,
        help="Also write the result to this JSON file.",
    )


def _build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="song-catalog",
        description="Browse, filter and search a static song catalog.",
    )

    parser.add_argument(
        "--data",
        default=config.get_data_source(),
        help="Catalog JSON file or http(s) URL (default: %(default)s).",
    )
    parser.add_argument(
        "--history-file",
        default=str(config.get_history_path()),
        help="Where search history is stored (default: %(default)s).",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable verbose logging.",
    )

    subparsers = parser.add_subparsers(
        dest="command",
        required=True,
        help="Sub-command to run.",
    )

    list_parser = subparsers.add_parser(
        "list",
        help="List songs matching the given filters.",
    )
    list_parser.add_argument(
        "--search",
        default="",
        help="Case-insensitive text searched in name, singers and album.",
    )
    _add_query_arguments(list_parser)

    facets_parser = subparsers.add_parser(
        "facets",
        help="Show the selectable values of every facet.",
    )
    facets_parser.add_argument(
        "--counts",
        choices=FACET_CHOICES,
        default=None,
        help="Show song counts per value of one facet instead.",
    )

    show_parser = subparsers.add_parser(
        "show",
        help="Show details and lyric of one song.",
    )
    show_parser.add_argument("song_id", type=int, help="Song ID.")

    history_parser = subparsers.add_parser(
        "history",
        help="Show, clear or re-run past searches.",
    )
    group = history_parser.add_mutually_exclusive_group()
    group.add_argument(
        "--clear",
        action="store_true",
        help="Forget all past searches.",
    )
    group.add_argument(
        "--run",
        type=int,
        metavar="N",
        default=None,
        help="Re-run entry N (1 = most recent) as a search.",
    )
    _add_query_arguments(history_parser)

    return parser


def _configure_logging(*, verbose: bool) -> None:
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )


def _filters_from_args(args: argparse.Namespace, search: str) -> FilterState:
    return FilterState(
        singer_type=args.singer_type,
        year=args.year,
        album=args.album,
        genre=args.genre,
        language=args.language,
        search=search,
    )


def _run_query(
    args: argparse.Namespace,
    *,
    repo: SongRepository,
    history: SearchHistory,
    search: str,
) -> int:
    search = search.strip()
    if search:
        history.record(search)

    filters = _filters_from_args(args, search)
    sort = SortState(field=SortField(args.sort), order=SortOrder(args.order))
    songs = query(repo.songs, filters, sort)

    if args.output:
        save_songs_to_json(songs, args.output)
        logger.info("Wrote %s songs to %s.", len(songs), args.output)

    if args.json:
        print(json.dumps([song_to_raw(s) for s in songs], ensure_ascii=False, indent=2))
    else:
        print(format_song_list(songs, search))
    return 0


def _cmd_list(
    args: argparse.Namespace,
    *,
    repo: SongRepository,
    history: SearchHistory,
) -> int:
    return _run_query(args, repo=repo, history=history, search=args.search)


def _cmd_facets(args: argparse.Namespace, *, repo: SongRepository) -> int:
    if args.counts:
        for value, count in get_facet_counts(repo.songs, args.counts):
            print(f"{value}: {count}")
        return 0

    print(format_facets(build_facets(repo.songs)))
    return 0


def _cmd_show(args: argparse.Namespace, *, repo: SongRepository) -> int:
    song = repo.get(args.song_id)
    if song is None:
        print(f"No song with ID {args.song_id}.", file=sys.stderr)
        return 1
    print(format_detail(song))
    return 0


def _cmd_history(
    args: argparse.Namespace,
    *,
    history: SearchHistory,
    timeout: float,
) -> int:
    if args.clear:
        history.clear()
        logger.info("Search history cleared.")
        return 0

    entries = history.list()

    if args.run is not None:
        if not 1 <= args.run <= len(entries):
            print(f"No history entry {args.run}.", file=sys.stderr)
            return 1
        repo = load_repository(args.data, timeout=timeout)
        if not repo.is_ready:
            print(LOAD_FAILED, file=sys.stderr)
            return 1
        return _run_query(args, repo=repo, history=history, search=entries[args.run - 1])

    for number, entry in enumerate(entries, start=1):
        print(f"{number}. {entry}")
    return 0


if __name__ == "__main__":
    # python -m song_catalog.cli --data music_data.json list --year unknown --sort name
    # python -m song_catalog.cli list --search 晴天 --order asc
    sys.exit(main())
