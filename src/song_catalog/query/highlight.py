# song_catalog/query/highlight.py

"""Mark occurrences of the search query inside displayed text."""

from __future__ import annotations

import re


def highlight_spans(text: str, query: str) -> list[tuple[str, bool]]:
    """Split `text` into (segment, matched) pairs.

    Every case-insensitive occurrence of `query` is a matched segment. The
    query is matched literally, never as a regular expression.
    """
    if not query or not text:
        return [(text, False)]

    pattern = re.compile(re.escape(query), re.IGNORECASE)
    spans: list[tuple[str, bool]] = []
    pos = 0
    for match in pattern.finditer(text):
        if match.start() > pos:
            spans.append((text[pos : match.start()], False))
        spans.append((match.group(0), True))
        pos = match.end()
    if pos < len(text):
        spans.append((text[pos:], False))
    return spans


def highlight(
    text: str,
    query: str,
    *,
    open_mark: str = "<mark>",
    close_mark: str = "</mark>",
) -> str:
    """Wrap every occurrence of `query` in `text` with the given markers."""
    return "".join(
        f"{open_mark}{segment}{close_mark}" if matched else segment
        for segment, matched in highlight_spans(text, query)
    )
