# song_catalog/history/store.py

"""Bounded, deduplicated search history backed by a key-value slot."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Protocol

logger = logging.getLogger(__name__)

HISTORY_KEY = "wzls_history"
MAX_ENTRIES = 8


class KeyValueStore(Protocol):
    """String-keyed storage holding string values (like browser localStorage)."""

    def get_item(self, key: str) -> str | None: ...

    def set_item(self, key: str, value: str) -> None: ...

    def remove_item(self, key: str) -> None: ...


class MemoryStore:
    """Process-local KeyValueStore, mostly for tests and one-shot runs."""

    def __init__(self, initial: dict[str, str] | None = None) -> None:
        self._data: dict[str, str] = dict(initial or {})

    def get_item(self, key: str) -> str | None:
        return self._data.get(key)

    def set_item(self, key: str, value: str) -> None:
        self._data[key] = value

    def remove_item(self, key: str) -> None:
        self._data.pop(key, None)


class JsonFileStore:
    """KeyValueStore persisted as one JSON object in a file.

    A missing or unreadable file behaves like an empty store.
    """

    def __init__(self, path: Path) -> None:
        self._path = Path(path)

    @property
    def path(self) -> Path:
        return self._path

    def _read(self) -> dict[str, str]:
        if not self._path.exists():
            return {}
        try:
            with self._path.open("r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as exc:
            logger.warning("Ignoring unreadable storage file %s: %s", self._path, exc)
            return {}
        if not isinstance(data, dict):
            logger.warning("Ignoring storage file %s: not a JSON object", self._path)
            return {}
        return {str(k): v for k, v in data.items() if isinstance(v, str)}

    def _write(self, data: dict[str, str]) -> None:
        self._path.parent.mkdir(parents=True, exist_ok=True)
        with self._path.open("w", encoding="utf-8") as f:
            json.dump(data, f, ensure_ascii=False, indent=2)

    def get_item(self, key: str) -> str | None:
        return self._read().get(key)

    def set_item(self, key: str, value: str) -> None:
        data = self._read()
        data[key] = value
        self._write(data)

    def remove_item(self, key: str) -> None:
        data = self._read()
        if data.pop(key, None) is not None:
            self._write(data)


def _decode_history(raw: str | None) -> list[str]:
    if raw is None:
        return []
    try:
        value = json.loads(raw)
    except json.JSONDecodeError as exc:
        logger.warning("Discarding corrupt search history: %s", exc)
        return []
    if not isinstance(value, list):
        logger.warning("Discarding search history that is not a list.")
        return []

    entries: list[str] = []
    for item in value:
        if isinstance(item, str) and item not in entries:
            entries.append(item)
    return entries[:MAX_ENTRIES]


class SearchHistory:
    """Most-recent-first list of past search queries, capped at MAX_ENTRIES.

    The list is loaded from `store` on construction and written back after
    every mutation.
    """

    def __init__(
        self,
        store: KeyValueStore,
        *,
        key: str = HISTORY_KEY,
        max_entries: int = MAX_ENTRIES,
    ) -> None:
        if max_entries < 1:
            msg = "max_entries must be >= 1."
            raise ValueError(msg)
        self._store = store
        self._key = key
        self._max_entries = max_entries
        self._entries = _decode_history(store.get_item(key))[:max_entries]

    def list(self) -> list[str]:
        """Return a copy of the history, most recent first."""
        return list(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def record(self, query: str) -> None:
        """Move `query` to the front, dropping duplicates and old entries."""
        entries = [q for q in self._entries if q != query]
        entries.insert(0, query)
        self._entries = entries[: self._max_entries]
        self._store.set_item(
            self._key,
            json.dumps(self._entries, ensure_ascii=False),
        )

    def clear(self) -> None:
        self._entries = []
        self._store.remove_item(self._key)
