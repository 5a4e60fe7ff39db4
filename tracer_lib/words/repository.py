"""Word and settings persistence.

The tracing core never touches storage; it reads words through the
WordRepository protocol. This module provides the implementations used by
hosts:

    InMemoryWordRepository: Plain list, for tests and throwaway sessions.
    KeyValueStore: sqlite3-backed string store with local-storage semantics.
    JsonWordRepository: Custom words as a JSON-serialized list under one key.
    WordLibrary: Default words followed by custom words.
    SettingsRepository: Background colour and font family.

Example usage::

    store = KeyValueStore('tracer.db')
    library = WordLibrary(JsonWordRepository(store))
    library.append(WordEntry('moon', emoji='\U0001F4DD'))
    [w.text for w in library.list()][-1]   # 'moon'
"""

from __future__ import annotations

import json
import logging
import sqlite3
from collections.abc import Sequence
from typing import List, Optional, Protocol

from ..config import BG_COLOR_KEY, CUSTOM_WORDS_KEY, FONT_KEY
from ..domain.words import WordEntry
from .library import INITIAL_WORDS

logger = logging.getLogger(__name__)

SCHEMA = """
CREATE TABLE IF NOT EXISTS kv_store (
    key TEXT PRIMARY KEY,
    value TEXT NOT NULL
);
"""


class WordRepository(Protocol):
    """Ordered word source."""

    def list(self) -> List[WordEntry]:
        """All words in display order."""
        ...

    def append(self, entry: WordEntry) -> bool:
        """Add a word at the end. Returns False if it could not be stored."""
        ...


class InMemoryWordRepository:
    """Word repository backed by a list."""

    def __init__(self, entries: Sequence[WordEntry] = ()):
        self._entries = list(entries)

    def list(self) -> List[WordEntry]:
        return list(self._entries)

    def append(self, entry: WordEntry) -> bool:
        self._entries.append(entry)
        return True


class KeyValueStore:
    """String key-value store on sqlite3, modelled on browser local storage.

    One connection is held for the lifetime of the store so that
    ``':memory:'`` databases keep their contents.

    Attributes:
        db_path: Path of the SQLite database file, or ':memory:'.
    """

    def __init__(self, db_path: str = ':memory:'):
        self.db_path = db_path
        self._conn = sqlite3.connect(db_path)
        self._conn.executescript(SCHEMA)

    def get_item(self, key: str) -> Optional[str]:
        """Value stored under ``key``, or None."""
        try:
            row = self._conn.execute(
                "SELECT value FROM kv_store WHERE key = ?", (key,)
            ).fetchone()
        except sqlite3.Error as e:
            logger.warning("Database error reading key=%s: %s", key, e)
            return None
        return row[0] if row else None

    def set_item(self, key: str, value: str) -> bool:
        """Store ``value`` under ``key``. Returns False on a storage error."""
        try:
            with self._conn:
                self._conn.execute(
                    "INSERT OR REPLACE INTO kv_store (key, value) VALUES (?, ?)",
                    (key, value)
                )
        except sqlite3.Error as e:
            logger.warning("Database error writing key=%s: %s", key, e)
            return False
        return True

    def remove_item(self, key: str) -> None:
        with self._conn:
            self._conn.execute("DELETE FROM kv_store WHERE key = ?", (key,))

    def close(self) -> None:
        self._conn.close()


class JsonWordRepository:
    """Custom words persisted as one JSON list in a KeyValueStore.

    Unreadable JSON is logged and treated as an empty list; entries that
    are not valid words are skipped.
    """

    def __init__(self, store: KeyValueStore, key: str = CUSTOM_WORDS_KEY):
        self.store = store
        self.key = key

    def list(self) -> List[WordEntry]:
        raw = self.store.get_item(self.key)
        if not raw:
            return []
        try:
            items = json.loads(raw)
        except json.JSONDecodeError as e:
            logger.error("Failed to load custom words: %s", e)
            return []
        if not isinstance(items, list):
            logger.error("Custom words under %s are not a list", self.key)
            return []

        entries = []
        for item in items:
            try:
                entries.append(WordEntry.from_dict(item))
            except (ValueError, AttributeError) as e:
                logger.warning("Skipping invalid custom word: %s", e)
        return entries

    def append(self, entry: WordEntry) -> bool:
        items = [w.to_dict() for w in self.list()]
        items.append(entry.to_dict())
        return self.store.set_item(self.key, json.dumps(items))


class WordLibrary:
    """Default words followed by the custom words of ``custom``."""

    def __init__(self, custom: WordRepository | None = None,
                 defaults: Sequence[WordEntry] = INITIAL_WORDS):
        self.custom = custom if custom is not None else InMemoryWordRepository()
        self.defaults = tuple(defaults)

    def list(self) -> List[WordEntry]:
        return [*self.defaults, *self.custom.list()]

    def append(self, entry: WordEntry) -> bool:
        return self.custom.append(entry)


class SettingsRepository:
    """Appearance settings kept in a KeyValueStore."""

    def __init__(self, store: KeyValueStore):
        self.store = store

    def background_color(self, default: str) -> str:
        return self.store.get_item(BG_COLOR_KEY) or default

    def set_background_color(self, color: str) -> bool:
        return self.store.set_item(BG_COLOR_KEY, color)

    def font_family(self, default: str) -> str:
        return self.store.get_item(FONT_KEY) or default

    def set_font_family(self, family: str) -> bool:
        return self.store.set_item(FONT_KEY, family)
