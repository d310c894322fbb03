"""
infrastructure.storage.kv_store - Key-value store backends.

Both classes implement the KeyValueStore port, a flat string-to-string
namespace mirroring browser localStorage (getItem/setItem/removeItem).

    MemoryKeyValueStore  - dict-backed, lives as long as the process
    SQLiteKeyValueStore  - one row per key in a local SQLite file, so state
                           survives between CLI invocations
"""

from __future__ import annotations

import logging
import sqlite3
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator, Optional, Union

logger = logging.getLogger(__name__)


class MemoryKeyValueStore:
    """In-process store. Used by tests and the "memory" backend."""

    def __init__(self, initial: Optional[dict[str, str]] = None):
        self._items: dict[str, str] = dict(initial or {})

    def get_item(self, key: str) -> Optional[str]:
        return self._items.get(key)

    def set_item(self, key: str, value: str) -> None:
        self._items[key] = value

    def remove_item(self, key: str) -> None:
        self._items.pop(key, None)

    def keys(self) -> list[str]:
        return sorted(self._items)

    def clear(self) -> None:
        self._items.clear()


class SQLiteKeyValueStore:
    """SQLite-backed store. Call run_migrations() once before first use.

    Usage:
        store = SQLiteKeyValueStore("remissio.db")
        run_migrations(store)
        store.set_item("moods", "[]")
    """

    def __init__(self, db_path: Union[str, Path]):
        self._db_path = str(db_path)

    @property
    def db_path(self) -> str:
        return self._db_path

    @contextmanager
    def connection(self) -> Iterator[sqlite3.Connection]:
        """Yield a connection; commit on success, roll back on error, always close.

        Raises:
            sqlite3.Error: Propagated after rollback if a DB error occurs.
        """
        conn = sqlite3.connect(self._db_path)
        try:
            yield conn
            conn.commit()
        except sqlite3.Error:
            conn.rollback()
            logger.exception("Storage operation failed, transaction rolled back.")
            raise
        finally:
            conn.close()

    def get_item(self, key: str) -> Optional[str]:
        with self.connection() as conn:
            row = conn.execute(
                "SELECT value FROM storage WHERE key = ?", (key,),
            ).fetchone()
        return row[0] if row else None

    def set_item(self, key: str, value: str) -> None:
        with self.connection() as conn:
            conn.execute(
                """INSERT INTO storage (key, value) VALUES (?, ?)
                   ON CONFLICT(key) DO UPDATE SET value = excluded.value""",
                (key, value),
            )

    def remove_item(self, key: str) -> None:
        with self.connection() as conn:
            conn.execute("DELETE FROM storage WHERE key = ?", (key,))

    def keys(self) -> list[str]:
        with self.connection() as conn:
            rows = conn.execute("SELECT key FROM storage ORDER BY key").fetchall()
        return [r[0] for r in rows]

    def clear(self) -> None:
        with self.connection() as conn:
            conn.execute("DELETE FROM storage")
