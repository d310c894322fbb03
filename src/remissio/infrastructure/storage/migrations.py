"""
infrastructure.storage.migrations - Storage schema creation.

Called once at startup by the factory when the SQLite backend is used.
"""

from __future__ import annotations

import logging

from remissio.infrastructure.storage.kv_store import SQLiteKeyValueStore

logger = logging.getLogger(__name__)

_TABLES = [
    """CREATE TABLE IF NOT EXISTS storage (
        key TEXT PRIMARY KEY,
        value TEXT NOT NULL
    )""",
]


def run_migrations(store: SQLiteKeyValueStore) -> None:
    """Create all tables if they don't exist.

    Safe to call multiple times (uses IF NOT EXISTS).
    """
    with store.connection() as conn:
        for ddl in _TABLES:
            conn.execute(ddl)
    logger.info("Storage schema ready at %s", store.db_path)
