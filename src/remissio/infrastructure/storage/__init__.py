"""
infrastructure.storage - Local storage backends and the shims over them.
"""

from remissio.infrastructure.storage.kv_store import MemoryKeyValueStore, SQLiteKeyValueStore
from remissio.infrastructure.storage.local_auth import LocalAuth
from remissio.infrastructure.storage.local_db import LocalDatabase
from remissio.infrastructure.storage.object_storage import ObjectStorage

__all__ = [
    "LocalAuth",
    "LocalDatabase",
    "MemoryKeyValueStore",
    "ObjectStorage",
    "SQLiteKeyValueStore",
]
