"""
application.context - Explicit storage client passed to every service.

Replaces a process-wide "current client instance" singleton. Whoever
builds a StorageContext (normally ServiceFactory) decides which store it
wraps; two contexts over two stores never see each other's data.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from uuid import uuid4

from remissio.domain.ports import Clock
from remissio.domain.timestamps import utc_now
from remissio.infrastructure.storage.local_auth import LocalAuth
from remissio.infrastructure.storage.local_db import LocalDatabase
from remissio.infrastructure.storage.object_storage import ObjectStorage


@dataclass
class StorageContext:
    """Bundle of the shims a service needs.

    Attributes:
        db:         Query-like access to the record collections.
        auth:       Current-user state and account records.
        storage:    Signed URLs for stored files (meal images).
        clock:      Time source shared with db, so "today" agrees everywhere.
        context_id: Unique per context, for tracing/logging.
    """
    db: LocalDatabase
    auth: LocalAuth
    storage: ObjectStorage = field(default_factory=ObjectStorage)
    clock: Clock = utc_now
    context_id: str = field(default_factory=lambda: uuid4().hex)
