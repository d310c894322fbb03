"""
infrastructure.storage.local_db - Query-like shim over the key-value store.

Each collection is one JSON array stored under the collection's name.
Every public operation returns a Result and never raises: domain errors
(validation, not-found) come back as-is, anything unexpected is logged
with its traceback and wrapped in RepositoryError.

Corrupted collections (invalid JSON, or JSON that is not an array) are
reset to an empty array with a warning and the operation carries on.
Array entries that are not objects never match a query but are written
back untouched, so no stored entry is ever dropped.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Mapping
from typing import Any, Callable, Optional, TypeVar
from uuid import uuid4

from remissio.domain.exceptions import (
    DomainError,
    NotFoundError,
    RepositoryError,
    StorageCorruptionError,
    ValidationError,
)
from remissio.domain.models import (
    Collection,
    Column,
    Result,
    resolve_collection,
    resolve_column,
)
from remissio.domain.ports import Clock, KeyValueStore
from remissio.domain.timestamps import EPOCH_MIN, parse_timestamp, to_iso, utc_now

logger = logging.getLogger(__name__)

T = TypeVar("T")
Record = dict[str, Any]


class LocalDatabase:
    """Select / insert / upsert / update over JSON-array collections."""

    def __init__(self, store: KeyValueStore, clock: Clock = utc_now):
        self._store = store
        self._clock = clock

    # ------------------------------------------------------------------
    # Raw collection access (also used by LocalAuth)
    # ------------------------------------------------------------------

    def read_collection(self, collection: Collection) -> list[Any]:
        """Load the raw array, healing corrupted storage to an empty array.

        Entries come back as stored, objects or not, so a caller that
        writes the array back keeps every entry.
        """
        key = collection.value
        raw = self._store.get_item(key)
        if raw is None:
            return []
        try:
            data = self._decode(key, raw)
        except StorageCorruptionError as exc:
            if isinstance(exc.__cause__, json.JSONDecodeError):
                logger.error("%s; resetting to empty array", exc)
            else:
                logger.warning("%s; resetting to empty array", exc)
            self._store.set_item(key, "[]")
            return []
        return data

    def read_records(self, collection: Collection) -> list[Record]:
        """Only the object entries of a collection, for matching."""
        data = self.read_collection(collection)
        records = [item for item in data if isinstance(item, dict)]
        if len(records) != len(data):
            logger.warning(
                "Skipping %d non-object entries in '%s'",
                len(data) - len(records), collection.value,
            )
        return records

    def write_collection(self, collection: Collection, records: list[Any]) -> None:
        if not isinstance(records, list):
            raise ValidationError(f"Refusing to save non-array data to '{collection.value}'.")
        self._store.set_item(collection.value, json.dumps(records, ensure_ascii=False))
        logger.debug("Saved %d items to '%s'", len(records), collection.value)

    def remove_collection(self, collection: Collection) -> None:
        self._store.remove_item(collection.value)

    def generate_id(self) -> str:
        """Opaque, never-reused identifier: <epoch-millis>-<random>."""
        millis = int(self._clock().timestamp() * 1000)
        return f"{millis}-{uuid4().hex[:9]}"

    def now_iso(self) -> str:
        return to_iso(self._clock())

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def select(
        self,
        collection: Collection | str,
        column: Optional[Column | str] = None,
        value: Any = None,
        *,
        order_by: Optional[Column | str] = None,
        ascending: bool = False,
        limit: Optional[int] = None,
    ) -> Result[list[Record]]:
        """Records where column == value (all records if column is None).

        order_by compares values as timestamps; descending unless
        ascending=True. limit caps the number of results.
        """
        def run() -> list[Record]:
            coll = resolve_collection(collection)
            col = resolve_column(coll, column) if column is not None else None
            order_col = resolve_column(coll, order_by) if order_by is not None else None
            if limit is not None and limit < 0:
                raise ValidationError("limit must not be negative.")

            records = self.read_records(coll)
            if col is not None:
                records = [r for r in records if _same(r.get(col.value), value)]
            logger.debug(
                "Select from '%s' where %s=%r: %d matches",
                coll.value, col.value if col else "*", value, len(records),
            )
            if order_col is not None:
                records = self._sorted(records, order_col, ascending)
            if limit is not None:
                records = records[:limit]
            return [dict(r) for r in records]

        return self._attempt("select", run, [])

    def select_one(
        self,
        collection: Collection | str,
        column: Column | str,
        value: Any,
    ) -> Result[Record]:
        """First record where column == value; NotFoundError if none."""
        def run() -> Record:
            coll = resolve_collection(collection)
            col = resolve_column(coll, column)
            for record in self.read_records(coll):
                if _same(record.get(col.value), value):
                    return dict(record)
            raise NotFoundError(f"No record in '{coll.value}' with {col.value}={value!r}.")

        return self._attempt("select_one", run, None)

    def select_range(
        self,
        collection: Collection | str,
        column: Column | str,
        value: Any,
        lower_column: Column | str,
        lower: Any,
        upper_column: Column | str,
        upper: Any,
    ) -> Result[list[Record]]:
        """column == value AND lower_column >= lower AND upper_column <= upper."""
        def run() -> list[Record]:
            coll = resolve_collection(collection)
            col = resolve_column(coll, column)
            lo_col = resolve_column(coll, lower_column)
            hi_col = resolve_column(coll, upper_column)
            return [
                dict(r) for r in self.read_records(coll)
                if _same(r.get(col.value), value)
                and _compare(r.get(lo_col.value), lower, lambda a, b: a >= b)
                and _compare(r.get(hi_col.value), upper, lambda a, b: a <= b)
            ]

        return self._attempt("select_range", run, [])

    # ------------------------------------------------------------------
    # Writes
    # ------------------------------------------------------------------

    def insert(self, collection: Collection | str, records: Any) -> Result[list[Record]]:
        """Append records, assigning id and created_at where missing."""
        def run() -> list[Record]:
            coll = resolve_collection(collection)
            if not isinstance(records, (list, tuple)):
                raise ValidationError("Items must be an array.")
            if not records:
                logger.warning("Insert into '%s' called with an empty array", coll.value)
                return []
            for item in records:
                if not isinstance(item, Mapping):
                    raise ValidationError("Every item must be an object.")

            data = self.read_collection(coll)
            now = self.now_iso()
            new_items = [
                {
                    **item,
                    "id": item.get("id") or self.generate_id(),
                    "created_at": item.get("created_at") or now,
                }
                for item in records
            ]
            data.extend(new_items)
            self.write_collection(coll, data)
            logger.debug("Inserted %d items into '%s'", len(new_items), coll.value)
            return [dict(r) for r in new_items]

        return self._attempt("insert", run, None)

    def upsert(self, collection: Collection | str, record: Any) -> Result[Record]:
        """Merge into the record with the same id, or append as new."""
        def run() -> Record:
            coll = resolve_collection(collection)
            if not isinstance(record, Mapping):
                raise ValidationError("Upsert expects a single object.")

            data = self.read_collection(coll)
            now = self.now_iso()
            record_id = record.get("id")
            index = _index_of(data, "id", record_id) if record_id else -1

            if index != -1:
                stored = {**data[index], **record, "updated_at": now}
                data[index] = stored
            else:
                stored = {
                    **record,
                    "id": record_id or self.generate_id(),
                    "created_at": record.get("created_at") or now,
                    "updated_at": now,
                }
                data.append(stored)

            self.write_collection(coll, data)
            return dict(stored)

        return self._attempt("upsert", run, None)

    def update(
        self,
        collection: Collection | str,
        patch: Any,
        column: Column | str,
        value: Any,
    ) -> Result[Record]:
        """Patch the first record where column == value; no-op if none."""
        def run() -> Optional[Record]:
            coll = resolve_collection(collection)
            col = resolve_column(coll, column)
            if not isinstance(patch, Mapping):
                raise ValidationError("Update expects an object of fields.")

            data = self.read_collection(coll)
            index = _index_of(data, col.value, value)
            if index == -1:
                logger.debug("Update on '%s': no record with %s=%r", coll.value, col.value, value)
                return None
            data[index] = {**data[index], **patch, "updated_at": self.now_iso()}
            self.write_collection(coll, data)
            return dict(data[index])

        return self._attempt("update", run, None)

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    @staticmethod
    def _decode(key: str, raw: str) -> list:
        try:
            parsed = json.loads(raw)
        except json.JSONDecodeError as exc:
            raise StorageCorruptionError(f"Data in '{key}' is not valid JSON") from exc
        if not isinstance(parsed, list):
            raise StorageCorruptionError(f"Data in '{key}' is not an array")
        return parsed

    @staticmethod
    def _sorted(records: list[Record], column: Column, ascending: bool) -> list[Record]:
        def key(record: Record):
            return parse_timestamp(record.get(column.value)) or EPOCH_MIN
        return sorted(records, key=key, reverse=not ascending)

    @staticmethod
    def _attempt(operation: str, fn: Callable[[], T], default: Any) -> Result[T]:
        try:
            return Result.success(fn())
        except DomainError as exc:
            logger.debug("%s failed: %s", operation, exc)
            return Result.failure(exc, default)
        except Exception as exc:
            logger.exception("Unexpected error in %s", operation)
            return Result.failure(RepositoryError(str(exc) or type(exc).__name__), default)


def _same(actual: Any, expected: Any) -> bool:
    """Equality that never mixes booleans with numbers (True is not 1)."""
    if isinstance(actual, bool) != isinstance(expected, bool):
        return False
    return actual == expected


def _index_of(data: list[Any], field: str, value: Any) -> int:
    """Position of the first object entry whose field equals value, or -1."""
    return next(
        (i for i, r in enumerate(data) if isinstance(r, dict) and _same(r.get(field), value)),
        -1,
    )


def _compare(actual: Any, bound: Any, op: Callable[[Any, Any], bool]) -> bool:
    if actual is None or bound is None:
        return False
    try:
        return bool(op(actual, bound))
    except TypeError:
        return False
