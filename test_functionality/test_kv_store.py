"""
Key-value store backends and the SQLite schema migration.
"""

import pytest

from remissio.domain.ports import KeyValueStore
from remissio.infrastructure.storage.kv_store import MemoryKeyValueStore, SQLiteKeyValueStore
from remissio.infrastructure.storage.migrations import run_migrations


@pytest.fixture
def sqlite_store(tmp_path):
    s = SQLiteKeyValueStore(tmp_path / "remissio.db")
    run_migrations(s)
    return s


@pytest.fixture(params=["memory", "sqlite"])
def any_store(request, sqlite_store):
    return MemoryKeyValueStore() if request.param == "memory" else sqlite_store


def test_backends_satisfy_port(any_store):
    assert isinstance(any_store, KeyValueStore)


def test_set_get_remove(any_store):
    assert any_store.get_item("moods") is None

    any_store.set_item("moods", "[]")
    any_store.set_item("moods", '[{"id": "1"}]')

    assert any_store.get_item("moods") == '[{"id": "1"}]'
    any_store.remove_item("moods")
    assert any_store.get_item("moods") is None
    any_store.remove_item("moods")


def test_keys_and_clear(any_store):
    any_store.set_item("users", "[]")
    any_store.set_item("meals", "[]")

    assert any_store.keys() == ["meals", "users"]
    any_store.clear()
    assert any_store.keys() == []


def test_sqlite_state_survives_new_instance(tmp_path):
    path = tmp_path / "shared.db"
    first = SQLiteKeyValueStore(path)
    run_migrations(first)
    first.set_item("current_user", '[{"id": "u1"}]')

    second = SQLiteKeyValueStore(path)
    run_migrations(second)

    assert second.get_item("current_user") == '[{"id": "u1"}]'


def test_migrations_are_idempotent(sqlite_store):
    sqlite_store.set_item("k", "v")

    run_migrations(sqlite_store)

    assert sqlite_store.get_item("k") == "v"
