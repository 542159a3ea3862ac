"""Tests for key-value storage backends."""

import sqlite3

import pytest

from clubportal.error_codes import ErrorCode
from clubportal.exceptions import StorageError
from clubportal.services.storage import MemoryKeyValueStore
from clubportal.services.storage import SQLiteKeyValueStore


@pytest.fixture(params=["memory", "sqlite"])
def kv_store(request, tmp_path):
    if request.param == "memory":
        return MemoryKeyValueStore()
    return SQLiteKeyValueStore(str(tmp_path / "data" / "store.db"))


def test_get_missing_slot(kv_store):
    """Test that an empty slot reads as None."""
    assert kv_store.get("clubs") is None
    assert kv_store.keys() == []


def test_set_overwrites_slot(kv_store):
    """Test whole-slot overwrite semantics."""
    kv_store.set("clubs", "[1]")
    kv_store.set("clubs", "[1, 2]")
    assert kv_store.get("clubs") == "[1, 2]"
    assert kv_store.keys() == ["clubs"]


def test_delete(kv_store):
    """Test deleting present and absent slots."""
    kv_store.set("currentUser", "null")
    kv_store.delete("currentUser")
    kv_store.delete("currentUser")
    assert kv_store.get("currentUser") is None


def test_sqlite_store_persists_across_instances(tmp_path):
    """Test that a new store on the same file sees earlier writes."""
    db_path = str(tmp_path / "store.db")
    SQLiteKeyValueStore(db_path).set("clubs", '[{"id": 1}]')
    assert SQLiteKeyValueStore(db_path).get("clubs") == '[{"id": 1}]'


def test_sqlite_store_keeps_unicode(tmp_path):
    """Test round trip of non-ASCII text."""
    store = SQLiteKeyValueStore(str(tmp_path / "store.db"))
    store.set("currentUser", '{"name": "Zoë", "roll": "7"}')
    assert store.get("currentUser") == '{"name": "Zoë", "roll": "7"}'


def test_sqlite_errors_become_storage_errors(tmp_path, monkeypatch):
    """Test that database failures are reported as StorageError."""
    store = SQLiteKeyValueStore(str(tmp_path / "store.db"))

    def broken_connect(*args, **kwargs):
        raise sqlite3.OperationalError("disk I/O error")

    monkeypatch.setattr(sqlite3, "connect", broken_connect)

    with pytest.raises(StorageError) as exc_info:
        store.get("clubs")
    assert exc_info.value.code == ErrorCode.STORAGE_UNAVAILABLE
    assert exc_info.value.slot == "clubs"

    with pytest.raises(StorageError):
        store.set("clubs", "[]")
