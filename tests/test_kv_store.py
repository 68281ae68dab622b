# tests/test_kv_store.py

from __future__ import annotations

from pathlib import Path

from daybook.storage.kv_store import SqliteKeyValueStore


def test_get_set_remove(tmp_path: Path) -> None:
    store = SqliteKeyValueStore(tmp_path / "slots.sqlite3")
    assert store.get("tasks") is None

    store.set("tasks", "{}")
    store.set("tasks", '{"1": []}')
    assert store.get("tasks") == '{"1": []}'
    assert store.count_slots() == 1

    store.remove("tasks")
    assert store.get("tasks") is None
    store.remove("tasks")


def test_set_many_survives_reopen(tmp_path: Path) -> None:
    db = tmp_path / "nested" / "slots.sqlite3"
    SqliteKeyValueStore(db).set_many({"a": "1", "b": "2"})

    reopened = SqliteKeyValueStore(db)
    assert reopened.get("a") == "1"
    assert reopened.get("b") == "2"
    assert reopened.count_slots() == 2
