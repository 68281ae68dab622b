# tests/conftest.py

from __future__ import annotations

from pathlib import Path
from types import SimpleNamespace

import pytest

from daybook.cli.bootstrap import create_initial_state
from daybook.core.state import AppState
from daybook.storage.kv_store import SqliteKeyValueStore
from daybook.tasks.board import Board

from .fakes import FakeClock, RecordingStore


@pytest.fixture()
def settings(tmp_path: Path) -> SimpleNamespace:
    """
    Minimal settings object compatible with AppState and bootstrap.

    We intentionally use a SimpleNamespace rather than importing real config,
    to keep unit tests isolated and deterministic.
    """
    return SimpleNamespace(
        app_name="daybook-test",
        log_level="DEBUG",
        console_enabled=False,
        prune_empty_lists=True,
        data_dir=tmp_path,
        store_db_path=tmp_path / "daybook.sqlite3",
        in_memory=False,
    )


@pytest.fixture()
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture()
def store() -> RecordingStore:
    return RecordingStore()


@pytest.fixture()
def board(store: RecordingStore, clock: FakeClock) -> Board:
    return Board(store=store, now=clock)


@pytest.fixture()
def state(settings: SimpleNamespace) -> AppState:
    """
    AppState wired through the real bootstrap.

    NOTE: We keep a real SQLite store here because persistence is part of what
    we want to test.
    """
    return create_initial_state(settings=settings, store=SqliteKeyValueStore(settings.store_db_path))
