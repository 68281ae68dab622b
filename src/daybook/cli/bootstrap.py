# src/daybook/cli/bootstrap.py

"""
CLI bootstrap helpers.

This module is the "composition root":
- loads settings once,
- ensures local (gitignored) directories exist,
- opens the slot store, loads and validates the snapshot,
- wires the Board into AppState.
"""

from __future__ import annotations

import logging

from ..config import get_settings
from ..core.ports import KeyValueStore
from ..core.state import AppState
from ..storage.kv_store import InMemoryKeyValueStore, SqliteKeyValueStore
from ..storage.snapshot import load_snapshot
from ..tasks.board import Board

logger = logging.getLogger(__name__)


def _ensure_local_dirs(settings) -> None:
    settings.data_dir.mkdir(parents=True, exist_ok=True)
    if not getattr(settings, "in_memory", False):
        settings.store_db_path.parent.mkdir(parents=True, exist_ok=True)


def open_store(settings) -> KeyValueStore:
    if getattr(settings, "in_memory", False):
        logger.info("Using in-memory store; nothing will survive a restart.")
        return InMemoryKeyValueStore()
    return SqliteKeyValueStore(settings.store_db_path)


def create_initial_state(*, settings=None, store: KeyValueStore | None = None) -> AppState:
    """
    Create AppState from the provided settings.

    Settings and store are injectable for tests; if settings is None, falls back
    to get_settings().
    """
    if settings is None:
        settings = get_settings()

    _ensure_local_dirs(settings)

    if store is None:
        store = open_store(settings)

    snapshot = load_snapshot(store)
    board = Board(
        snapshot,
        store=store,
        prune_empty_lists=bool(getattr(settings, "prune_empty_lists", True)),
    )
    return AppState(settings=settings, store=store, board=board)
