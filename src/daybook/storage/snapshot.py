# src/daybook/storage/snapshot.py

"""
Snapshot codec: BoardState <-> JSON slots of a KeyValueStore.

Each logical collection lives in its own slot. Loading is tolerant:
- a missing or undecodable slot falls back to that slot's default,
- task arrays of the wrong type are repaired to [] (the key is kept),
- if the tasks collection is still structurally unusable after repair, every slot
  is removed and an empty state is returned.

Saving always rewrites every slot in full.
"""

from __future__ import annotations

import json
import logging
from typing import Any

from ..core.ports import KeyValueStore
from ..tasks.models import BoardState, Category, Task, TaskGroup, TaskList

logger = logging.getLogger(__name__)

SLOT_GROUPS = "newTaskGroup"
SLOT_LISTS = "taskLists"
SLOT_TASKS = "tasks"
SLOT_CATEGORIES = "listCategories"
SLOT_COUNTS = "incompleteCounts"
SLOT_EXPANDED = "expandedStates"
SLOT_GROUP_EXPANDED = "taskGroupExpandedStates"
SLOT_TASKS_EXPANDED = "tasksExpandedStates"

ALL_SLOTS: tuple[str, ...] = (
    SLOT_GROUPS,
    SLOT_LISTS,
    SLOT_TASKS,
    SLOT_CATEGORIES,
    SLOT_COUNTS,
    SLOT_EXPANDED,
    SLOT_GROUP_EXPANDED,
    SLOT_TASKS_EXPANDED,
)


def _default_for(slot: str) -> Any:
    return [] if slot == SLOT_GROUPS else {}


def _int_key(raw: Any) -> int | None:
    if isinstance(raw, bool):
        return None
    try:
        return int(raw)
    except (TypeError, ValueError, OverflowError):
        # OverflowError: JSON 1e400 / Infinity decode to float("inf").
        return None


# ---- per-slot decoding ----


def load_slot(store: KeyValueStore, slot: str) -> Any:
    """
    Read and JSON-decode one slot.

    Missing slot, malformed JSON or a top-level value of the wrong kind all yield
    the slot's default. The tasks slot additionally gets non-array values coerced
    to [].
    """
    default = _default_for(slot)
    raw = store.get(slot)
    if not raw:
        return default

    try:
        parsed = json.loads(raw)
    except (ValueError, RecursionError):
        logger.warning("Slot %s is not valid JSON or nested too deeply; using default.", slot)
        return default

    if not isinstance(parsed, type(default)):
        logger.warning(
            "Slot %s has type %s, expected %s; using default.",
            slot,
            type(parsed).__name__,
            type(default).__name__,
        )
        return default

    if slot == SLOT_TASKS:
        for list_id, items in parsed.items():
            if not isinstance(items, list):
                logger.warning("Tasks for list %s are not an array; resetting to [].", list_id)
                parsed[list_id] = []

    return parsed


def _tasks_structurally_valid(raw_tasks: dict[str, Any]) -> bool:
    """
    Re-check the repaired tasks mapping.

    Every key must be a list id, every value an array, every entry an object
    carrying an integer id. Anything else means the data cannot be trusted.
    """
    for list_id, items in raw_tasks.items():
        if _int_key(list_id) is None or not isinstance(items, list):
            return False
        for item in items:
            if not isinstance(item, dict) or _int_key(item.get("id")) is None:
                return False
    return True


def _decode_groups(raw: list[Any]) -> tuple[TaskGroup, ...]:
    out: list[TaskGroup] = []
    for item in raw:
        if not isinstance(item, dict):
            continue
        gid = _int_key(item.get("id"))
        date = item.get("date")
        if gid is None or not isinstance(date, str) or not date:
            continue
        out.append(TaskGroup(id=gid, date=date))
    return tuple(out)


def _decode_lists(raw: dict[str, Any]) -> dict[str, tuple[TaskList, ...]]:
    out: dict[str, tuple[TaskList, ...]] = {}
    for date, items in raw.items():
        lists: list[TaskList] = []
        if isinstance(items, list):
            for item in items:
                lid = _int_key(item.get("id")) if isinstance(item, dict) else None
                if lid is not None:
                    lists.append(TaskList(id=lid))
        out[str(date)] = tuple(lists)
    return out


def _decode_tasks(raw: dict[str, list[dict[str, Any]]]) -> dict[int, tuple[Task, ...]]:
    return {int(list_id): tuple(Task.from_json(item) for item in items) for list_id, items in raw.items()}


def _decode_list_flags(raw: dict[str, Any]) -> dict[int, bool]:
    out: dict[int, bool] = {}
    for key, value in raw.items():
        lid = _int_key(key)
        if lid is not None:
            out[lid] = bool(value)
    return out


def _decode_counts(raw: dict[str, Any]) -> dict[int, int]:
    out: dict[int, int] = {}
    for key, value in raw.items():
        lid = _int_key(key)
        count = _int_key(value)
        if lid is not None and count is not None:
            out[lid] = max(0, count)
    return out


def _decode_categories(raw: dict[str, Any]) -> dict[int, Category]:
    out: dict[int, Category] = {}
    for key, value in raw.items():
        lid = _int_key(key)
        if lid is not None:
            out[lid] = Category.from_label(value if isinstance(value, str) else None)
    return out


# ---- public API ----


def reset_storage(store: KeyValueStore) -> None:
    """Remove every slot. The next load starts from an empty board."""
    for slot in ALL_SLOTS:
        store.remove(slot)
    logger.warning("Persisted board state discarded (%d slots removed).", len(ALL_SLOTS))


def load_snapshot(store: KeyValueStore) -> BoardState:
    raw_tasks = load_slot(store, SLOT_TASKS)
    if not _tasks_structurally_valid(raw_tasks):
        logger.warning("Tasks slot is structurally corrupt after repair; resetting all state.")
        reset_storage(store)
        return BoardState()

    state = BoardState(
        groups=_decode_groups(load_slot(store, SLOT_GROUPS)),
        lists=_decode_lists(load_slot(store, SLOT_LISTS)),
        tasks=_decode_tasks(raw_tasks),
        categories=_decode_categories(load_slot(store, SLOT_CATEGORIES)),
        incomplete_counts=_decode_counts(load_slot(store, SLOT_COUNTS)),
        expanded=_decode_list_flags(load_slot(store, SLOT_EXPANDED)),
        group_expanded={str(k): bool(v) for k, v in load_slot(store, SLOT_GROUP_EXPANDED).items()},
        tasks_expanded=_decode_list_flags(load_slot(store, SLOT_TASKS_EXPANDED)),
    )
    logger.info(
        "Loaded snapshot: groups=%d lists=%d tasks=%d",
        len(state.groups),
        len(state.list_ids()),
        sum(len(v) for v in state.tasks.values()),
    )
    return state


def encode_snapshot(state: BoardState) -> dict[str, str]:
    """Serialize every slot. JSON object keys are strings, so list ids are stringified."""
    payload: dict[str, Any] = {
        SLOT_GROUPS: [g.to_json() for g in state.groups],
        SLOT_LISTS: {date: [lst.to_json() for lst in lists] for date, lists in state.lists.items()},
        SLOT_TASKS: {str(lid): [t.to_json() for t in tasks] for lid, tasks in state.tasks.items()},
        SLOT_CATEGORIES: {str(lid): cat.value for lid, cat in state.categories.items()},
        SLOT_COUNTS: {str(lid): n for lid, n in state.incomplete_counts.items()},
        SLOT_EXPANDED: {str(lid): v for lid, v in state.expanded.items()},
        SLOT_GROUP_EXPANDED: dict(state.group_expanded),
        SLOT_TASKS_EXPANDED: {str(lid): v for lid, v in state.tasks_expanded.items()},
    }
    return {slot: json.dumps(value, ensure_ascii=False) for slot, value in payload.items()}


def save_snapshot(store: KeyValueStore, state: BoardState) -> bool:
    """
    Write every slot. Best-effort: failures are logged, never raised.

    Returns True when the write went through.
    """
    try:
        encoded = encode_snapshot(state)
        set_many = getattr(store, "set_many", None)
        if callable(set_many):
            set_many(encoded)
        else:
            for slot, value in encoded.items():
                store.set(slot, value)
        return True
    except Exception:
        logger.exception("Failed to save board snapshot.")
        return False
