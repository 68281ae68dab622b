# tests/test_projections.py

from __future__ import annotations

from daybook.tasks import expansion
from daybook.tasks.ids import IdAllocator
from daybook.tasks.models import Task, TaskGroup
from daybook.tasks.projections import edited_after_group, group_by_date, recompute_incomplete_counts


def test_recompute_counts_unchecked_only() -> None:
    tasks = {
        1: (Task(id=1), Task(id=2, checked=True), Task(id=3)),
        2: (),
        3: (Task(id=4, checked=True),),
    }
    assert recompute_incomplete_counts(tasks) == {1: 2, 2: 0, 3: 0}


def test_group_by_date_orders_by_first_seen() -> None:
    groups = [
        TaskGroup(id=5, date="3/6/2024"),
        TaskGroup(id=4, date="1/6/2024"),
        TaskGroup(id=3, date="3/6/2024"),
        TaskGroup(id=2, date="2/6/2024"),
    ]
    buckets = group_by_date(groups)
    assert [d for d, _ in buckets] == ["3/6/2024", "1/6/2024", "2/6/2024"]
    assert [g.id for g in buckets[0][1]] == [5, 3]


def test_edited_after_group() -> None:
    assert edited_after_group(Task(id=1, last_edited_date="2/6/2024"), "1/6/2024") is True
    assert edited_after_group(Task(id=1, last_edited_date="1/6/2024"), "1/6/2024") is False
    assert edited_after_group(Task(id=1, last_edited_date=""), "1/6/2024") is False
    assert edited_after_group(Task(id=1, last_edited_date="garbage"), "1/6/2024") is False


def test_missing_flag_reads_as_expanded() -> None:
    assert expansion.DEFAULT_EXPANDED is True
    assert expansion.is_expanded({}, 42) is True
    assert expansion.is_expanded({42: False}, 42) is False


def test_toggle_returns_new_mapping() -> None:
    flags: dict[int, bool] = {}
    once = expansion.toggle(flags, 1)
    assert flags == {}
    assert once == {1: False}
    assert expansion.toggle(once, 1) == {1: True}


def test_bulk_target() -> None:
    assert expansion.bulk_target({1: True, 2: True}, [1, 2]) is False
    assert expansion.bulk_target({1: True}, [1, 2]) is False
    assert expansion.bulk_target({1: True, 2: False}, [1, 2]) is True
    assert expansion.set_all({1: False, 9: False}, [1, 2], True) == {1: True, 2: True, 9: False}


def test_id_allocator_is_strictly_increasing() -> None:
    ticks = iter([1.0, 1.0, 1.0, 0.5, 2.0])
    ids = IdAllocator(clock=lambda: next(ticks))
    issued = [ids.next_id() for _ in range(5)]
    assert issued == [1000, 1001, 1002, 1003, 2000]


def test_id_allocator_respects_floor() -> None:
    ids = IdAllocator(floor=5000, clock=lambda: 1.0)
    assert ids.next_id() == 5001
