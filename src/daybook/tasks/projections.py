# src/daybook/tasks/projections.py

"""
Derived views over the board state.

Counts are recomputed from scratch on every task-collection change; there is no
incremental counter to drift. Date grouping is recomputed on every read.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping

from .dates import is_after
from .models import Task, TaskGroup


def count_incomplete(tasks: Iterable[Task]) -> int:
    return sum(1 for t in tasks if not t.checked)


def recompute_incomplete_counts(tasks: Mapping[int, Iterable[Task]]) -> dict[int, int]:
    return {list_id: count_incomplete(items) for list_id, items in tasks.items()}


def group_by_date(groups: Iterable[TaskGroup]) -> list[tuple[str, list[TaskGroup]]]:
    """
    Fold task groups into (date, records) buckets.

    Bucket order is the first position at which each date appears in the input;
    groups are stored newest-first, so buckets come out newest-first too.
    """
    buckets: dict[str, list[TaskGroup]] = {}
    for g in groups:
        buckets.setdefault(g.date, []).append(g)
    return list(buckets.items())


def edited_after_group(task: Task, group_date: str) -> bool:
    """Whether the task was last touched on a later day than its group's date."""
    if not task.last_edited_date:
        return False
    try:
        return is_after(task.last_edited_date, group_date)
    except ValueError:
        return False
