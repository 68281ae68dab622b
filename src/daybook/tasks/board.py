# src/daybook/tasks/board.py

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable
from dataclasses import replace
from datetime import datetime

from ..core.ports import KeyValueStore
from ..storage.snapshot import save_snapshot
from . import expansion
from .dates import clock_time, today_string
from .ids import IdAllocator
from .models import PLACEHOLDER_CONTENT, BoardState, Category, Task, TaskGroup, TaskList
from .projections import edited_after_group, group_by_date, recompute_incomplete_counts

logger = logging.getLogger(__name__)


def _drop_lists(state: BoardState, list_ids: Iterable[int]) -> BoardState:
    """Remove lists and every entry derived from them, in one step."""
    drop = set(list_ids)
    if not drop:
        return state
    lists = {date: tuple(lst for lst in items if lst.id not in drop) for date, items in state.lists.items()}
    tasks = {lid: items for lid, items in state.tasks.items() if lid not in drop}
    return replace(
        state,
        lists=lists,
        tasks=tasks,
        categories={lid: c for lid, c in state.categories.items() if lid not in drop},
        incomplete_counts=recompute_incomplete_counts(tasks),
        expanded=expansion.without(state.expanded, drop),
        tasks_expanded=expansion.without(state.tasks_expanded, drop),
    )


def _drop_date(state: BoardState, date: str) -> BoardState:
    """Remove a date bucket: its lists (cascading), its group records and its flag."""
    state = _drop_lists(state, [lst.id for lst in state.lists.get(date, ())])
    lists = dict(state.lists)
    lists.pop(date, None)
    return replace(
        state,
        groups=tuple(g for g in state.groups if g.date != date),
        lists=lists,
        group_expanded=expansion.without(state.group_expanded, [date]),
    )


def reconcile(state: BoardState) -> BoardState:
    """
    Bring a loaded state back to a consistent shape.

    - a list id is owned by the first date that lists it,
    - per-list entries for unknown ids are dropped,
    - owned lists get defaults for missing entries,
    - a date holding lists but no group record gets one (appended as oldest),
    - a task id repeated inside one list is renumbered past the largest id,
    - incomplete counts are recomputed from tasks.
    """
    groups = list(state.groups)
    group_dates = {g.date for g in groups}
    next_free = state.max_id() + 1
    seen: set[int] = set()
    lists: dict[str, tuple[TaskList, ...]] = {}
    for date, items in state.lists.items():
        kept: list[TaskList] = []
        for lst in items:
            if lst.id in seen:
                continue
            seen.add(lst.id)
            kept.append(lst)
        lists[date] = tuple(kept)
        if kept and date not in group_dates:
            groups.append(TaskGroup(id=next_free, date=date))
            group_dates.add(date)
            next_free += 1

    tasks: dict[int, tuple[Task, ...]] = {}
    for lid in seen:
        task_ids: set[int] = set()
        renumbered: list[Task] = []
        for task in state.tasks.get(lid, ()):
            if task.id in task_ids:
                task = replace(task, id=next_free)
                next_free += 1
            task_ids.add(task.id)
            renumbered.append(task)
        tasks[lid] = tuple(renumbered)
    return replace(
        state,
        groups=tuple(groups),
        lists=lists,
        tasks=tasks,
        categories={lid: state.categories.get(lid, Category.UNCATEGORIZED) for lid in seen},
        incomplete_counts=recompute_incomplete_counts(tasks),
        expanded={lid: state.expanded.get(lid, expansion.DEFAULT_EXPANDED) for lid in seen},
        tasks_expanded={lid: state.tasks_expanded.get(lid, expansion.DEFAULT_EXPANDED) for lid in seen},
    )


class Board:
    """
    The task board: groups -> lists -> tasks plus their derived mappings.

    Every mutating operation computes the next BoardState and swaps it in with a
    single assignment, then writes the whole snapshot to the store (if any).
    Addressing an id that does not exist is a no-op: the state is unchanged and
    the operation returns None/False.
    """

    def __init__(
        self,
        state: BoardState | None = None,
        *,
        store: KeyValueStore | None = None,
        prune_empty_lists: bool = True,
        now: Callable[[], datetime] = datetime.now,
        ids: IdAllocator | None = None,
    ) -> None:
        loaded = state or BoardState()
        self._state = reconcile(loaded)
        self._store = store
        self._now = now
        self.prune_empty_lists = prune_empty_lists
        self._ids = ids or IdAllocator(floor=self._state.max_id(), clock=lambda: now().timestamp())

        if self._state != loaded:
            logger.warning("Loaded board state was inconsistent; repaired.")
            self.save()

    # ---- plumbing ----

    @property
    def state(self) -> BoardState:
        return self._state

    def _commit(self, new_state: BoardState) -> None:
        self._state = new_state
        self.save()

    def save(self) -> bool:
        if self._store is None:
            return False
        return save_snapshot(self._store, self._state)

    def _today(self) -> str:
        return today_string(self._now())

    def _has_list(self, list_id: int) -> bool:
        return self._state.date_of_list(list_id) is not None

    def _has_date(self, date: str) -> bool:
        return any(g.date == date for g in self._state.groups)

    # ---- groups ----

    def create_group(self, today: str | None = None) -> int:
        date = today or self._today()
        s = self._state
        gid = self._ids.next_id()
        self._commit(
            replace(
                s,
                groups=(TaskGroup(id=gid, date=date), *s.groups),
                group_expanded={**s.group_expanded, date: True},
            )
        )
        logger.debug("Group created id=%s date=%s", gid, date)
        return gid

    def delete_group(self, date: str) -> bool:
        if not self._has_date(date) and date not in self._state.lists:
            logger.debug("delete_group: no group for date=%s", date)
            return False
        removed = [lst.id for lst in self._state.lists.get(date, ())]
        self._commit(_drop_date(self._state, date))
        logger.debug("Group deleted date=%s lists=%s", date, removed)
        return True

    # ---- lists ----

    def create_list(self, date: str) -> int | None:
        if not self._has_date(date):
            logger.debug("create_list: no group for date=%s", date)
            return None
        s = self._state
        lid = self._ids.next_id()
        tasks = {**s.tasks, lid: ()}
        self._commit(
            replace(
                s,
                lists={**s.lists, date: (*s.lists.get(date, ()), TaskList(id=lid))},
                tasks=tasks,
                categories={**s.categories, lid: Category.UNCATEGORIZED},
                incomplete_counts=recompute_incomplete_counts(tasks),
                expanded={**s.expanded, lid: True},
                tasks_expanded={**s.tasks_expanded, lid: True},
            )
        )
        logger.debug("List created id=%s date=%s", lid, date)
        return lid

    def update_list_category(self, list_id: int, label: Category | str) -> bool:
        if not self._has_list(list_id):
            logger.debug("update_list_category: unknown list_id=%s", list_id)
            return False
        category = Category.from_label(label)
        if category.value != label:
            logger.debug("update_list_category: unknown label %r stored as %s", label, category.name)
        s = self._state
        self._commit(replace(s, categories={**s.categories, list_id: category}))
        return True

    # ---- tasks ----

    def _with_tasks(self, list_id: int, items: tuple[Task, ...]) -> BoardState:
        tasks = {**self._state.tasks, list_id: items}
        return replace(self._state, tasks=tasks, incomplete_counts=recompute_incomplete_counts(tasks))

    def create_task(self, list_id: int) -> int | None:
        if not self._has_list(list_id):
            logger.debug("create_task: unknown list_id=%s", list_id)
            return None
        now = self._now()
        today = today_string(now)
        task = Task(
            id=self._ids.next_id(),
            content=PLACEHOLDER_CONTENT,
            checked=False,
            due_date="",
            created_date=today,
            last_edited_date=today,
            time=clock_time(now),
        )
        self._commit(self._with_tasks(list_id, (*self._state.tasks.get(list_id, ()), task)))
        logger.debug("Task created id=%s list_id=%s", task.id, list_id)
        return task.id

    def _update_task(self, list_id: int, task_id: int, **changes: object) -> bool:
        items = self._state.tasks.get(list_id, ())
        for idx, task in enumerate(items):
            if task.id == task_id:
                updated = replace(task, last_edited_date=self._today(), **changes)
                self._commit(self._with_tasks(list_id, (*items[:idx], updated, *items[idx + 1 :])))
                return True
        logger.debug("Task not found list_id=%s task_id=%s; ignoring update.", list_id, task_id)
        return False

    def update_task_content(self, list_id: int, task_id: int, text: str) -> bool:
        content = (text or "").strip() or PLACEHOLDER_CONTENT
        return self._update_task(list_id, task_id, content=content)

    def update_task_checked(self, list_id: int, task_id: int, checked: bool) -> bool:
        return self._update_task(list_id, task_id, checked=bool(checked))

    def update_task_due_date(self, list_id: int, task_id: int, due_date: str) -> bool:
        return self._update_task(list_id, task_id, due_date=due_date or "")

    def delete_task(self, list_id: int, task_id: int) -> bool:
        """
        Remove a task. With pruning on, an emptied list is removed too, and a date
        left without lists loses its bucket and group records.
        """
        items = self._state.tasks.get(list_id, ())
        remaining = tuple(t for t in items if t.id != task_id)
        if len(remaining) == len(items):
            logger.debug("delete_task: task_id=%s not in list_id=%s", task_id, list_id)
            return False

        nxt = self._with_tasks(list_id, remaining)
        if self.prune_empty_lists and not remaining:
            date = nxt.date_of_list(list_id)
            nxt = _drop_lists(nxt, [list_id])
            logger.debug("List %s emptied and pruned.", list_id)
            if date is not None and not nxt.lists.get(date):
                nxt = _drop_date(nxt, date)
                logger.debug("Date %s has no lists left; bucket removed.", date)
        self._commit(nxt)
        return True

    # ---- expansion ----

    def toggle_group(self, date: str) -> bool | None:
        if not self._has_date(date):
            return None
        s = self._state
        flags = expansion.toggle(s.group_expanded, date)
        self._commit(replace(s, group_expanded=flags))
        return flags[date]

    def toggle_list(self, list_id: int) -> bool | None:
        if not self._has_list(list_id):
            return None
        s = self._state
        flags = expansion.toggle(s.expanded, list_id)
        self._commit(replace(s, expanded=flags))
        return flags[list_id]

    def toggle_list_tasks(self, list_id: int) -> bool | None:
        if not self._has_list(list_id):
            return None
        s = self._state
        flags = expansion.toggle(s.tasks_expanded, list_id)
        self._commit(replace(s, tasks_expanded=flags))
        return flags[list_id]

    def toggle_all_lists(self, date: str) -> bool | None:
        """Collapse every list of the date if all are expanded, otherwise expand them all."""
        ids = [lst.id for lst in self._state.lists.get(date, ())]
        if not ids:
            return None
        s = self._state
        target = expansion.bulk_target(s.expanded, ids)
        self._commit(replace(s, expanded=expansion.set_all(s.expanded, ids, target)))
        return target

    # ---- queries ----

    def groups_by_date(self) -> list[tuple[str, list[TaskGroup]]]:
        return group_by_date(self._state.groups)

    def lists_for(self, date: str) -> tuple[TaskList, ...]:
        return self._state.lists.get(date, ())

    def tasks_for(self, list_id: int) -> tuple[Task, ...]:
        return self._state.tasks.get(list_id, ())

    def find_task(self, list_id: int, task_id: int) -> Task | None:
        for task in self.tasks_for(list_id):
            if task.id == task_id:
                return task
        return None

    def incomplete_count(self, list_id: int) -> int:
        return self._state.incomplete_counts.get(list_id, 0)

    def category_of(self, list_id: int) -> Category:
        return self._state.categories.get(list_id, Category.UNCATEGORIZED)

    def is_group_expanded(self, date: str) -> bool:
        return expansion.is_expanded(self._state.group_expanded, date)

    def is_list_expanded(self, list_id: int) -> bool:
        return expansion.is_expanded(self._state.expanded, list_id)

    def are_tasks_expanded(self, list_id: int) -> bool:
        return expansion.is_expanded(self._state.tasks_expanded, list_id)

    def edited_after_group(self, task: Task, date: str) -> bool:
        return edited_after_group(task, date)

    def check_integrity(self) -> list[str]:
        """Human-readable invariant violations; empty when the board is consistent."""
        s = self._state
        problems: list[str] = []

        owners: dict[int, list[str]] = {}
        for date, items in s.lists.items():
            for lst in items:
                owners.setdefault(lst.id, []).append(date)
        for lid, dates in owners.items():
            if len(dates) > 1:
                problems.append(f"list {lid} appears under several dates: {', '.join(dates)}")

        known = set(owners)
        for name, mapping in (
            ("tasks", s.tasks),
            ("categories", s.categories),
            ("incomplete_counts", s.incomplete_counts),
            ("expanded", s.expanded),
            ("tasks_expanded", s.tasks_expanded),
        ):
            for lid in set(mapping) - known:
                problems.append(f"{name} has an entry for unknown list {lid}")
            for lid in known - set(mapping):
                problems.append(f"{name} is missing list {lid}")

        expected = recompute_incomplete_counts(s.tasks)
        for lid, n in s.incomplete_counts.items():
            if n < 0:
                problems.append(f"incomplete count for list {lid} is negative ({n})")
            elif expected.get(lid, 0) != n:
                problems.append(f"incomplete count for list {lid} is {n}, expected {expected.get(lid, 0)}")

        for lid, items in s.tasks.items():
            ids = [t.id for t in items]
            if len(ids) != len(set(ids)):
                problems.append(f"list {lid} has duplicate task ids")

        group_dates = {g.date for g in s.groups}
        for date in s.lists:
            if s.lists[date] and date not in group_dates:
                problems.append(f"lists stored under {date} but no group has that date")

        return problems
