# src/daybook/tasks/models.py

from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum
from typing import Any

PLACEHOLDER_CONTENT = "Add task..."


class Category(StrEnum):
    """
    List category labels.

    UNCATEGORIZED is the sentinel every new list starts with; it is also what the
    picker shows as its own caption.
    """

    GROCERIES = "🍉 Groceries"
    SHOPPING = "🛒 Shopping"
    PERSONAL = "✨ Personal"
    GENERAL = "📝 General"
    IDEAS = "💡 Ideas"
    PROJECT = "📁 Project"
    IMPORTANT = "‼️ Important"
    UNCATEGORIZED = "categories"

    @classmethod
    def from_label(cls, raw: str | None) -> Category:
        if not raw:
            return cls.UNCATEGORIZED
        try:
            return cls(raw)
        except ValueError:
            return cls.UNCATEGORIZED

    @classmethod
    def lookup(cls, name: str) -> Category | None:
        """Resolve user input by enum name ("ideas") or by full label."""
        key = name.strip()
        if not key:
            return None
        try:
            return cls[key.upper()]
        except KeyError:
            pass
        for member in cls:
            if member.value == key:
                return member
        return None


@dataclass(frozen=True, slots=True)
class TaskGroup:
    id: int
    date: str

    def to_json(self) -> dict[str, Any]:
        return {"id": self.id, "date": self.date}


@dataclass(frozen=True, slots=True)
class TaskList:
    id: int

    def to_json(self) -> dict[str, Any]:
        return {"id": self.id}


@dataclass(frozen=True, slots=True)
class Task:
    """
    A single task inside a list.

    Dates are D/M/YYYY strings; due_date is kept verbatim and may be empty.
    time is the creation clock time and is only ever displayed.
    """

    id: int
    content: str = PLACEHOLDER_CONTENT
    checked: bool = False
    due_date: str = ""
    created_date: str = ""
    last_edited_date: str = ""
    time: str = ""

    def to_json(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "time": self.time,
            "content": self.content,
            "checked": self.checked,
            "dueDate": self.due_date,
            "createdDate": self.created_date,
            "lastEditedDate": self.last_edited_date,
        }

    @classmethod
    def from_json(cls, raw: dict[str, Any]) -> Task:
        content = raw.get("content")
        return cls(
            id=int(raw["id"]),
            content=str(content) if content else PLACEHOLDER_CONTENT,
            checked=bool(raw.get("checked", False)),
            due_date=str(raw.get("dueDate") or ""),
            created_date=str(raw.get("createdDate") or ""),
            last_edited_date=str(raw.get("lastEditedDate") or ""),
            time=str(raw.get("time") or ""),
        )


@dataclass(frozen=True, slots=True)
class BoardState:
    """
    Whole logical state of the board.

    Treated as an immutable value: operations build a new BoardState and the
    board swaps the reference, so every mapping changes together.
    """

    groups: tuple[TaskGroup, ...] = ()
    lists: dict[str, tuple[TaskList, ...]] = field(default_factory=dict)
    tasks: dict[int, tuple[Task, ...]] = field(default_factory=dict)
    categories: dict[int, Category] = field(default_factory=dict)
    incomplete_counts: dict[int, int] = field(default_factory=dict)
    expanded: dict[int, bool] = field(default_factory=dict)
    group_expanded: dict[str, bool] = field(default_factory=dict)
    tasks_expanded: dict[int, bool] = field(default_factory=dict)

    def list_ids(self) -> list[int]:
        return [lst.id for lists in self.lists.values() for lst in lists]

    def date_of_list(self, list_id: int) -> str | None:
        for date, lists in self.lists.items():
            if any(lst.id == list_id for lst in lists):
                return date
        return None

    def max_id(self) -> int:
        ids = [g.id for g in self.groups]
        ids.extend(self.list_ids())
        ids.extend(t.id for tasks in self.tasks.values() for t in tasks)
        return max(ids, default=0)
