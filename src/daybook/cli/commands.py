# src/daybook/cli/commands.py

from __future__ import annotations

import logging
from collections.abc import Callable

from ..core.state import AppState
from ..tasks.dates import normalize_date
from ..tasks.models import PLACEHOLDER_CONTENT, Category

CommandHandler = Callable[[AppState, list[str]], str]

logger = logging.getLogger(__name__)


class CommandRegistry:
    """Simple slash-command registry used by connectors (/help, /task, ...)."""

    def __init__(self) -> None:
        self._handlers: dict[str, CommandHandler] = {}
        self._help: dict[str, str] = {}

    def register(
        self,
        name: str,
        handler: CommandHandler,
        help_text: str,
        aliases: list[str] | None = None,
    ) -> None:
        aliases = aliases or []
        key = name.lower()
        self._handlers[key] = handler
        self._help[key] = help_text
        for alias in aliases:
            self._handlers[alias.lower()] = handler

    def handle(self, state: AppState, line: str) -> str | None:
        """
        Handle a string like "/command args".
        Returns a reply string or None if not a command.
        """
        if not line.startswith("/"):
            return None

        parts = line[1:].split()
        if not parts:
            return "Empty command. Use /help to list available commands."

        name = parts[0].lower()
        args = parts[1:]

        handler = self._handlers.get(name)
        if not handler:
            return f"Unknown command: /{name}. Use /help to list available commands."

        return handler(state, args)

    def build_help(self) -> str:
        lines = ["Available commands:"]
        for name, help_text in self._help.items():
            lines.append(f"  /{name} - {help_text}")
        return "\n".join(lines)


registry = CommandRegistry()


# ---- argument helpers ----


def _ints(args: list[str], n: int) -> list[int] | None:
    if len(args) < n:
        return None
    try:
        return [int(a) for a in args[:n]]
    except ValueError:
        return None


def _date_arg(args: list[str], idx: int) -> str | None:
    if len(args) <= idx:
        return None
    try:
        return normalize_date(args[idx])
    except ValueError:
        return None


# ---- rendering ----


def render_board(state: AppState) -> str:
    """Plain-text outline of the board, honoring expand/collapse flags."""
    board = state.board
    buckets = board.groups_by_date()
    if not buckets:
        return 'No task groups yet. Use "/group new" to get started!'

    lines: list[str] = []
    for date, _groups in buckets:
        group_open = board.is_group_expanded(date)
        lines.append(f"== {date} {'[-]' if group_open else '[+]'}")
        if not group_open:
            continue
        for lst in board.lists_for(date):
            list_open = board.is_list_expanded(lst.id)
            lines.append(f"  # list {lst.id} {board.category_of(lst.id).value} {'[-]' if list_open else '[+]'}")

            n = board.incomplete_count(lst.id)
            items = board.tasks_for(lst.id)
            if n > 0:
                lines.append(f"    You have {n} incomplete task{'s' if n != 1 else ''}")
            elif items:
                lines.append("    All tasks completed!")

            if not list_open or not board.are_tasks_expanded(lst.id):
                continue
            for task in items:
                mark = "x" if task.checked else " "
                due = f" (due {task.due_date})" if task.due_date else ""
                lines.append(f"    [{mark}] {task.id}: {task.content}{due}  {task.time}")
                if board.edited_after_group(task, date):
                    lines.append(f"        Edited on {task.last_edited_date}")
    return "\n".join(lines)


# ---- handlers ----


def cmd_help(state: AppState, args: list[str]) -> str:
    return registry.build_help()


def cmd_show(state: AppState, args: list[str]) -> str:
    return render_board(state)


def cmd_group(state: AppState, args: list[str]) -> str:
    """
    /group new [date]   -> new task group (today by default)
    /group del <date>   -> delete the group and everything under it
    /group toggle <date>
    /group fold <date>  -> collapse/expand all lists of the group
    """
    usage = "Usage: /group new [D/M/YYYY] | /group del <date> | /group toggle <date> | /group fold <date>"
    if not args:
        return usage

    sub = args[0].lower()
    board = state.board

    if sub == "new":
        date = None
        if len(args) > 1:
            date = _date_arg(args, 1)
            if date is None:
                return "Invalid date. Use D/M/YYYY or YYYY-MM-DD."
        board.create_group(date)
        return f"Group created for {date or board.state.groups[0].date}."

    date = _date_arg(args, 1)
    if date is None:
        return usage

    if sub in ("del", "rm", "delete"):
        return f"Group {date} deleted." if board.delete_group(date) else f"No group for {date}."

    if sub == "toggle":
        res = board.toggle_group(date)
        if res is None:
            return f"No group for {date}."
        return f"Group {date} {'expanded' if res else 'collapsed'}."

    if sub == "fold":
        res = board.toggle_all_lists(date)
        if res is None:
            return f"No lists under {date}."
        return f"All lists under {date} {'expanded' if res else 'collapsed'}."

    return usage


def cmd_list(state: AppState, args: list[str]) -> str:
    """
    /list new <date>
    /list toggle <list_id>
    /list tasks <list_id>  -> show/hide the task panel
    """
    usage = "Usage: /list new <date> | /list toggle <list_id> | /list tasks <list_id>"
    if not args:
        return usage

    sub = args[0].lower()
    board = state.board

    if sub == "new":
        date = _date_arg(args, 1)
        if date is None:
            return usage
        lid = board.create_list(date)
        if lid is None:
            return f"No group for {date}. Create it with /group new {date}."
        return f"List {lid} created under {date}."

    ids = _ints(args[1:], 1)
    if ids is None:
        return usage

    if sub == "toggle":
        res = board.toggle_list(ids[0])
    elif sub == "tasks":
        res = board.toggle_list_tasks(ids[0])
    else:
        return usage

    if res is None:
        return f"No list {ids[0]}."
    return f"List {ids[0]} {'expanded' if res else 'collapsed'}."


def cmd_category(state: AppState, args: list[str]) -> str:
    names = ", ".join(c.name.lower() for c in Category if c is not Category.UNCATEGORIZED)
    ids = _ints(args, 1)
    if ids is None or len(args) < 2:
        return f"Usage: /cat <list_id> <category>. Categories: {names}, uncategorized."
    category = Category.lookup(" ".join(args[1:]))
    if category is None:
        return f"Unknown category. Categories: {names}, uncategorized."
    if not state.board.update_list_category(ids[0], category):
        return f"No list {ids[0]}."
    return f"List {ids[0]} is now {category.value}."


def cmd_task(state: AppState, args: list[str]) -> str:
    ids = _ints(args, 1)
    if ids is None:
        return "Usage: /task <list_id> [text...]"
    board = state.board
    task_id = board.create_task(ids[0])
    if task_id is None:
        return f"No list {ids[0]}."
    text = " ".join(args[1:])
    if text:
        board.update_task_content(ids[0], task_id, text)
    return f"Task {task_id} added to list {ids[0]}."


def cmd_edit(state: AppState, args: list[str]) -> str:
    ids = _ints(args, 2)
    if ids is None:
        return "Usage: /edit <list_id> <task_id> <text...>"
    text = " ".join(args[2:]) or PLACEHOLDER_CONTENT
    if not state.board.update_task_content(ids[0], ids[1], text):
        return f"No task {ids[1]} in list {ids[0]}."
    return f"Task {ids[1]} updated."


def _set_checked(state: AppState, args: list[str], checked: bool) -> str:
    ids = _ints(args, 2)
    if ids is None:
        return f"Usage: /{'check' if checked else 'uncheck'} <list_id> <task_id>"
    if not state.board.update_task_checked(ids[0], ids[1], checked):
        return f"No task {ids[1]} in list {ids[0]}."
    return f"Task {ids[1]} {'done' if checked else 'reopened'}."


def cmd_check(state: AppState, args: list[str]) -> str:
    return _set_checked(state, args, True)


def cmd_uncheck(state: AppState, args: list[str]) -> str:
    return _set_checked(state, args, False)


def cmd_due(state: AppState, args: list[str]) -> str:
    ids = _ints(args, 2)
    if ids is None:
        return "Usage: /due <list_id> <task_id> [date]  (no date clears it)"
    due = ""
    if len(args) > 2:
        parsed = _date_arg(args, 2)
        if parsed is None:
            return "Invalid date. Use D/M/YYYY or YYYY-MM-DD."
        due = parsed
    if not state.board.update_task_due_date(ids[0], ids[1], due):
        return f"No task {ids[1]} in list {ids[0]}."
    return f"Task {ids[1]} due {due}." if due else f"Task {ids[1]} due date cleared."


def cmd_rm(state: AppState, args: list[str]) -> str:
    ids = _ints(args, 2)
    if ids is None:
        return "Usage: /rm <list_id> <task_id>"
    if not state.board.delete_task(ids[0], ids[1]):
        return f"No task {ids[1]} in list {ids[0]}."
    return f"Task {ids[1]} removed."


def cmd_integrity(state: AppState, args: list[str]) -> str:
    problems = state.board.check_integrity()
    if not problems:
        return "Board is consistent."
    logger.warning("Integrity check found %d problem(s).", len(problems))
    return "Integrity problems:\n" + "\n".join(f"  - {p}" for p in problems)


registry.register("help", cmd_help, help_text="Show available commands.", aliases=["h", "?"])
registry.register("show", cmd_show, help_text="Print the board.", aliases=["ls"])
registry.register("group", cmd_group, help_text="Task groups: new | del | toggle | fold.")
registry.register("list", cmd_list, help_text="Lists: new <date> | toggle <id> | tasks <id>.")
registry.register("cat", cmd_category, help_text="Set list category: /cat <list_id> <category>.")
registry.register("task", cmd_task, help_text="Add a task: /task <list_id> [text...].", aliases=["add"])
registry.register("edit", cmd_edit, help_text="Edit task text: /edit <list_id> <task_id> <text...>.")
registry.register("check", cmd_check, help_text="Mark done: /check <list_id> <task_id>.")
registry.register("uncheck", cmd_uncheck, help_text="Reopen: /uncheck <list_id> <task_id>.")
registry.register("due", cmd_due, help_text="Set/clear due date: /due <list_id> <task_id> [date].")
registry.register("rm", cmd_rm, help_text="Delete a task: /rm <list_id> <task_id>.")
registry.register(
    "check-integrity", cmd_integrity, help_text="Check board invariants.", aliases=["integrity"]
)
