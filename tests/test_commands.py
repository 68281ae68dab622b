# tests/test_commands.py

from __future__ import annotations

from daybook.cli.bootstrap import create_initial_state
from daybook.cli.commands import CommandRegistry, registry, render_board
from daybook.storage.kv_store import SqliteKeyValueStore


def test_command_registry_routes_by_name_and_alias(state) -> None:
    reg = CommandRegistry()
    seen: list[list[str]] = []

    def handler(state, args):
        seen.append(args)
        return "ok"

    reg.register("Alpha", handler, "a", aliases=["al"])

    assert reg.handle(state, "/alpha x y") == "ok"
    assert reg.handle(state, "/AL z") == "ok"
    assert seen == [["x", "y"], ["z"]]
    assert "/alpha - a" in reg.build_help()
    assert "/al " not in reg.build_help()


def test_command_registry_unknown_and_non_command(state) -> None:
    reg = CommandRegistry()
    assert reg.handle(state, "hello") is None
    assert "Unknown command" in (reg.handle(state, "/nope") or "")


def test_board_commands_end_to_end(state) -> None:
    assert "No task groups yet" in render_board(state)

    assert registry.handle(state, "/group new 2024-06-01") == "Group created for 1/6/2024."
    reply = registry.handle(state, "/list new 1/6/2024") or ""
    assert reply.startswith("List ")
    lid = int(reply.split()[1])

    reply = registry.handle(state, f"/task {lid} buy milk") or ""
    tid = int(reply.split()[1])
    assert state.board.find_task(lid, tid).content == "buy milk"
    assert state.board.incomplete_count(lid) == 1

    assert registry.handle(state, f"/check {lid} {tid}") == f"Task {tid} done."
    assert state.board.incomplete_count(lid) == 0
    assert registry.handle(state, f"/due {lid} {tid} 2024-06-05") == f"Task {tid} due 5/6/2024."
    assert registry.handle(state, f"/cat {lid} ideas") == f"List {lid} is now 💡 Ideas."

    out = render_board(state)
    assert "== 1/6/2024" in out
    assert "[x]" in out and "buy milk" in out
    assert "All tasks completed!" in out

    assert registry.handle(state, "/check-integrity") == "Board is consistent."
    assert registry.handle(state, "/integrity") == "Board is consistent."
    assert registry.handle(state, f"/rm {lid} {tid}") == f"Task {tid} removed."
    # last task gone -> list and date pruned
    assert "No task groups yet" in render_board(state)


def test_state_survives_restart(state, settings) -> None:
    registry.handle(state, "/group new 1/6/2024")
    registry.handle(state, "/list new 1/6/2024")

    again = create_initial_state(settings=settings, store=SqliteKeyValueStore(settings.store_db_path))
    assert again.board.state == state.board.state


def test_bad_arguments_return_usage(state) -> None:
    assert (registry.handle(state, "/task abc") or "").startswith("Usage")
    assert (registry.handle(state, "/group new 99/99/2024") or "").startswith("Invalid date")
    assert (registry.handle(state, "/list new 1/6/2024") or "").startswith("No group")
    assert (registry.handle(state, "/cat 1 nonsense") or "").startswith("Unknown category")
    assert registry.handle(state, "/rm 1 2") == "No task 2 in list 1."
