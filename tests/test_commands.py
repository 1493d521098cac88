# tests/test_commands.py

from __future__ import annotations

import pytest

from taskmate.cli.commands import CommandRegistry, CommandReply, registry
from taskmate.core.instructions import Instruction
from taskmate.core.state import AppState
from taskmate.tasks.task_list import TaskList

from .fakes import FailingTaskStore


def _run(state: AppState, *lines: str) -> list[CommandReply]:
    return [registry.handle(state, line) for line in lines]


def test_registry_routes_by_instruction(state: AppState) -> None:
    reg = CommandRegistry()
    seen: list[str] = []

    def h(state, line):
        seen.append(line)
        return CommandReply("ok")

    reg.register(Instruction.LIST, h, "list")

    assert reg.handle(state, "LIST").text == "ok"
    assert seen == ["LIST"]
    # Instructions without a handler are reported, not raised.
    assert "don't know" in reg.handle(state, "bye").text


def test_unknown_instruction_is_recoverable(state: AppState) -> None:
    reply = registry.handle(state, "dance please")
    assert reply.exit is False
    assert "dance please" in reply.text
    assert "todo" in reply.text


def test_todo_appends_and_mirrors(state: AppState, read_file) -> None:
    reply = registry.handle(state, "todo read book")

    assert state.tasks.size() == 1
    task = state.tasks.get(1)
    assert task.description == "read book"
    assert task.is_done is False
    assert "[T][ ] read book" in reply.text
    assert "1 task in the list" in reply.text
    assert read_file() == ["T | 0 | read book"]


def test_add_list_mark_delete_scenario(state: AppState, read_file) -> None:
    _run(state, "todo read book", "deadline return book /by 2024-06-01")

    listing = registry.handle(state, "list").text.splitlines()
    assert listing[1:] == [
        "1. [T][ ] read book",
        "2. [D][ ] return book (by: Jun 01 2024)",
    ]

    registry.handle(state, "mark 1")
    assert state.tasks.get(1).is_done
    assert read_file()[0] == "T | 1 | read book"

    reply = registry.handle(state, "delete 2")
    assert "return book" in reply.text
    assert state.tasks.size() == 1

    listing = registry.handle(state, "list").text.splitlines()
    assert listing[1:] == ["1. [T][X] read book"]
    assert read_file() == ["T | 1 | read book"]


def test_mark_unmark_round_trip(state: AppState, read_file) -> None:
    _run(state, "todo a", "todo b")

    registry.handle(state, "mark 2")
    assert read_file() == ["T | 0 | a", "T | 1 | b"]
    registry.handle(state, "unmark 2")
    assert state.tasks.get(2).is_done is False
    assert read_file() == ["T | 0 | a", "T | 0 | b"]


def test_redundant_mark_is_reported_without_writing(state: AppState, read_file) -> None:
    _run(state, "todo a")
    before = read_file()

    assert "already not done" in registry.handle(state, "unmark 1").text
    registry.handle(state, "mark 1")
    assert "already marked as done" in registry.handle(state, "mark 1").text
    assert state.tasks.get(1).is_done is True
    assert read_file() == ["T | 1 | a"]
    assert before == ["T | 0 | a"]


@pytest.mark.parametrize("command", ["mark", "unmark", "delete"])
@pytest.mark.parametrize("position", [0, 3, 99, -2])
def test_out_of_range_positions_leave_list_untouched(
    state: AppState, read_file, command: str, position: int
) -> None:
    _run(state, "todo a", "todo b")
    before = [(t.description, t.is_done) for t in state.tasks]

    reply = registry.handle(state, f"{command} {position}")

    assert f"no task {position}" in reply.text
    assert [(t.description, t.is_done) for t in state.tasks] == before
    assert read_file() == ["T | 0 | a", "T | 0 | b"]


def test_validation_errors_do_not_mutate(state: AppState, read_file) -> None:
    replies = _run(
        state,
        "todo",
        "deadline no marker",
        "deadline /by 2024-01-01",
        "deadline x /by someday",
        "event x /from 2024-01-01",
        "mark two",
        "find",
    )
    assert all(not r.exit for r in replies)
    assert state.tasks.size() == 0
    assert read_file() == []


def test_event_is_added(state: AppState, read_file) -> None:
    reply = registry.handle(state, "event team sync /from 2024-05-02 1400 /to 2024-05-02 1500")
    assert "[E][ ] team sync" in reply.text
    assert read_file() == ["E | 0 | team sync | 2024-05-02 1400 | 2024-05-02 1500"]


def test_find_is_case_insensitive_and_read_only(state: AppState, read_file) -> None:
    _run(state, "todo read Book", "todo buy milk", "deadline return book /by 2024-06-01")
    before = read_file()

    lines = registry.handle(state, "find BOOK").text.splitlines()
    assert lines == [
        "Here are the matching tasks in your list:",
        "1. [T][ ] read Book",
        "2. [D][ ] return book (by: Jun 01 2024)",
    ]
    assert "No tasks match" in registry.handle(state, "find tea").text
    assert state.tasks.size() == 3
    assert read_file() == before


def test_list_when_empty(state: AppState) -> None:
    assert registry.handle(state, "list").text == "Your list is empty."


def test_bye_requests_exit(state: AppState) -> None:
    reply = registry.handle(state, "bye")
    assert reply.exit is True


def test_write_failure_keeps_in_memory_change(settings) -> None:
    store = FailingTaskStore()
    state = AppState(settings=settings, store=store, tasks=TaskList())  # type: ignore[arg-type]

    reply = registry.handle(state, "todo keep me")
    assert state.tasks.size() == 1
    assert "[warning]" in reply.text
    assert store.appended == ["T | 0 | keep me"]

    reply = registry.handle(state, "mark 1")
    assert state.tasks.get(1).is_done is True
    assert "[warning]" in reply.text

    reply = registry.handle(state, "delete 1")
    assert state.tasks.size() == 0
    assert "[warning]" in reply.text
    assert store.rewrites == 2


def test_early_year_deadline_survives_reload(state: AppState, read_file) -> None:
    registry.handle(state, "deadline old scroll /by 0999-01-01")

    assert read_file() == ["D | 0 | old scroll | 0999-01-01"]
    reloaded = state.store.load(strict=True)
    assert [t.description for t in reloaded] == ["old scroll"]
