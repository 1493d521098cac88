# src/taskmate/cli/commands.py

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass

from ..core.errors import (
    InvalidReference,
    MalformedInput,
    RedundantStateChange,
    StorageWriteFailed,
    UnknownInstruction,
)
from ..core.instructions import Instruction, classify
from ..core.parser import (
    extract_find_keyword,
    parse_deadline,
    parse_event,
    parse_todo,
    resolve_delete_target,
    resolve_mark_target,
    resolve_unmark_target,
)
from ..core.state import AppState
from ..tasks.task_models import Task

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class CommandReply:
    text: str
    exit: bool = False


CommandHandler = Callable[[AppState, str], CommandReply]


class CommandRegistry:
    """Instruction -> handler table used by the console loop."""

    def __init__(self) -> None:
        self._handlers: dict[Instruction, CommandHandler] = {}
        self._help: dict[Instruction, str] = {}

    def register(self, instruction: Instruction, handler: CommandHandler, help_text: str) -> None:
        self._handlers[instruction] = handler
        self._help[instruction] = help_text

    def handle(self, state: AppState, line: str) -> CommandReply:
        """
        Classify `line`, run its handler and turn user errors into replies.

        Validation errors never escape: the session simply waits for the next
        line. Anything else (a bug) propagates to the caller.
        """
        instruction = classify(line)
        handler = self._handlers.get(instruction)

        try:
            if handler is None:
                raise UnknownInstruction(line.strip())
            return handler(state, line)
        except (MalformedInput, InvalidReference, RedundantStateChange) as e:
            logger.debug("Rejected %s input %r: %s", instruction.value, line, e.message)
            return CommandReply(e.message)

    def build_help(self) -> str:
        lines = ["Commands:"]
        for help_text in self._help.values():
            lines.append(f"  {help_text}")
        return "\n".join(lines)


registry = CommandRegistry()


def _count_line(state: AppState) -> str:
    n = state.tasks.size()
    return f"Now you have {n} task{'s' if n != 1 else ''} in the list."


def _with_save_warning(text: str, error: StorageWriteFailed | None) -> CommandReply:
    if error is None:
        return CommandReply(text)
    return CommandReply(f"{text}\n[warning] {error.message} The change is kept for this session.")


def _add_task(state: AppState, task: Task) -> CommandReply:
    state.tasks.append(task)
    logger.info("Added %s task #%d: %s", task.kind.name.lower(), state.tasks.size(), task.description)

    error: StorageWriteFailed | None = None
    try:
        state.store.append_one(task)
    except StorageWriteFailed as e:
        error = e

    return _with_save_warning(
        f"Got it. I've added this task:\n  {task}\n{_count_line(state)}", error
    )


def _persist_all(state: AppState) -> StorageWriteFailed | None:
    try:
        state.store.persist_full(state.tasks)
    except StorageWriteFailed as e:
        return e
    return None


def cmd_list(state: AppState, line: str) -> CommandReply:
    if state.tasks.size() == 0:
        return CommandReply("Your list is empty.")
    lines = ["Here are the tasks in your list:"]
    for position, task in state.tasks.enumerate_tasks():
        lines.append(f"{position}. {task}")
    return CommandReply("\n".join(lines))


def cmd_todo(state: AppState, line: str) -> CommandReply:
    return _add_task(state, parse_todo(line))


def cmd_deadline(state: AppState, line: str) -> CommandReply:
    return _add_task(state, parse_deadline(line))


def cmd_event(state: AppState, line: str) -> CommandReply:
    return _add_task(state, parse_event(line))


def cmd_mark(state: AppState, line: str) -> CommandReply:
    task = resolve_mark_target(line, state.tasks)
    task.mark_done()
    logger.info("Marked done: %s", task.description)
    return _with_save_warning(
        f"Nice! I've marked this task as done:\n  {task}", _persist_all(state)
    )


def cmd_unmark(state: AppState, line: str) -> CommandReply:
    task = resolve_unmark_target(line, state.tasks)
    task.mark_undone()
    logger.info("Marked not done: %s", task.description)
    return _with_save_warning(
        f"OK, I've marked this task as not done yet:\n  {task}", _persist_all(state)
    )


def cmd_delete(state: AppState, line: str) -> CommandReply:
    position = resolve_delete_target(line, state.tasks)
    task = state.tasks.remove_at(position)
    logger.info("Deleted task #%d: %s", position, task.description)
    return _with_save_warning(
        f"Noted. I've removed this task:\n  {task}\n{_count_line(state)}", _persist_all(state)
    )


def cmd_find(state: AppState, line: str) -> CommandReply:
    """Case-insensitive substring search over descriptions; read-only."""
    keyword = extract_find_keyword(line)
    needle = keyword.casefold()
    matches = state.tasks.find_all(lambda task: needle in task.description.casefold())

    lines = [f"{position}. {task}" for position, task in state.tasks.enumerate_tasks(matches)]
    if not lines:
        return CommandReply(f"No tasks match {keyword!r}.")
    return CommandReply("\n".join(["Here are the matching tasks in your list:", *lines]))


def cmd_bye(state: AppState, line: str) -> CommandReply:
    return CommandReply("Bye. Hope to see you again soon!", exit=True)


registry.register(Instruction.LIST, cmd_list, "list")
registry.register(Instruction.TODO, cmd_todo, "todo <description>")
registry.register(Instruction.DEADLINE, cmd_deadline, "deadline <description> /by <date>")
registry.register(Instruction.EVENT, cmd_event, "event <description> /from <date> /to <date>")
registry.register(Instruction.MARK, cmd_mark, "mark <number>")
registry.register(Instruction.UNMARK, cmd_unmark, "unmark <number>")
registry.register(Instruction.DELETE, cmd_delete, "delete <number>")
registry.register(Instruction.FIND, cmd_find, "find <keyword>")
registry.register(Instruction.BYE, cmd_bye, "bye")
