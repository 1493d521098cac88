# src/taskmate/core/parser.py

"""
Field extraction and validation for each instruction.

Every function takes the raw input line (plus the task list where a position
has to be resolved) and either returns what the handler needs or raises a
typed error from core.errors.

Checks always run in the same order and stop at the first failure:
structure (separators present) -> content (non-empty) -> semantics
(numbers, bounds, dates, current state).
"""

from __future__ import annotations

import re
from datetime import datetime

from ..tasks.task_list import TaskList
from ..tasks.task_models import Deadline, Event, Task, ToDo, When
from .errors import (
    AlreadyDone,
    AlreadyUndone,
    EmptyDescription,
    EmptyKeyword,
    MissingDeadlineMarker,
    MissingFromMarker,
    MissingToMarker,
    NotANumber,
    UnparsableDate,
)

# Markers must stand alone as tokens: "/by" matches, "a/by" and "/bye" do not.
BY_MARKER = re.compile(r"(?<!\S)/by(?!\S)", re.IGNORECASE)
FROM_MARKER = re.compile(r"(?<!\S)/from(?!\S)", re.IGNORECASE)
TO_MARKER = re.compile(r"(?<!\S)/to(?!\S)", re.IGNORECASE)

# ASCII digits with an optional minus sign; no "+", "_" or non-ASCII digits.
POSITION_RE = re.compile(r"-?[0-9]+")

DATETIME_INPUT_FORMATS = (
    "%Y-%m-%d %H%M",
    "%Y-%m-%d %H:%M",
    "%d/%m/%Y %H%M",
    "%d/%m/%Y %H:%M",
)
DATE_INPUT_FORMATS = (
    "%Y-%m-%d",
    "%d/%m/%Y",
)


def command_body(line: str) -> str:
    """Everything after the command word, trimmed."""
    parts = line.strip().split(maxsplit=1)
    if len(parts) < 2:
        return ""
    return parts[1].strip()


def parse_when(text: str) -> When:
    """
    Parse a user-supplied date, with an optional time of day.

    Returns a `datetime` when a time was given and a plain `date` otherwise.
    """
    raw = " ".join(text.split())
    if not raw:
        raise UnparsableDate(text.strip())

    for fmt in DATETIME_INPUT_FORMATS:
        try:
            return datetime.strptime(raw, fmt)
        except ValueError:
            continue

    for fmt in DATE_INPUT_FORMATS:
        try:
            return datetime.strptime(raw, fmt).date()
        except ValueError:
            continue

    raise UnparsableDate(raw)


def parse_todo(line: str) -> ToDo:
    description = command_body(line)
    if not description:
        raise EmptyDescription("todo")
    return ToDo(description)


def parse_deadline(line: str) -> Deadline:
    body = command_body(line)

    marker = BY_MARKER.search(body)
    if marker is None:
        raise MissingDeadlineMarker()

    description = body[: marker.start()].strip()
    if not description:
        raise EmptyDescription("deadline")

    by = parse_when(body[marker.end() :])
    return Deadline(description, by)


def parse_event(line: str) -> Event:
    body = command_body(line)

    start_marker = FROM_MARKER.search(body)
    if start_marker is None:
        raise MissingFromMarker()

    end_marker = TO_MARKER.search(body, start_marker.end())
    if end_marker is None:
        raise MissingToMarker()

    description = body[: start_marker.start()].strip()
    if not description:
        raise EmptyDescription("event")

    start = parse_when(body[start_marker.end() : end_marker.start()])
    end = parse_when(body[end_marker.end() :])
    return Event(description, start, end)


def parse_position(line: str, tasks: TaskList) -> int:
    """Read the trailing task number and check it against the current list size."""
    body = command_body(line)
    if not POSITION_RE.fullmatch(body):
        raise NotANumber(body)
    position = int(body)

    tasks.check_position(position)
    return position


def resolve_mark_target(line: str, tasks: TaskList) -> Task:
    position = parse_position(line, tasks)
    task = tasks.get(position)
    if task.is_done:
        raise AlreadyDone(position)
    return task


def resolve_unmark_target(line: str, tasks: TaskList) -> Task:
    position = parse_position(line, tasks)
    task = tasks.get(position)
    if not task.is_done:
        raise AlreadyUndone(position)
    return task


def resolve_delete_target(line: str, tasks: TaskList) -> int:
    return parse_position(line, tasks)


def extract_find_keyword(line: str) -> str:
    keyword = command_body(line)
    if not keyword:
        raise EmptyKeyword()
    return keyword
