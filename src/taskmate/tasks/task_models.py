# src/taskmate/tasks/task_models.py

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from enum import StrEnum

When = date | datetime

RECORD_SEP = " | "
DATE_FORMAT = "%Y-%m-%d"
DATETIME_FORMAT = "%Y-%m-%d %H%M"


class TaskKind(StrEnum):
    """Task variant, valued by its marker in the durable record."""

    TODO = "T"
    DEADLINE = "D"
    EVENT = "E"


def format_when(value: When) -> str:
    """
    Storage form: YYYY-MM-DD, or YYYY-MM-DD HHMM when a time is present.

    The reader needs four-digit years; glibc strftime("%Y") writes 999, not 0999.
    """
    text = f"{value.year:04d}-{value.month:02d}-{value.day:02d}"
    if isinstance(value, datetime):
        text += f" {value.hour:02d}{value.minute:02d}"
    return text


def display_when(value: When) -> str:
    if isinstance(value, datetime):
        return value.strftime("%b %d %Y, %I:%M%p")
    return value.strftime("%b %d %Y")


@dataclass(slots=True)
class Task:
    """
    Shared shape of every task variant.

    `is_done` starts False and is only changed through mark_done()/mark_undone().
    """

    description: str
    is_done: bool = field(default=False, kw_only=True)

    kind = TaskKind.TODO

    @property
    def status_icon(self) -> str:
        return "X" if self.is_done else " "

    def mark_done(self) -> None:
        self.is_done = True

    def mark_undone(self) -> None:
        self.is_done = False

    def extra_fields(self) -> list[str]:
        return []

    def to_record(self) -> str:
        parts = [self.kind.value, "1" if self.is_done else "0", self.description]
        parts.extend(self.extra_fields())
        return RECORD_SEP.join(parts)

    def suffix(self) -> str:
        return ""

    def __str__(self) -> str:
        return f"[{self.kind.value}][{self.status_icon}] {self.description}{self.suffix()}"


@dataclass(slots=True)
class ToDo(Task):
    kind = TaskKind.TODO


@dataclass(slots=True)
class Deadline(Task):
    by: When

    kind = TaskKind.DEADLINE

    def extra_fields(self) -> list[str]:
        return [format_when(self.by)]

    def suffix(self) -> str:
        return f" (by: {display_when(self.by)})"


@dataclass(slots=True)
class Event(Task):
    start: When
    end: When

    kind = TaskKind.EVENT

    def extra_fields(self) -> list[str]:
        return [format_when(self.start), format_when(self.end)]

    def suffix(self) -> str:
        return f" (from: {display_when(self.start)} to: {display_when(self.end)})"
