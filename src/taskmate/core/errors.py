# src/taskmate/core/errors.py

"""
Error taxonomy.

Four families, each caught at a different place:
- MalformedInput: the line cannot be turned into a valid instruction
- InvalidReference: a task position is not a number or out of range
- RedundantStateChange: mark/unmark would not change anything
- StorageFailure: the durable file could not be read, decoded or written

The first three are reported to the user by the command registry and never
end the session. StorageFailure is degraded to a warning by the caller.
"""

from __future__ import annotations


class TaskmateError(Exception):
    """Base class. `message` is safe to show to the user."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


# ---- malformed input ----


class MalformedInput(TaskmateError):
    pass


class EmptyDescription(MalformedInput):
    def __init__(self, kind: str) -> None:
        super().__init__(f"The description of a {kind} cannot be empty.")
        self.kind = kind


class MissingDeadlineMarker(MalformedInput):
    def __init__(self) -> None:
        super().__init__("A deadline needs a due date: deadline <description> /by <date>")


class MissingFromMarker(MalformedInput):
    def __init__(self) -> None:
        super().__init__(
            "An event needs a start: event <description> /from <date> /to <date>"
        )


class MissingToMarker(MalformedInput):
    def __init__(self) -> None:
        super().__init__(
            "An event needs an end after its start: "
            "event <description> /from <date> /to <date>"
        )


class UnparsableDate(MalformedInput):
    def __init__(self, raw: str) -> None:
        shown = raw if raw else "(empty)"
        super().__init__(
            f"Cannot read the date {shown!r}. "
            "Use YYYY-MM-DD or D/M/YYYY, optionally followed by HHMM."
        )
        self.raw = raw


class EmptyKeyword(MalformedInput):
    def __init__(self) -> None:
        super().__init__("Tell me what to look for: find <keyword>")


class UnknownInstruction(MalformedInput):
    def __init__(self, line: str) -> None:
        super().__init__(
            f"I don't know what {line!r} means. Try one of: "
            "list, todo, deadline, event, mark, unmark, delete, find, bye."
        )
        self.line = line


# ---- invalid references ----


class InvalidReference(TaskmateError):
    pass


class NotANumber(InvalidReference):
    def __init__(self, raw: str) -> None:
        shown = raw if raw else "(nothing)"
        super().__init__(f"Expected a task number, got {shown!r}.")
        self.raw = raw


class IndexOutOfRange(InvalidReference):
    def __init__(self, position: int, size: int) -> None:
        if size == 0:
            msg = f"There is no task {position}: the list is empty."
        else:
            msg = f"There is no task {position}: pick a number from 1 to {size}."
        super().__init__(msg)
        self.position = position
        self.size = size


# ---- redundant state changes ----


class RedundantStateChange(TaskmateError):
    def __init__(self, message: str, position: int) -> None:
        super().__init__(message)
        self.position = position


class AlreadyDone(RedundantStateChange):
    def __init__(self, position: int) -> None:
        super().__init__(f"Task {position} is already marked as done.", position)


class AlreadyUndone(RedundantStateChange):
    def __init__(self, position: int) -> None:
        super().__init__(f"Task {position} is already not done.", position)


# ---- storage ----


class StorageFailure(TaskmateError):
    pass


class StorageUnavailable(StorageFailure):
    def __init__(self, path: object, reason: str) -> None:
        super().__init__(f"Cannot open the task file {path}: {reason}")
        self.path = path


class CorruptRecord(StorageFailure):
    def __init__(self, line: str, line_no: int | None = None, reason: str = "") -> None:
        where = f"line {line_no}" if line_no is not None else "record"
        detail = f" ({reason})" if reason else ""
        super().__init__(f"Unreadable task {where}: {line!r}{detail}")
        self.line = line
        self.line_no = line_no
        self.reason = reason


class StorageWriteFailed(StorageFailure):
    def __init__(self, path: object, reason: str) -> None:
        super().__init__(f"Could not save tasks to {path}: {reason}")
        self.path = path
