# src/taskmate/tasks/task_store.py

from __future__ import annotations

import contextlib
import logging
import os
from datetime import datetime
from pathlib import Path

from ..core.errors import CorruptRecord, StorageUnavailable, StorageWriteFailed
from .task_list import TaskList
from .task_models import (
    DATE_FORMAT,
    DATETIME_FORMAT,
    RECORD_SEP,
    Deadline,
    Event,
    Task,
    TaskKind,
    ToDo,
    When,
)

logger = logging.getLogger(__name__)


def _decode_when(raw: str, line: str) -> When:
    raw = raw.strip()
    try:
        return datetime.strptime(raw, DATETIME_FORMAT)
    except ValueError:
        pass
    try:
        return datetime.strptime(raw, DATE_FORMAT).date()
    except ValueError:
        raise CorruptRecord(line, reason=f"bad date {raw!r}") from None


def decode_record(line: str) -> Task:
    """
    Rebuild one task from its durable line.

    Type and done markers are split off the front; date fields are peeled off
    the back, so a description may itself contain the separator.
    """
    head = line.split(RECORD_SEP, 2)
    if len(head) != 3:
        raise CorruptRecord(line, reason="too few fields")

    marker, done_flag, rest = head[0].strip(), head[1].strip(), head[2]

    try:
        kind = TaskKind(marker)
    except ValueError:
        raise CorruptRecord(line, reason=f"unknown type {marker!r}") from None

    if done_flag not in ("0", "1"):
        raise CorruptRecord(line, reason=f"bad done flag {done_flag!r}")

    task: Task
    if kind is TaskKind.TODO:
        task = ToDo(rest)
    elif kind is TaskKind.DEADLINE:
        fields = rest.rsplit(RECORD_SEP, 1)
        if len(fields) != 2:
            raise CorruptRecord(line, reason="deadline without date")
        task = Deadline(fields[0], _decode_when(fields[1], line))
    else:
        fields = rest.rsplit(RECORD_SEP, 2)
        if len(fields) != 3:
            raise CorruptRecord(line, reason="event without start/end")
        task = Event(fields[0], _decode_when(fields[1], line), _decode_when(fields[2], line))

    if not task.description.strip():
        raise CorruptRecord(line, reason="empty description")

    if done_flag == "1":
        task.mark_done()
    return task


class TaskStore:
    """
    Flat-file mirror of the task list.

    The store keeps only its path. Every write opens, writes and closes the
    file; nothing is cached between calls. The in-memory TaskList stays the
    source of truth for a running session, the file is read once at startup.
    """

    def __init__(self, path: str | Path = "tasks.txt") -> None:
        self._path = Path(path)

    @property
    def path(self) -> Path:
        return self._path

    def load(self, *, strict: bool = False) -> TaskList:
        """
        Read the file into a new TaskList.

        Missing file -> empty list (first run).
        Unreadable file -> StorageUnavailable.
        Bad line -> skipped with a warning, or CorruptRecord when `strict`.

        Records are split on "\\n" only (plus a trailing "\\r"), the same
        terminator the writers use, so other line-break characters stay
        inside the description they were typed into.
        """
        tasks = TaskList()
        try:
            with open(self._path, encoding="utf-8", newline="") as f:
                content = f.read()
        except FileNotFoundError:
            logger.info("No task file at %s yet, starting empty.", self._path)
            return tasks
        except (OSError, UnicodeDecodeError) as e:
            raise StorageUnavailable(self._path, str(e)) from e

        skipped = 0
        for line_no, raw in enumerate(content.split("\n"), start=1):
            line = raw.removesuffix("\r")
            if not line.strip():
                continue
            try:
                tasks.append(decode_record(line))
            except CorruptRecord as e:
                if strict:
                    raise CorruptRecord(line, line_no, e.reason) from None
                skipped += 1
                logger.warning(
                    "Skipping unreadable task at %s:%d (%s): %r",
                    self._path,
                    line_no,
                    e.reason,
                    line,
                )

        logger.info("Loaded %d tasks from %s (skipped=%d)", tasks.size(), self._path, skipped)
        return tasks

    def set_aside(self) -> Path | None:
        """
        Move an existing file out of the way so the session can start a new one.

        Used when the startup load failed: appending to a file whose contents
        were never loaded would mix old and new records on the next run.
        Returns the backup path, or None when there was no file.
        """
        stamp = datetime.now().strftime("%Y%m%d-%H%M%S")
        backup = self._path.with_name(f"{self._path.name}.unreadable-{stamp}")
        try:
            os.replace(self._path, backup)
        except FileNotFoundError:
            return None
        except OSError as e:
            logger.error("Failed to move %s aside: %s", self._path, e)
            raise StorageWriteFailed(self._path, str(e)) from e
        logger.warning("Moved unreadable task file %s to %s", self._path, backup)
        return backup

    def persist_full(self, tasks: TaskList) -> None:
        """Rewrite the whole file; used after mark/unmark/delete."""
        payload = "".join(task.to_record() + "\n" for task in tasks)
        tmp = self._path.with_suffix(self._path.suffix + ".tmp")
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            with open(tmp, "w", encoding="utf-8", newline="") as f:
                f.write(payload)
            os.replace(tmp, self._path)
        except OSError as e:
            with contextlib.suppress(OSError):
                tmp.unlink(missing_ok=True)
            logger.error("Failed to rewrite %s: %s", self._path, e)
            raise StorageWriteFailed(self._path, str(e)) from e
        logger.debug("Rewrote %s with %d tasks", self._path, tasks.size())

    def append_one(self, task: Task) -> None:
        """Append a single new record; used after todo/deadline/event."""
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            with open(self._path, "a", encoding="utf-8", newline="") as f:
                f.write(task.to_record() + "\n")
        except OSError as e:
            logger.error("Failed to append to %s: %s", self._path, e)
            raise StorageWriteFailed(self._path, str(e)) from e
        logger.debug("Appended %s to %s", task.kind.value, self._path)
