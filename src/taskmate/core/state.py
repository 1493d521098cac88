# src/taskmate/core/state.py

from __future__ import annotations

from dataclasses import dataclass, field

from ..tasks.task_list import TaskList
from ..tasks.task_store import TaskStore


@dataclass
class AppState:
    """
    Everything one session works on.

    The task list lives here (never in a module global) and is passed to every
    command handler along with the store that mirrors it.
    """

    # Settings (or a test stand-in with the same attributes).
    settings: object

    store: TaskStore
    tasks: TaskList = field(default_factory=TaskList)

    # Set by bootstrap when the startup load fell back to an empty list.
    load_warning: str | None = None
