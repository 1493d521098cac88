# src/taskmate/cli/bootstrap.py

"""
CLI bootstrap helpers.

This module is the "composition root": it takes the settings, builds the
TaskStore and loads the saved task list into a fresh AppState.
"""

from __future__ import annotations

import logging

from ..config import get_settings
from ..core.errors import StorageFailure, StorageWriteFailed
from ..core.state import AppState
from ..tasks.task_list import TaskList
from ..tasks.task_store import TaskStore

logger = logging.getLogger(__name__)


def create_initial_state(*, settings=None) -> AppState:
    """
    Create AppState from the provided settings.

    A task file that cannot be opened or (in strict mode) decoded does not stop
    the app: the session starts with an empty list and `load_warning` is set so
    the console can tell the user. The unreadable file is moved aside first,
    so records written this session never mix with ones that were not loaded.
    """
    if settings is None:
        settings = get_settings()

    store = TaskStore(settings.tasks_path)
    state = AppState(settings=settings, store=store)

    try:
        state.tasks = store.load(strict=bool(getattr(settings, "strict_load", False)))
    except StorageFailure as e:
        logger.warning("Starting with an empty task list: %s", e.message)
        state.tasks = TaskList()
        state.load_warning = e.message + _set_aside_note(store)

    return state


def _set_aside_note(store: TaskStore) -> str:
    try:
        backup = store.set_aside()
    except StorageWriteFailed as e:
        return f" It could not be moved aside ({e.message}); new tasks will be added to it."
    if backup is None:
        return ""
    return f" The old file was kept as {backup}."
