# tests/test_bootstrap.py

from __future__ import annotations

from taskmate.cli.bootstrap import create_initial_state
from taskmate.cli.commands import registry
from taskmate.tasks import task_store


def test_fresh_start_is_empty(settings) -> None:
    state = create_initial_state(settings=settings)
    assert state.tasks.size() == 0
    assert state.load_warning is None
    assert state.store.path == settings.tasks_path


def test_saved_tasks_are_loaded(settings) -> None:
    settings.tasks_path.parent.mkdir(parents=True)
    settings.tasks_path.write_text("T | 1 | saved\nbroken\n", "utf-8")

    state = create_initial_state(settings=settings)
    assert [t.description for t in state.tasks] == ["saved"]
    assert state.tasks.get(1).is_done
    assert state.load_warning is None


def test_strict_load_falls_back_to_empty_list(settings) -> None:
    settings.strict_load = True
    settings.tasks_path.parent.mkdir(parents=True)
    settings.tasks_path.write_text("T | 1 | saved\nbroken\n", "utf-8")

    state = create_initial_state(settings=settings)
    assert state.tasks.size() == 0
    assert state.load_warning is not None
    assert "line 2" in state.load_warning


def test_unreadable_file_falls_back_to_empty_list(settings) -> None:
    settings.tasks_path.mkdir(parents=True)

    state = create_initial_state(settings=settings)
    assert state.tasks.size() == 0
    assert "Cannot open" in (state.load_warning or "")


def test_permission_denied_falls_back_to_empty_list(settings, monkeypatch) -> None:
    settings.tasks_path.parent.mkdir(parents=True)
    settings.tasks_path.write_text("T | 0 | locked away\n", "utf-8")

    def denied(*args, **kwargs):
        raise PermissionError(13, "Permission denied", str(settings.tasks_path))

    monkeypatch.setattr(task_store, "open", denied, raising=False)

    state = create_initial_state(settings=settings)
    assert state.tasks.size() == 0
    assert "Permission denied" in (state.load_warning or "")


def test_failed_load_keeps_old_file_apart_from_new_tasks(settings) -> None:
    settings.strict_load = True
    settings.tasks_path.parent.mkdir(parents=True)
    settings.tasks_path.write_text("T | 1 | saved\nbroken\n", "utf-8")

    state = create_initial_state(settings=settings)
    backups = list(settings.tasks_path.parent.glob("tasks.txt.unreadable-*"))
    assert len(backups) == 1
    assert backups[0].read_text("utf-8") == "T | 1 | saved\nbroken\n"
    assert str(backups[0]) in (state.load_warning or "")

    registry.handle(state, "todo fresh start")
    assert settings.tasks_path.read_text("utf-8") == "T | 0 | fresh start\n"
