# src/taskmate/tasks/task_list.py

from __future__ import annotations

from collections.abc import Callable, Iterable, Iterator

from ..core.errors import IndexOutOfRange
from .task_models import Task

TaskPredicate = Callable[[Task], bool]


class TaskMatches:
    """
    Lazy view over the tasks that satisfy a predicate.

    Every iteration walks the owning list again, so the view can be consumed
    more than once and always reflects the current order.
    """

    def __init__(self, tasks: TaskList, predicate: TaskPredicate) -> None:
        self._tasks = tasks
        self._predicate = predicate

    def __iter__(self) -> Iterator[Task]:
        for task in self._tasks:
            if self._predicate(task):
                yield task


class TaskList:
    """
    Ordered task collection addressed by 1-based positions.

    Positions are not stored anywhere; position N is simply the Nth task in the
    current order, so removing a task shifts everything after it down by one.
    """

    def __init__(self, tasks: Iterable[Task] | None = None) -> None:
        self._tasks: list[Task] = list(tasks or [])

    def __len__(self) -> int:
        return len(self._tasks)

    def __iter__(self) -> Iterator[Task]:
        return iter(self._tasks)

    def __repr__(self) -> str:  # pragma: no cover - debugging aid
        return f"TaskList({self._tasks!r})"

    def size(self) -> int:
        return len(self._tasks)

    def check_position(self, position: int) -> None:
        if not 1 <= position <= len(self._tasks):
            raise IndexOutOfRange(position, len(self._tasks))

    def append(self, task: Task) -> None:
        self._tasks.append(task)

    def get(self, position: int) -> Task:
        self.check_position(position)
        return self._tasks[position - 1]

    def remove_at(self, position: int) -> Task:
        self.check_position(position)
        return self._tasks.pop(position - 1)

    def find_all(self, predicate: TaskPredicate) -> TaskMatches:
        return TaskMatches(self, predicate)

    def enumerate_tasks(self, tasks: Iterable[Task] | None = None) -> Iterator[tuple[int, Task]]:
        """Yield (position, task); pass `tasks` to number a subset such as find results."""
        return enumerate(self._tasks if tasks is None else tasks, start=1)
