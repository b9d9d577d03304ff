"""Ordered, position-addressed collection of tasks."""

from typing import Iterable, Iterator, List, Optional, Tuple

from .errors import TaskIndexError
from .task import Task


class TaskList:
    """Tasks in insertion order, addressed by 1-based position."""

    def __init__(self, tasks: Optional[Iterable[Task]] = None):
        self._tasks: List[Task] = list(tasks or [])

    def __iter__(self) -> Iterator[Task]:
        return iter(list(self._tasks))

    def __len__(self) -> int:
        return len(self._tasks)

    def size(self) -> int:
        return len(self._tasks)

    def is_valid_position(self, position: int) -> bool:
        return 1 <= position <= len(self._tasks)

    def _check(self, position: int) -> None:
        if not self.is_valid_position(position):
            raise TaskIndexError(position, len(self._tasks))

    def get(self, position: int) -> Task:
        self._check(position)
        return self._tasks[position - 1]

    def add(self, task: Task) -> Task:
        """Append a task and return it."""
        self._tasks.append(task)
        return task

    def complete(self, position: int) -> Task:
        """Mark the task at a position as done.

        Raises:
            TaskIndexError: If the position is outside [1, size]
        """
        self._check(position)
        task = self._tasks[position - 1]
        task.complete()
        return task

    def remove(self, position: int) -> Task:
        """Remove and return the task at a position; later tasks move up one.

        Raises:
            TaskIndexError: If the position is outside [1, size]
        """
        self._check(position)
        return self._tasks.pop(position - 1)

    def iterate(self) -> List[Task]:
        """Snapshot of the tasks in list order."""
        return list(self._tasks)

    def numbered(self) -> List[Tuple[int, Task]]:
        """Snapshot of (position, task) pairs."""
        return list(enumerate(self._tasks, start=1))

    def find(self, keyword: str) -> List[Tuple[int, Task]]:
        """Tasks whose description contains the keyword (case-sensitive)."""
        return [(i, t) for i, t in enumerate(self._tasks, start=1) if keyword in t.description]
