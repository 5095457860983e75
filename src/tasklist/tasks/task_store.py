# src/tasklist/tasks/task_store.py

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from .task_models import SortKey, Task

if TYPE_CHECKING:
    from .task_codec import LoadResult

logger = logging.getLogger(__name__)


class TaskStore:
    """
    In-memory task list.

    Owns three pieces of state:
    - the ordered task list (insertion order unless explicitly sorted)
    - the id counter (always greater than any id issued or loaded)
    - the undo stack: ids pushed by additions only

    Lookups by id are linear scans; lists are expected to stay small.
    """

    def __init__(self, tasks: list[Task] | None = None, *, next_id: int | None = None) -> None:
        self._tasks: list[Task] = list(tasks or [])
        self._recent_additions: list[int] = []

        floor = max((t.id for t in self._tasks), default=0) + 1
        self._next_id = floor if next_id is None else max(int(next_id), floor)

    @classmethod
    def from_load_result(cls, result: LoadResult | None) -> TaskStore:
        """Build a store from a codec load. Loaded tasks are not undoable."""
        if result is None:
            return cls()
        return cls(result.tasks, next_id=result.next_id)

    # ---- introspection ----

    def __len__(self) -> int:
        return len(self._tasks)

    @property
    def next_id(self) -> int:
        return self._next_id

    @property
    def undo_depth(self) -> int:
        return len(self._recent_additions)

    # ---- low-level helpers ----

    def _allocate_id(self) -> int:
        task_id = self._next_id
        self._next_id += 1
        return task_id

    def _index_of(self, task_id: int) -> int | None:
        for i, t in enumerate(self._tasks):
            if t.id == task_id:
                return i
        return None

    # ---- public API ----

    def add(self, description: str) -> int:
        return self._append(Task(id=self._allocate_id(), description=description))

    def add_timed(self, description: str, deadline: str) -> int:
        return self._append(
            Task(id=self._allocate_id(), description=description, deadline=deadline)
        )

    def _append(self, task: Task) -> int:
        self._tasks.append(task)
        self._recent_additions.append(task.id)
        logger.debug("Task added id=%s timed=%s", task.id, task.is_timed)
        return task.id

    def get(self, task_id: int) -> Task | None:
        idx = self._index_of(task_id)
        return None if idx is None else self._tasks[idx]

    def complete(self, task_id: int) -> bool:
        """
        Mark a task as completed.

        Returns False if no task has this id (nothing changes).
        Completing an already completed task is a successful no-op.
        """
        task = self.get(task_id)
        if task is None:
            logger.debug("Complete: task id=%s not found", task_id)
            return False
        task.mark_complete()
        logger.debug("Task completed id=%s", task_id)
        return True

    def undo(self) -> int | None:
        """
        Remove the most recent addition that has not been undone yet.

        Returns the removed id, or None when there is nothing to undo.
        The completed flag is irrelevant: a completed task is removed all the same.
        """
        if not self._recent_additions:
            return None

        task_id = self._recent_additions.pop()
        idx = self._index_of(task_id)
        if idx is None:
            # The entry is consumed anyway so the next undo moves on.
            logger.warning("Undo: task id=%s is on the undo stack but not in the list", task_id)
            return None

        del self._tasks[idx]
        logger.debug("Task undone id=%s", task_id)
        return task_id

    def sort(self, key: SortKey = SortKey.ID) -> None:
        # list.sort is stable, so equal-status tasks keep their relative order.
        if key is SortKey.STATUS:
            self._tasks.sort(key=lambda t: t.completed)
        else:
            self._tasks.sort(key=lambda t: t.id)
        logger.debug("Tasks sorted by %s", key.value)

    def list(self) -> tuple[Task, ...]:
        return tuple(self._tasks)
