# src/tasklist/tasks/task_models.py

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum


class SortKey(StrEnum):
    """
    Reordering criteria understood by TaskStore.sort().

    Notes:
    - ID sorts by id ascending (equivalent to insertion order while ids are monotonic).
    - STATUS puts incomplete tasks first; ties keep their existing relative order.
    """

    ID = "id"
    STATUS = "status"

    @classmethod
    def parse(cls, raw: str | None) -> SortKey:
        if not raw:
            return cls.ID
        try:
            return cls(raw.strip().lower())
        except ValueError:
            raise ValueError(f"unknown sort key: {raw!r}") from None


@dataclass(slots=True)
class Task:
    id: int
    description: str
    completed: bool = False

    # Present only for "timed" tasks. Free-form label, never parsed as a date.
    deadline: str | None = None

    @property
    def is_timed(self) -> bool:
        return self.deadline is not None

    def mark_complete(self) -> None:
        self.completed = True
