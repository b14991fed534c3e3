# src/task_tracker/tasks/task_models.py

from __future__ import annotations

from dataclasses import dataclass, field

DEFAULT_PRIORITY = 1
MIN_PRIORITY = 1
MAX_PRIORITY = 5


@dataclass(slots=True)
class Task:
    """
    A single to-do item.

    Notes:
    - priority is expected in 1..5 but storage does not enforce it.
    - completed_at is set iff completed is True.
    - the list view only reads id/title/priority/completed; the timestamps
      stay None there.
    """

    id: int
    title: str
    priority: int = DEFAULT_PRIORITY
    completed: bool = False

    created_at: float | None = None
    completed_at: float | None = None
    due_date: float | None = None


@dataclass(slots=True)
class TaskCounts:
    """Raw aggregates straight from the store."""

    total: int
    completed: int
    # priority -> count, ascending priority, only priorities present in the data
    by_priority: dict[int, int] = field(default_factory=dict)


@dataclass(slots=True)
class TaskStats:
    total: int
    completed: int
    by_priority: dict[int, int]
    completion_rate: float

    @property
    def pending(self) -> int:
        return self.total - self.completed
