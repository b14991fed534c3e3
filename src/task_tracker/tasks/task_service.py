# src/task_tracker/tasks/task_service.py

from __future__ import annotations

import logging

from ..core.ports import TaskRepo
from ..errors import ValidationError
from .task_models import DEFAULT_PRIORITY, Task, TaskStats

logger = logging.getLogger(__name__)


def completion_rate(completed: int, total: int) -> float:
    """Percentage of completed tasks; an empty list counts as 0.0 rather than NaN."""
    if total <= 0:
        return 0.0
    return completed / total * 100


def parse_task_id(raw: int | str) -> int:
    if isinstance(raw, bool):
        raise ValidationError(f"invalid task id: {raw!r}")
    if isinstance(raw, int):
        return raw
    text = str(raw).strip()
    try:
        return int(text)
    except ValueError:
        raise ValidationError(f"invalid task id: {raw!r} (expected an integer)") from None


class TaskService:
    """
    The four user operations on top of a TaskRepo.

    Validation happens here, before the repo is touched. Priority is passed
    through unchecked: 1..5 is a display convention only.
    """

    def __init__(self, repo: TaskRepo) -> None:
        self._repo = repo

    def add_task(self, title: str, priority: int = DEFAULT_PRIORITY) -> int:
        clean = (title or "").strip()
        if not clean:
            raise ValidationError("task title must not be empty")
        task_id = self._repo.insert(clean, int(priority))
        logger.info("Added task id=%s priority=%s", task_id, priority)
        return task_id

    def list_tasks(self) -> list[Task]:
        return self._repo.query_all()

    def complete_task(self, task_id: int | str) -> int:
        """
        Mark a task completed and return the parsed id.

        A missing id is not an error: the store treats it as a no-op and
        it is only noted in the log.
        """
        tid = parse_task_id(task_id)
        self._repo.update_completion(tid)
        if self._repo.get(tid) is None:
            logger.info("Complete on unknown task id=%s (no-op)", tid)
        else:
            logger.info("Completed task id=%s", tid)
        return tid

    def compute_stats(self) -> TaskStats:
        counts = self._repo.aggregate_counts()
        return TaskStats(
            total=counts.total,
            completed=counts.completed,
            by_priority=dict(counts.by_priority),
            completion_rate=completion_rate(counts.completed, counts.total),
        )
