"""Task repository: in-memory task collection with named transitions.

Extends InMemoryRepository with task creation, completion toggles and the
dedicated priority change. The router reaches the shared collection only
through get_task_repository().
"""

import logging
from typing import Any

from patterns.repository import InMemoryRepository, RecordNotFound
from verticals.tasks.config import config
from verticals.tasks.models.task import Task

logger = logging.getLogger(__name__)


class TaskNotFound(RecordNotFound):
    message = config.not_found_message


DEFAULT_TASKS = (
    {
        "title": "Finish Homework",
        "description": "Complete the math assignment",
        "due_date": "2025-04-20",
        "priority": "high",
    },
    {
        "title": "Buy Groceries",
        "description": "Buy fruits and vegetables",
        "due_date": "2025-04-21",
        "priority": "medium",
    },
)


# ---------------------------------------------------------------------------
# Task repository
# ---------------------------------------------------------------------------

class TaskRepository(InMemoryRepository[Task]):
    """Repository for task CRUD and status transitions."""

    not_found = TaskNotFound

    @classmethod
    def seeded(cls) -> "TaskRepository":
        """Repository holding the two default tasks."""
        repo = cls()
        for data in DEFAULT_TASKS:
            repo.create(**data)
        return repo

    def create(self, title: Any, description: Any, due_date: Any, priority: Any) -> Task:
        """Append a new, incomplete task. Values are stored as given."""
        with self._lock:
            task = Task(
                id=self.next_id(),
                title=title,
                description=description,
                due_date=due_date,
                priority=priority,
                completed=False,
            )
            self._records.append(task)
        logger.info("Created task %s", task.id)
        return task

    def mark_complete(self, task_id: Any) -> Task:
        return self._set_completed(task_id, True)

    def mark_incomplete(self, task_id: Any) -> Task:
        return self._set_completed(task_id, False)

    def _set_completed(self, task_id: Any, completed: bool) -> Task:
        with self._lock:
            task = self.get(task_id)
            task.completed = completed
        logger.debug("Task %s completed=%s", task_id, completed)
        return task

    def set_priority(self, task_id: Any, priority: Any) -> Task:
        """Overwrite priority unconditionally; any value is accepted."""
        with self._lock:
            task = self.get(task_id)
            task.priority = priority
        logger.debug("Task %s priority=%r", task_id, priority)
        return task


# ---------------------------------------------------------------------------
# FastAPI dependency
# ---------------------------------------------------------------------------

_repository = TaskRepository.seeded() if config.seed_defaults else TaskRepository()


def get_task_repository() -> TaskRepository:
    """FastAPI dependency for the process-wide TaskRepository."""
    return _repository
