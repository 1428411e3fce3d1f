"""
Task store - In-memory task collection and its business rules
"""
from typing import Callable, Dict, List, Optional
from datetime import datetime, timezone
from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel
import threading
import logging

logger = logging.getLogger(__name__)

MAX_TITLE_LENGTH = 200


class TaskValidationError(ValueError):
    """Raised when task input breaks a documented constraint"""


class Task(BaseModel):
    """A single task as held by the store"""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    id: int
    title: str
    completed: bool = False
    created_at: datetime
    updated_at: datetime


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def normalize_title(title: str) -> str:
    """
    Trim a task title and check it against the title rules.

    Raises:
        TaskValidationError: If the title is not a string, is empty after
            trimming, or is longer than MAX_TITLE_LENGTH characters
    """
    if not isinstance(title, str):
        raise TaskValidationError("Title must be a non-empty string")

    title = title.strip()
    if not title:
        raise TaskValidationError("Title must be a non-empty string")
    if len(title) > MAX_TITLE_LENGTH:
        raise TaskValidationError(f"Task title must be less than {MAX_TITLE_LENGTH} characters")
    return title


class TaskStore:
    """
    Owns the task collection and the identifier counter.

    Every operation holds the same lock, so ids are never handed out twice
    and a delete racing an update resolves in lock order. Tasks handed to
    callers are copies; the only way to change a stored task is through
    the store's methods.
    """

    def __init__(self, clock: Optional[Callable[[], datetime]] = None):
        self._tasks: Dict[int, Task] = {}
        self._next_id: int = 1
        self._lock = threading.Lock()
        self._clock = clock or _utcnow

    def list_tasks(self) -> List[Task]:
        """Get all tasks, oldest first"""
        with self._lock:
            return [task.model_copy() for task in self._tasks.values()]

    def count(self) -> int:
        with self._lock:
            return len(self._tasks)

    def get_task(self, task_id: int) -> Optional[Task]:
        """Get a specific task by ID, or None if there is no such task"""
        with self._lock:
            task = self._tasks.get(task_id)
            return task.model_copy() if task is not None else None

    def create_task(self, title: str) -> Task:
        """
        Create a new task with the next identifier.

        Raises:
            TaskValidationError: If the title is invalid. The counter is
                not advanced in that case.
        """
        title = normalize_title(title)

        with self._lock:
            now = self._clock()
            task = Task(
                id=self._next_id,
                title=title,
                completed=False,
                created_at=now,
                updated_at=now,
            )
            self._tasks[task.id] = task
            self._next_id += 1

        logger.info(f"Created task with ID {task.id}")
        return task.model_copy()

    def update_task(
        self,
        task_id: int,
        title: Optional[str] = None,
        completed: Optional[bool] = None
    ) -> Optional[Task]:
        """
        Apply a partial update to a task.

        Args:
            task_id: The ID of the task to update
            title: New title, or None to keep the current one
            completed: New completion flag, or None to keep the current one

        Returns:
            The updated task, or None if the task does not exist

        Raises:
            TaskValidationError: If a supplied field is invalid. Nothing is
                changed in that case.
        """
        changes = {}

        if title is not None:
            changes["title"] = normalize_title(title)

        if completed is not None:
            if not isinstance(completed, bool):
                raise TaskValidationError("Completed must be a boolean value")
            changes["completed"] = completed

        with self._lock:
            task = self._tasks.get(task_id)
            if task is None:
                return None

            now = self._clock()
            changes["updated_at"] = max(now, task.created_at)
            updated_task = task.model_copy(update=changes)
            self._tasks[task_id] = updated_task

        logger.info(f"Updated task {task_id}")
        return updated_task.model_copy()

    def delete_task(self, task_id: int) -> bool:
        """
        Delete a task
        Returns True if deleted, False if not found
        """
        with self._lock:
            if task_id not in self._tasks:
                return False
            del self._tasks[task_id]

        logger.info(f"Deleted task {task_id}")
        return True

    def seed(self, titles: List[str]) -> List[Task]:
        """Create one task per title, in order"""
        return [self.create_task(title) for title in titles]
