"""Base mixin for task stores.

Provides the shared read and mutation logic so that
:class:`InMemoryTaskStore` and :class:`JsonFileTaskStore` need only
implement construction and persistence.

Subclasses must define ``self._tasks``, ``self._next_id`` and ``self._lock``
before calling any mixin method.
"""

from __future__ import annotations

import threading
from datetime import UTC, datetime

from tasklist.exceptions import TaskNotFoundError
from tasklist.models.task import Task


class BaseTaskStoreMixin:
    """Mixin implementing the ``TaskStore`` protocol over a dict of tasks.

    Ids are assigned from a monotonically increasing counter starting at 1
    and are never reused, even after ``clear()``.

    The ``_after_mutation()`` hook is called (with the lock held) after any
    method that modifies ``self._tasks``.  The default implementation is a
    no-op; file-backed stores override it to flush to disk.
    """

    # Declared here for type-checkers; concrete classes actually create them.
    _tasks: dict[int, Task]
    _next_id: int
    _lock: threading.RLock

    def _after_mutation(self) -> None:
        """Hook called after ``_tasks`` changes.  Override to persist."""

    # ------------------------------------------------------------------
    # TaskStore protocol methods
    # ------------------------------------------------------------------

    def add(self, owner_id: int, title: str) -> Task:
        with self._lock:
            task = Task(
                id=self._next_id,
                title=title,
                owner_id=owner_id,
                created_at=datetime.now(UTC),
            )
            self._next_id += 1
            self._tasks[task.id] = task
            self._after_mutation()
            return task

    def get(self, task_id: int) -> Task | None:
        with self._lock:
            return self._tasks.get(task_id)

    def list_for_owner(self, owner_id: int, *, include_deleted: bool = False) -> list[Task]:
        with self._lock:
            return [
                t
                for t in self._tasks.values()
                if t.owner_id == owner_id and (include_deleted or not t.is_deleted)
            ]

    def save(self, task: Task) -> None:
        with self._lock:
            if task.id not in self._tasks:
                raise TaskNotFoundError(task.id)
            self._tasks[task.id] = task
            self._after_mutation()

    def clear(self) -> None:
        with self._lock:
            self._tasks.clear()
            self._after_mutation()

    def __len__(self) -> int:
        with self._lock:
            return len(self._tasks)
