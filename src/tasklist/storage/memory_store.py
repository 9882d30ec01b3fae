"""In-memory task store for development and testing.

This is the default backend -- no external dependencies needed.
Production users provide their own implementation (Postgres, SQLite, etc.)
that satisfies the ``TaskStore`` protocol.
"""

from __future__ import annotations

import threading

from tasklist.models.task import Task
from tasklist.storage._base import BaseTaskStoreMixin


class InMemoryTaskStore(BaseTaskStoreMixin):
    """Dict-backed task store. Implements TaskStore protocol.

    Tasks are frozen models, so handing out the stored instances is safe.
    """

    __slots__ = ("_lock", "_next_id", "_tasks")

    def __init__(self) -> None:
        self._tasks: dict[int, Task] = {}
        self._next_id = 1
        self._lock = threading.RLock()

    def __repr__(self) -> str:
        return f"{type(self).__name__}(tasks={len(self._tasks)})"
