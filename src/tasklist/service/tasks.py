"""Task service: read-through listing and write-then-patch mutations.

Every read asks the :class:`~tasklist.cache.UserTaskCache` first and only
falls back to the store on a miss.  Every write goes to the store first
and, once it has succeeded, patches the cache with the single-item
mutator that matches the write.
"""

from __future__ import annotations

import logging
from datetime import UTC, datetime

from tasklist.cache.user_tasks import UserTaskCache
from tasklist.exceptions import TaskNotFoundError
from tasklist.models.lookup import CacheHit
from tasklist.models.task import Task, TaskCreate, TaskUpdate, sort_tasks
from tasklist.protocols.storage import TaskStore

logger = logging.getLogger(__name__)


class TaskService:
    """User-scoped task operations over a store and its cache.

    ``user_id`` is always the caller's verified identity.  It is used both
    as the cache key and as the store's owner filter; a task owned by
    someone else is reported as not found rather than forbidden.

    Parameters:
        store: The authoritative task store.
        cache: The user task cache.  Defaults to a fresh
            :class:`UserTaskCache` using the configured TTL.
    """

    __slots__ = ("_cache", "_store")

    def __init__(self, store: TaskStore, cache: UserTaskCache | None = None) -> None:
        self._store = store
        self._cache = cache if cache is not None else UserTaskCache()

    @property
    def store(self) -> TaskStore:
        return self._store

    @property
    def cache(self) -> UserTaskCache:
        return self._cache

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    def list_tasks(self, user_id: int) -> list[Task]:
        """Return the user's active tasks, incomplete first, newest first."""
        lookup = self._cache.get(user_id)
        if isinstance(lookup, CacheHit):
            return sort_tasks(lookup.tasks)

        tasks = [
            t
            for t in self._store.list_for_owner(user_id)
            if t.owner_id == user_id and not t.is_deleted
        ]
        self._cache.set(user_id, tasks)
        logger.debug("Loaded %d tasks for user %s from store", len(tasks), user_id)
        return sort_tasks(tasks)

    def get_task(self, user_id: int, task_id: int) -> Task:
        """Return one of the user's active tasks.

        Raises:
            TaskNotFoundError: If the task is missing, deleted, or not the user's.
        """
        lookup = self._cache.get(user_id)
        if isinstance(lookup, CacheHit):
            cached = lookup.find(task_id)
            if cached is not None:
                return cached

        task = self._load_owned(user_id, task_id)
        if isinstance(lookup, CacheHit):
            # The list is cached but lacked this task; fill the gap.
            self._cache.add_task(user_id, task)
        return task

    # ------------------------------------------------------------------
    # Writes
    # ------------------------------------------------------------------

    def create_task(self, user_id: int, request: TaskCreate) -> Task:
        """Create a task in the store, then append it to the cached list."""
        task = self._store.add(user_id, request.title)
        self._cache.add_task(user_id, task)
        logger.info("User %s created task %s", user_id, task.id)
        return task

    def update_task(self, user_id: int, task_id: int, request: TaskUpdate) -> Task:
        """Apply a partial update in the store, then patch the cached copy.

        Raises:
            TaskNotFoundError: If the task is missing, deleted, or not the user's.
        """
        task = self._load_owned(user_id, task_id)
        updated = task.model_copy(
            update={
                **request.changes(),
                "modified_by": user_id,
                "modified_at": datetime.now(UTC),
            }
        )
        self._store.save(updated)
        self._cache.update_task(user_id, updated)
        logger.info("User %s updated task %s", user_id, task_id)
        return updated

    def delete_task(self, user_id: int, task_id: int) -> None:
        """Soft-delete a task in the store, then drop it from the cached list.

        Raises:
            TaskNotFoundError: If the task is missing, deleted, or not the user's.
        """
        task = self._load_owned(user_id, task_id)
        deleted = task.model_copy(
            update={
                "is_deleted": True,
                "modified_by": user_id,
                "modified_at": datetime.now(UTC),
            }
        )
        self._store.save(deleted)
        self._cache.remove_task(user_id, task_id)
        logger.info("User %s deleted task %s", user_id, task_id)

    def refresh(self, user_id: int) -> list[Task]:
        """Drop the user's cache entry and reload it from the store."""
        self._cache.invalidate(user_id)
        return self.list_tasks(user_id)

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _load_owned(self, user_id: int, task_id: int) -> Task:
        task = self._store.get(task_id)
        if task is None or task.is_deleted or task.owner_id != user_id:
            raise TaskNotFoundError(task_id)
        return task

    def __repr__(self) -> str:
        return f"{type(self).__name__}(store={self._store!r}, cache={self._cache!r})"
