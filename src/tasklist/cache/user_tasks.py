"""Read-through cache of each user's active task list."""

from __future__ import annotations

import logging
import threading
from collections.abc import Iterable

from tasklist.cache.backend import UNCHANGED, SlidingExpiryCache
from tasklist.config import get_settings
from tasklist.models.lookup import CacheHit, CacheLookup, CacheMiss, CacheStats
from tasklist.models.task import Task
from tasklist.protocols.cache import CacheBackend

logger = logging.getLogger(__name__)

TaskTuple = tuple[Task, ...]


def _without(tasks: TaskTuple, task_id: int) -> TaskTuple:
    return tuple(t for t in tasks if t.id != task_id)


def _contains(tasks: TaskTuple, task_id: int) -> bool:
    return any(t.id == task_id for t in tasks)


class UserTaskCache:
    """Per-user mirror of the non-deleted task list held by the store.

    Entry lifecycle:

    * ``set`` is the only way an entry comes into existence.
    * ``add_task`` / ``update_task`` / ``remove_task`` patch an existing
      entry after a successful store write, and silently do nothing when
      the user has no entry (a partial list would be worse than none).
    * ``invalidate`` or the backend's sliding expiry destroy it.

    Lists are stored as tuples of frozen :class:`Task` objects, so nothing a
    caller does to a returned value can change what the cache holds.  Every
    patch is applied through :meth:`CacheBackend.update`, which makes the
    read-modify-write atomic with respect to concurrent ``get`` calls.

    The cache never raises for cache-state reasons; anything unexpected
    degrades to a miss or a no-op.  Two concurrent requests for the same
    user may apply their patches in a different order than their store
    writes landed; callers needing strict consistency should call
    :meth:`invalidate` instead of the incremental mutators.

    Parameters:
        backend: Keyed store to hold the lists.  Defaults to a
            :class:`SlidingExpiryCache` with ``ttl``.
        ttl: Sliding expiry in seconds for the default backend.  Defaults
            to ``Settings.cache_ttl_seconds``.  Ignored when ``backend`` is given.
    """

    __slots__ = ("_backend", "_hits", "_invalidations", "_misses", "_sets", "_stats_lock")

    def __init__(self, backend: CacheBackend | None = None, *, ttl: float | None = None) -> None:
        if backend is None:
            backend = SlidingExpiryCache(ttl if ttl is not None else get_settings().cache_ttl_seconds)
        self._backend = backend
        self._stats_lock = threading.Lock()
        self._hits = 0
        self._misses = 0
        self._sets = 0
        self._invalidations = 0

    @staticmethod
    def cache_key(user_id: int) -> str:
        return f"user_tasks_{user_id}"

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    def get(self, user_id: int) -> CacheLookup:
        """Return the user's cached list as a :class:`CacheHit`, or :class:`CacheMiss`."""
        tasks: TaskTuple | None = self._backend.get(self.cache_key(user_id))
        with self._stats_lock:
            if tasks is None:
                self._misses += 1
            else:
                self._hits += 1
        if tasks is None:
            logger.debug("Task cache miss for user %s", user_id)
            return CacheMiss()
        logger.debug("Task cache hit for user %s (%d tasks)", user_id, len(tasks))
        return CacheHit(tasks=tasks)

    # ------------------------------------------------------------------
    # Writes
    # ------------------------------------------------------------------

    def set(self, user_id: int, tasks: Iterable[Task]) -> None:
        """Replace (or create) the user's entry with exactly ``tasks``.

        Tasks owned by someone else or flagged deleted are dropped with a
        warning.  If an id repeats, the last occurrence wins.
        """
        by_id: dict[int, Task] = {}
        for task in tasks:
            if not self._accepts(user_id, task, "set"):
                continue
            by_id.pop(task.id, None)
            by_id[task.id] = task
        self._backend.set(self.cache_key(user_id), tuple(by_id.values()))
        with self._stats_lock:
            self._sets += 1
        logger.debug("Cached %d tasks for user %s", len(by_id), user_id)

    def add_task(self, user_id: int, task: Task) -> bool:
        """Append ``task`` to the user's entry if one exists.

        Returns:
            True if the entry existed and was patched.
        """
        if not self._accepts(user_id, task, "add"):
            return False

        def _add(tasks: TaskTuple) -> TaskTuple:
            return (*_without(tasks, task.id), task)

        applied = self._backend.update(self.cache_key(user_id), _add)
        logger.debug("add_task user=%s task=%s applied=%s", user_id, task.id, applied)
        return applied

    def update_task(self, user_id: int, task: Task) -> bool:
        """Replace the cached task that has ``task.id``.

        The replacement is appended, so its position may change.  A task
        not already in the entry is not inserted.  An update that marks the
        task deleted removes it, since the cache only holds active tasks.

        Returns:
            True if a cached task was replaced (or removed).
        """
        if task.owner_id != user_id:
            self._reject(user_id, task, "update")
            return False
        replaced = False

        def _update(tasks: TaskTuple) -> TaskTuple:
            nonlocal replaced
            if not _contains(tasks, task.id):
                return UNCHANGED
            replaced = True
            remaining = _without(tasks, task.id)
            return remaining if task.is_deleted else (*remaining, task)

        self._backend.update(self.cache_key(user_id), _update)
        logger.debug("update_task user=%s task=%s applied=%s", user_id, task.id, replaced)
        return replaced

    def remove_task(self, user_id: int, task_id: int) -> bool:
        """Drop the task with ``task_id`` from the user's entry.

        Returns:
            True if the task was cached and has been removed.
        """
        removed = False

        def _remove(tasks: TaskTuple) -> TaskTuple:
            nonlocal removed
            if not _contains(tasks, task_id):
                return UNCHANGED
            removed = True
            return _without(tasks, task_id)

        self._backend.update(self.cache_key(user_id), _remove)
        logger.debug("remove_task user=%s task=%s applied=%s", user_id, task_id, removed)
        return removed

    def invalidate(self, user_id: int) -> None:
        """Forget the user's entry, whether or not one exists."""
        self._backend.invalidate(self.cache_key(user_id))
        with self._stats_lock:
            self._invalidations += 1
        logger.debug("Invalidated task cache for user %s", user_id)

    def clear(self) -> None:
        """Forget every user's entry."""
        self._backend.clear()

    # ------------------------------------------------------------------
    # Introspection
    # ------------------------------------------------------------------

    def stats(self) -> CacheStats:
        """Return a snapshot of read/write counters and the live entry count."""
        entries = len(self._backend)
        with self._stats_lock:
            return CacheStats(
                hits=self._hits,
                misses=self._misses,
                sets=self._sets,
                invalidations=self._invalidations,
                entries=entries,
            )

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _accepts(self, user_id: int, task: Task, operation: str) -> bool:
        if task.owner_id != user_id or task.is_deleted:
            self._reject(user_id, task, operation)
            return False
        return True

    @staticmethod
    def _reject(user_id: int, task: Task, operation: str) -> None:
        logger.warning(
            "Ignoring %s of task %s for user %s (owner=%s, deleted=%s)",
            operation,
            task.id,
            user_id,
            task.owner_id,
            task.is_deleted,
        )

    def __repr__(self) -> str:
        return f"{type(self).__name__}(backend={self._backend!r})"
