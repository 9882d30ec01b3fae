"""Result types for user task cache reads.

A read either hits (the cached list is authoritative, possibly empty) or
misses (nothing is known and the store must be consulted).  Modelling the
two states as distinct types keeps "known empty" and "unknown" apart.
"""

from __future__ import annotations

from typing import Literal, TypeAlias

from pydantic import BaseModel, ConfigDict, Field

from tasklist.models.task import Task


class CacheHit(BaseModel):
    """A cached, authoritative task list for one user."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["hit"] = "hit"
    tasks: tuple[Task, ...] = ()

    def find(self, task_id: int) -> Task | None:
        """Return the cached task with ``task_id``, or ``None``."""
        for task in self.tasks:
            if task.id == task_id:
                return task
        return None


class CacheMiss(BaseModel):
    """No cache entry for the user; consult the store."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["miss"] = "miss"


CacheLookup: TypeAlias = CacheHit | CacheMiss


class CacheStats(BaseModel):
    """Point-in-time counters for a :class:`~tasklist.cache.UserTaskCache`."""

    model_config = ConfigDict(frozen=True)

    hits: int = Field(default=0, ge=0)
    misses: int = Field(default=0, ge=0)
    sets: int = Field(default=0, ge=0)
    invalidations: int = Field(default=0, ge=0)
    entries: int = Field(default=0, ge=0)

    @property
    def hit_rate(self) -> float:
        """Fraction of reads served from cache (0.0 when there were no reads)."""
        total = self.hits + self.misses
        return self.hits / total if total else 0.0
