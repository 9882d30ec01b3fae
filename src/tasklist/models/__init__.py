"""Data models for tasklist."""

from .lookup import CacheHit, CacheLookup, CacheMiss, CacheStats
from .task import TITLE_MAX_LENGTH, Task, TaskCreate, TaskUpdate, sort_tasks

__all__ = [
    "TITLE_MAX_LENGTH",
    "CacheHit",
    "CacheLookup",
    "CacheMiss",
    "CacheStats",
    "Task",
    "TaskCreate",
    "TaskUpdate",
    "sort_tasks",
]
