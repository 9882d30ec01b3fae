"""tasklist: Per-user task lists with a read-through, user-scoped cache.

Cache:
    UserTaskCache, SlidingExpiryCache, UNCHANGED

Service:
    TaskService

Protocols (extension points):
    CacheBackend, TaskStore, TokenVerifier

Storage:
    InMemoryTaskStore, JsonFileTaskStore

Identity:
    StaticTokenVerifier

Models & Types:
    Task, TaskCreate, TaskUpdate, CacheHit, CacheMiss, CacheLookup,
    CacheStats, sort_tasks

Configuration:
    Settings, get_settings

Exceptions:
    TaskListError, StorageError, TaskNotFoundError, AuthenticationError,
    ConfigurationError

The HTTP layer lives in :mod:`tasklist.api` and the command line in
:mod:`tasklist.cli`; both need optional extras and are not imported here.
"""

from importlib.metadata import PackageNotFoundError, version

from tasklist.auth import StaticTokenVerifier
from tasklist.cache import UNCHANGED, SlidingExpiryCache, UserTaskCache
from tasklist.config import Settings, get_settings
from tasklist.exceptions import (
    AuthenticationError,
    ConfigurationError,
    StorageError,
    TaskListError,
    TaskNotFoundError,
)
from tasklist.models import (
    CacheHit,
    CacheLookup,
    CacheMiss,
    CacheStats,
    Task,
    TaskCreate,
    TaskUpdate,
    sort_tasks,
)
from tasklist.protocols import CacheBackend, TaskStore, TokenVerifier
from tasklist.service import TaskService
from tasklist.storage import InMemoryTaskStore, JsonFileTaskStore

try:
    __version__ = version("tasklist")
except PackageNotFoundError:
    __version__ = "0.0.0-dev"

__all__ = [
    "UNCHANGED",
    "AuthenticationError",
    "CacheBackend",
    "CacheHit",
    "CacheLookup",
    "CacheMiss",
    "CacheStats",
    "ConfigurationError",
    "InMemoryTaskStore",
    "JsonFileTaskStore",
    "Settings",
    "SlidingExpiryCache",
    "StaticTokenVerifier",
    "StorageError",
    "Task",
    "TaskCreate",
    "TaskListError",
    "TaskNotFoundError",
    "TaskService",
    "TaskStore",
    "TaskUpdate",
    "TokenVerifier",
    "UserTaskCache",
    "__version__",
    "get_settings",
    "sort_tasks",
]
