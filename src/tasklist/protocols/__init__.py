"""Protocol definitions for tasklist's pluggable architecture."""

from .cache import CacheBackend
from .identity import TokenVerifier
from .storage import TaskStore

__all__ = [
    "CacheBackend",
    "TaskStore",
    "TokenVerifier",
]
