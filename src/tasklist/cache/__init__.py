"""Caching layer that sits in front of the task store."""

from .backend import UNCHANGED, SlidingExpiryCache
from .user_tasks import UserTaskCache

__all__ = [
    "UNCHANGED",
    "SlidingExpiryCache",
    "UserTaskCache",
]
