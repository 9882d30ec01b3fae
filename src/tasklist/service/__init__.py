"""Service layer orchestrating the task store and the user task cache."""

from .tasks import TaskService

__all__ = [
    "TaskService",
]
