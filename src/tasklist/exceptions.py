"""Custom exceptions for tasklist."""

from __future__ import annotations

__all__ = [
    "AuthenticationError",
    "ConfigurationError",
    "StorageError",
    "TaskListError",
    "TaskNotFoundError",
]


class TaskListError(Exception):
    """Base exception for all tasklist errors."""


class StorageError(TaskListError):
    """Raised when a task store encounters an error."""


class TaskNotFoundError(TaskListError):
    """Raised when a task does not exist, is deleted, or belongs to another user."""

    def __init__(self, task_id: int) -> None:
        super().__init__(f"Task {task_id} not found")
        self.task_id = task_id


class AuthenticationError(TaskListError):
    """Raised when a bearer credential cannot be resolved to a user."""


class ConfigurationError(TaskListError):
    """Raised when settings cannot be parsed from the environment."""
