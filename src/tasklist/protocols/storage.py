"""Storage protocol definitions.

Task stores implement this protocol using structural subtyping (PEP 544).
Users can provide any object that matches the interface -- no inheritance required.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from tasklist.models.task import Task


@runtime_checkable
class TaskStore(Protocol):
    """Authoritative record store for tasks.

    Deletion is soft: a deleted task keeps its row with ``is_deleted=True``
    and is still returned by ``get``.
    """

    def add(self, owner_id: int, title: str) -> Task:
        """Create a new, incomplete task owned by ``owner_id``.

        Parameters:
            owner_id: The id of the user who owns the task.
            title: The already-validated task title.

        Returns:
            The stored ``Task`` with its store-assigned ``id`` and
            ``created_at`` populated.
        """
        ...

    def get(self, task_id: int) -> Task | None:
        """Retrieve a task by id, including soft-deleted ones.

        Parameters:
            task_id: The store-assigned task id.

        Returns:
            The matching ``Task``, or ``None`` if no row has that id.
        """
        ...

    def list_for_owner(self, owner_id: int, *, include_deleted: bool = False) -> list[Task]:
        """Return every task owned by ``owner_id``.

        Parameters:
            owner_id: The user whose tasks to list.
            include_deleted: Whether soft-deleted tasks are included.

        Returns:
            The matching tasks in insertion order.  Returns an empty list
            when the user has none.
        """
        ...

    def save(self, task: Task) -> None:
        """Overwrite the stored row that has ``task.id``.

        Parameters:
            task: The new state of an existing task.

        Raises:
            TaskNotFoundError: If no row has ``task.id``.
        """
        ...

    def clear(self) -> None:
        """Remove all tasks from the store.

        Side Effects:
            The store is left empty.  This operation is irreversible.
        """
        ...
