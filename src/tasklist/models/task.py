"""Task models shared by the store, the cache, and the service layer."""

from __future__ import annotations

from collections.abc import Iterable
from datetime import UTC, datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator

TITLE_MAX_LENGTH = 200


def _clean_title(value: str) -> str:
    value = value.strip()
    if not value:
        raise ValueError("title must not be blank")
    if len(value) > TITLE_MAX_LENGTH:
        raise ValueError(f"title must be at most {TITLE_MAX_LENGTH} characters")
    return value


class Task(BaseModel):
    """A titled, completable, softly-deletable unit of work owned by one user.

    Tasks are immutable: every change produces a new instance via
    ``model_copy(update=...)``.  The cache holds the same objects the store
    hands out, so immutability is what keeps a cached list from being
    altered behind the cache's back.
    """

    model_config = ConfigDict(frozen=True)

    id: int
    title: str
    is_complete: bool = False
    owner_id: int
    is_deleted: bool = False
    created_at: datetime = Field(default_factory=lambda: datetime.now(UTC))
    modified_by: int | None = None
    modified_at: datetime | None = None


class TaskCreate(BaseModel):
    """Request body for creating a task."""

    title: str

    @field_validator("title")
    @classmethod
    def _validate_title(cls, value: str) -> str:
        return _clean_title(value)


class TaskUpdate(BaseModel):
    """Partial update; ``None`` leaves the field unchanged."""

    title: str | None = None
    is_complete: bool | None = None

    @field_validator("title")
    @classmethod
    def _validate_title(cls, value: str | None) -> str | None:
        if value is None:
            return None
        return _clean_title(value)

    def changes(self) -> dict[str, object]:
        """Return only the fields that were explicitly set to a value."""
        return self.model_dump(exclude_none=True)


def sort_tasks(tasks: Iterable[Task]) -> list[Task]:
    """Order tasks incomplete-first, then newest-first within each group."""
    by_newest = sorted(tasks, key=lambda t: t.created_at, reverse=True)
    return sorted(by_newest, key=lambda t: t.is_complete)
