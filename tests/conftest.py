"""Shared fixtures for tasklist tests."""

from __future__ import annotations

from datetime import UTC, datetime, timedelta

import pytest

from tasklist.cache.backend import SlidingExpiryCache
from tasklist.cache.user_tasks import UserTaskCache
from tasklist.models.task import Task
from tasklist.service.tasks import TaskService
from tasklist.storage.memory_store import InMemoryTaskStore

_EPOCH = datetime(2025, 1, 1, tzinfo=UTC)


def make_task(
    task_id: int,
    owner_id: int = 1,
    title: str | None = None,
    *,
    is_complete: bool = False,
    is_deleted: bool = False,
    age_minutes: int = 0,
) -> Task:
    """Build a Task with deterministic timestamps.

    ``age_minutes`` moves ``created_at`` into the past, so larger values
    sort later in newest-first order.
    """
    return Task(
        id=task_id,
        title=title if title is not None else f"Task {task_id}",
        is_complete=is_complete,
        owner_id=owner_id,
        is_deleted=is_deleted,
        created_at=_EPOCH - timedelta(minutes=age_minutes),
    )


class FakeClock:
    """Manually advanced monotonic clock for expiry tests."""

    def __init__(self, start: float = 1000.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class CountingTaskStore(InMemoryTaskStore):
    """In-memory store that counts reads, to prove cache hits skip the store."""

    def __init__(self) -> None:
        super().__init__()
        self.list_calls = 0
        self.get_calls = 0

    def list_for_owner(self, owner_id: int, *, include_deleted: bool = False) -> list[Task]:
        self.list_calls += 1
        return super().list_for_owner(owner_id, include_deleted=include_deleted)

    def get(self, task_id: int) -> Task | None:
        self.get_calls += 1
        return super().get(task_id)


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def backend(clock: FakeClock) -> SlidingExpiryCache:
    return SlidingExpiryCache(ttl=60.0, clock=clock)


@pytest.fixture
def cache(backend: SlidingExpiryCache) -> UserTaskCache:
    return UserTaskCache(backend)


@pytest.fixture
def store() -> CountingTaskStore:
    return CountingTaskStore()


@pytest.fixture
def service(store: CountingTaskStore, cache: UserTaskCache) -> TaskService:
    return TaskService(store, cache)
