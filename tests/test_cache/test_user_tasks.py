"""Tests for UserTaskCache."""

from __future__ import annotations

import logging

import pytest

from tasklist.cache.backend import UNCHANGED, SlidingExpiryCache
from tasklist.cache.user_tasks import UserTaskCache
from tasklist.models.lookup import CacheHit, CacheMiss
from tasklist.protocols.cache import CacheBackend
from tests.conftest import FakeClock, make_task


def _ids(lookup: CacheHit | CacheMiss) -> list[int]:
    assert isinstance(lookup, CacheHit)
    return [t.id for t in lookup.tasks]


class TestGetAndSet:
    def test_never_touched_user_is_a_miss(self, cache: UserTaskCache) -> None:
        assert isinstance(cache.get(42), CacheMiss)

    def test_empty_list_is_a_hit(self, cache: UserTaskCache) -> None:
        cache.set(1, [])
        lookup = cache.get(1)
        assert isinstance(lookup, CacheHit)
        assert lookup.tasks == ()

    def test_set_then_get_round_trip(self, cache: UserTaskCache) -> None:
        tasks = [make_task(1, title="Test Todo 1"), make_task(2, title="Test Todo 2")]
        cache.set(1, tasks)
        lookup = cache.get(1)
        assert isinstance(lookup, CacheHit)
        assert list(lookup.tasks) == tasks

    def test_set_is_idempotent(self, cache: UserTaskCache) -> None:
        tasks = [make_task(1), make_task(2)]
        cache.set(1, tasks)
        cache.set(1, tasks)
        assert _ids(cache.get(1)) == [1, 2]

    def test_set_replaces_previous_entry(self, cache: UserTaskCache) -> None:
        cache.set(1, [make_task(1), make_task(2)])
        cache.set(1, [make_task(3)])
        assert _ids(cache.get(1)) == [3]

    def test_set_keeps_last_duplicate(self, cache: UserTaskCache) -> None:
        cache.set(1, [make_task(1, title="old"), make_task(2), make_task(1, title="new")])
        lookup = cache.get(1)
        assert isinstance(lookup, CacheHit)
        assert [(t.id, t.title) for t in lookup.tasks] == [(2, "Task 2"), (1, "new")]

    def test_set_drops_foreign_and_deleted_tasks(
        self, cache: UserTaskCache, caplog: pytest.LogCaptureFixture
    ) -> None:
        with caplog.at_level(logging.WARNING, logger="tasklist.cache.user_tasks"):
            cache.set(1, [make_task(1), make_task(2, owner_id=2), make_task(3, is_deleted=True)])
        assert _ids(cache.get(1)) == [1]
        assert len(caplog.records) == 2

    def test_caller_list_mutation_does_not_leak(self, cache: UserTaskCache) -> None:
        tasks = [make_task(1)]
        cache.set(1, tasks)
        tasks.append(make_task(2))
        assert _ids(cache.get(1)) == [1]

    def test_isolation_between_users(self, cache: UserTaskCache) -> None:
        cache.set(2, [make_task(20, owner_id=2)])
        cache.set(1, [make_task(10, owner_id=1), make_task(11, owner_id=1)])
        assert _ids(cache.get(1)) == [10, 11]
        assert _ids(cache.get(2)) == [20]

    def test_cache_key_format(self) -> None:
        assert UserTaskCache.cache_key(7) == "user_tasks_7"


class TestAddTask:
    def test_add_without_entry_is_noop(self, cache: UserTaskCache) -> None:
        assert cache.add_task(1, make_task(1)) is False
        assert isinstance(cache.get(1), CacheMiss)

    def test_add_appends_to_entry(self, cache: UserTaskCache) -> None:
        cache.set(1, [make_task(1)])
        assert cache.add_task(1, make_task(2)) is True
        assert _ids(cache.get(1)) == [1, 2]

    def test_add_to_empty_entry(self, cache: UserTaskCache) -> None:
        cache.set(1, [])
        cache.add_task(1, make_task(5))
        assert _ids(cache.get(1)) == [5]

    def test_add_existing_id_does_not_duplicate(self, cache: UserTaskCache) -> None:
        cache.set(1, [make_task(1, title="a")])
        cache.add_task(1, make_task(1, title="b"))
        lookup = cache.get(1)
        assert isinstance(lookup, CacheHit)
        assert [t.title for t in lookup.tasks] == ["b"]

    def test_add_foreign_task_is_ignored(self, cache: UserTaskCache) -> None:
        cache.set(1, [make_task(1)])
        assert cache.add_task(1, make_task(2, owner_id=2)) is False
        assert _ids(cache.get(1)) == [1]

    def test_add_deleted_task_is_ignored(self, cache: UserTaskCache) -> None:
        cache.set(1, [make_task(1)])
        assert cache.add_task(1, make_task(2, is_deleted=True)) is False
        assert _ids(cache.get(1)) == [1]


class TestUpdateTask:
    def test_update_replaces_by_id(self, cache: UserTaskCache) -> None:
        cache.set(1, [make_task(1, title="x")])
        assert cache.update_task(1, make_task(1, title="y", is_complete=True)) is True
        lookup = cache.get(1)
        assert isinstance(lookup, CacheHit)
        assert len(lookup.tasks) == 1
        assert lookup.tasks[0].title == "y"
        assert lookup.tasks[0].is_complete is True

    def test_update_moves_task_to_end(self, cache: UserTaskCache) -> None:
        cache.set(1, [make_task(1), make_task(2), make_task(3)])
        cache.update_task(1, make_task(1, title="changed"))
        assert _ids(cache.get(1)) == [2, 3, 1]

    def test_update_missing_id_is_noop(self, cache: UserTaskCache) -> None:
        cache.set(1, [make_task(1, title="Existing Todo")])
        assert cache.update_task(1, make_task(99, title="z")) is False
        lookup = cache.get(1)
        assert isinstance(lookup, CacheHit)
        assert [(t.id, t.title) for t in lookup.tasks] == [(1, "Existing Todo")]

    def test_update_without_entry_is_noop(self, cache: UserTaskCache) -> None:
        assert cache.update_task(1, make_task(1)) is False
        assert isinstance(cache.get(1), CacheMiss)

    def test_update_to_deleted_removes_task(self, cache: UserTaskCache) -> None:
        cache.set(1, [make_task(1), make_task(2)])
        assert cache.update_task(1, make_task(1, is_deleted=True)) is True
        assert _ids(cache.get(1)) == [2]

    def test_update_foreign_task_is_ignored(self, cache: UserTaskCache) -> None:
        cache.set(1, [make_task(1, title="mine")])
        assert cache.update_task(1, make_task(1, owner_id=2, title="Hacked")) is False
        lookup = cache.get(1)
        assert isinstance(lookup, CacheHit)
        assert lookup.tasks[0].title == "mine"


class TestRemoveTask:
    def test_remove_drops_exactly_one(self, cache: UserTaskCache) -> None:
        cache.set(1, [make_task(1), make_task(2)])
        assert cache.remove_task(1, 1) is True
        assert _ids(cache.get(1)) == [2]

    def test_remove_missing_id_is_noop(self, cache: UserTaskCache) -> None:
        cache.set(1, [make_task(1)])
        assert cache.remove_task(1, 99) is False
        assert _ids(cache.get(1)) == [1]

    def test_remove_without_entry_is_noop(self, cache: UserTaskCache) -> None:
        assert cache.remove_task(1, 1) is False
        assert isinstance(cache.get(1), CacheMiss)

    def test_remove_last_task_leaves_empty_hit(self, cache: UserTaskCache) -> None:
        cache.set(1, [make_task(1)])
        cache.remove_task(1, 1)
        lookup = cache.get(1)
        assert isinstance(lookup, CacheHit)
        assert lookup.tasks == ()


class TestInvalidate:
    def test_invalidate_after_set(self, cache: UserTaskCache) -> None:
        cache.set(1, [make_task(1)])
        cache.invalidate(1)
        assert isinstance(cache.get(1), CacheMiss)

    def test_invalidate_never_set(self, cache: UserTaskCache) -> None:
        cache.invalidate(1)
        assert isinstance(cache.get(1), CacheMiss)

    def test_invalidate_only_affects_one_user(self, cache: UserTaskCache) -> None:
        cache.set(1, [make_task(1)])
        cache.set(2, [make_task(2, owner_id=2)])
        cache.invalidate(1)
        assert isinstance(cache.get(1), CacheMiss)
        assert _ids(cache.get(2)) == [2]

    def test_clear_forgets_everyone(self, cache: UserTaskCache) -> None:
        cache.set(1, [])
        cache.set(2, [])
        cache.clear()
        assert isinstance(cache.get(1), CacheMiss)
        assert isinstance(cache.get(2), CacheMiss)


class TestExpiry:
    def test_idle_entry_expires(self, cache: UserTaskCache, clock: FakeClock) -> None:
        cache.set(1, [make_task(1)])
        clock.advance(61.0)
        assert isinstance(cache.get(1), CacheMiss)

    def test_active_entry_does_not_expire(self, cache: UserTaskCache, clock: FakeClock) -> None:
        cache.set(1, [make_task(1)])
        for _ in range(10):
            clock.advance(50.0)
            assert isinstance(cache.get(1), CacheHit)

    def test_mutation_slides_expiry(self, cache: UserTaskCache, clock: FakeClock) -> None:
        cache.set(1, [make_task(1)])
        clock.advance(50.0)
        cache.add_task(1, make_task(2))
        clock.advance(50.0)
        assert _ids(cache.get(1)) == [1, 2]

    def test_mutator_does_not_revive_expired_entry(
        self, cache: UserTaskCache, clock: FakeClock
    ) -> None:
        cache.set(1, [make_task(1)])
        clock.advance(61.0)
        assert cache.add_task(1, make_task(2)) is False
        assert isinstance(cache.get(1), CacheMiss)

    def test_default_backend_uses_ttl_argument(self) -> None:
        cache = UserTaskCache(ttl=5.0)
        assert isinstance(cache._backend, SlidingExpiryCache)
        assert cache._backend.ttl == 5.0

    def test_default_backend_uses_settings_ttl(self) -> None:
        cache = UserTaskCache()
        assert isinstance(cache._backend, SlidingExpiryCache)
        assert cache._backend.ttl == 7200.0


class TestStats:
    def test_counts_hits_misses_and_writes(self, cache: UserTaskCache) -> None:
        cache.get(1)
        cache.set(1, [make_task(1)])
        cache.get(1)
        cache.get(1)
        cache.invalidate(1)
        stats = cache.stats()
        assert stats.misses == 1
        assert stats.hits == 2
        assert stats.sets == 1
        assert stats.invalidations == 1
        assert stats.entries == 0
        assert stats.hit_rate == pytest.approx(2 / 3)

    def test_entries_counts_live_users(self, cache: UserTaskCache) -> None:
        cache.set(1, [])
        cache.set(2, [])
        assert cache.stats().entries == 2

    def test_hit_rate_without_reads(self, cache: UserTaskCache) -> None:
        assert cache.stats().hit_rate == 0.0

    def test_repr(self, cache: UserTaskCache) -> None:
        assert "UserTaskCache" in repr(cache)

    def test_entries_from_custom_backend(self) -> None:
        class DictBackend:
            """Structural CacheBackend without expiry."""

            def __init__(self) -> None:
                self.data: dict[str, object] = {}

            def get(self, key: str) -> object | None:
                return self.data.get(key)

            def set(self, key: str, value: object) -> None:
                self.data[key] = value

            def update(self, key: str, fn) -> bool:
                if key not in self.data:
                    return False
                result = fn(self.data[key])
                if result is not UNCHANGED:
                    self.data[key] = result
                return True

            def invalidate(self, key: str) -> None:
                self.data.pop(key, None)

            def clear(self) -> None:
                self.data.clear()

            def __len__(self) -> int:
                return len(self.data)

        backend = DictBackend()
        assert isinstance(backend, CacheBackend)
        cache = UserTaskCache(backend)
        cache.set(1, [make_task(1)])
        cache.set(2, [])
        assert cache.add_task(1, make_task(2)) is True
        assert cache.stats().entries == 2
