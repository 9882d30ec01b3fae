"""In-memory cache backend with sliding expiry."""

from __future__ import annotations

import logging
import threading
import time
from collections.abc import Callable
from typing import Any

logger = logging.getLogger(__name__)


class _Unchanged:
    __slots__ = ()

    def __repr__(self) -> str:
        return "UNCHANGED"


UNCHANGED: Any = _Unchanged()
"""Returned from an :meth:`SlidingExpiryCache.update` callback to keep the value."""


class SlidingExpiryCache:
    """Thread-safe in-memory cache whose entries expire after a period of disuse.

    Every successful read or write of a key pushes its deadline to
    ``now + ttl``, so a key that keeps being used never expires while an
    idle one is reclaimed after ``ttl`` seconds.  Expired entries are
    cleaned up lazily on access or explicitly via :meth:`purge_expired`;
    there is no background sweeper.

    A single lock guards the whole map.  Every operation is a dict lookup
    plus whatever the ``update`` callback does, so contention is short.

    Implements the ``CacheBackend`` protocol.

    Parameters:
        ttl: Sliding time-to-live in seconds.  Must be positive.
        clock: Monotonic time source, injectable for tests.
    """

    __slots__ = ("_clock", "_data", "_deadlines", "_lock", "_ttl")

    def __init__(
        self,
        ttl: float = 7200.0,
        *,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        if ttl <= 0:
            raise ValueError(f"ttl must be positive, got {ttl}")
        self._ttl = ttl
        self._clock = clock
        self._data: dict[str, Any] = {}
        self._deadlines: dict[str, float] = {}
        self._lock = threading.Lock()

    @property
    def ttl(self) -> float:
        return self._ttl

    def get(self, key: str) -> Any | None:
        """Retrieve a cached value and extend its lifetime.

        Parameters:
            key: The cache key.

        Returns:
            The cached value, or None if not found / expired.
        """
        with self._lock:
            if not self._live(key):
                return None
            self._touch(key)
            return self._data[key]

    def set(self, key: str, value: Any) -> None:
        """Store a value, replacing any previous one, and reset its lifetime.

        Parameters:
            key: The cache key.
            value: The value to cache.
        """
        with self._lock:
            self._data[key] = value
            self._touch(key)

    def update(self, key: str, fn: Callable[[Any], Any]) -> bool:
        """Atomically replace a live value with ``fn(value)``.

        ``fn`` runs under the cache lock, so no reader can observe the key
        between the read and the write.  It must be quick and must not call
        back into this cache.

        Parameters:
            key: The cache key.
            fn: Receives the current value and returns its replacement, or
                :data:`UNCHANGED` to leave the value as it is.

        Returns:
            True if the key was live (and its lifetime was extended),
            False if it was absent or expired, in which case ``fn`` is
            not called and nothing is stored.
        """
        with self._lock:
            if not self._live(key):
                return False
            new_value = fn(self._data[key])
            if new_value is not UNCHANGED:
                self._data[key] = new_value
            self._touch(key)
            return True

    def invalidate(self, key: str) -> None:
        """Remove a specific key from the cache.

        Parameters:
            key: The cache key to remove.
        """
        with self._lock:
            self._remove(key)

    def purge_expired(self) -> int:
        """Drop every expired entry and return how many were dropped."""
        with self._lock:
            now = self._clock()
            expired = [k for k, deadline in self._deadlines.items() if now >= deadline]
            for key in expired:
                self._remove(key)
        if expired:
            logger.debug("Purged %d expired cache entries", len(expired))
        return len(expired)

    def clear(self) -> None:
        """Remove all entries from the cache."""
        with self._lock:
            self._data.clear()
            self._deadlines.clear()

    def _live(self, key: str) -> bool:
        """Return whether ``key`` holds an unexpired value.  Caller holds the lock."""
        deadline = self._deadlines.get(key)
        if deadline is None:
            return False
        if self._clock() >= deadline:
            # Lazy cleanup of expired entry
            self._remove(key)
            return False
        return True

    def _touch(self, key: str) -> None:
        self._deadlines[key] = self._clock() + self._ttl

    def _remove(self, key: str) -> None:
        """Remove a key from both data and deadlines dicts."""
        self._data.pop(key, None)
        self._deadlines.pop(key, None)

    def __len__(self) -> int:
        with self._lock:
            now = self._clock()
            return sum(1 for deadline in self._deadlines.values() if now < deadline)

    def __repr__(self) -> str:
        return f"SlidingExpiryCache(ttl={self._ttl}, entries={len(self)})"
