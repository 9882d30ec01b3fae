"""Protocol definition for cache backends."""

from __future__ import annotations

from collections.abc import Callable
from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class CacheBackend(Protocol):
    """Keyed store with sliding expiry used by the user task cache.

    Implementations must make every method atomic with respect to the
    others; in particular ``update`` must not let a concurrent ``get``
    observe the key between its read and its write.
    """

    def get(self, key: str) -> Any | None:
        """Retrieve a cached value, or None if not found / expired.

        A hit extends the entry's lifetime.

        Parameters:
            key: The cache key.

        Returns:
            The cached value, or None.
        """
        ...

    def set(self, key: str, value: Any) -> None:
        """Store a value in the cache and reset its lifetime.

        Parameters:
            key: The cache key.
            value: The value to cache.
        """
        ...

    def update(self, key: str, fn: Callable[[Any], Any]) -> bool:
        """Atomically replace a live value with ``fn(value)``.

        Parameters:
            key: The cache key.
            fn: Maps the current value to its replacement.

        Returns:
            True if the key was live and ``fn`` was applied, False otherwise.
        """
        ...

    def invalidate(self, key: str) -> None:
        """Remove a specific key from the cache.

        Parameters:
            key: The cache key to remove.
        """
        ...

    def clear(self) -> None:
        """Remove all entries from the cache."""
        ...

    def __len__(self) -> int:
        """Return the number of live entries."""
        ...
