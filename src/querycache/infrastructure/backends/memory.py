"""In-memory cache backend implementation."""

import time
from collections.abc import Callable
from datetime import timedelta

from cachetools import TLRUCache  # type: ignore[import-untyped]


class InMemoryCacheBackend:
    """In-memory cache backend using LRU with per-item TTL.

    Suitable for single-process deployments and tests. Uses cachetools
    for LRU eviction and per-item expiration; each instance is its own
    namespace.
    """

    def __init__(
        self,
        maxsize: int = 1000,
        default_ttl: float = 1800.0,
        timer: Callable[[], float] = time.monotonic,
    ) -> None:
        """Initialize the in-memory cache backend.

        Args:
            maxsize: Maximum number of items in the cache.
            default_ttl: Default TTL in seconds for items.
            timer: Clock used for expiration.
        """
        self._maxsize = maxsize
        self._default_ttl = default_ttl
        # Values are stored as (payload, ttl_seconds) so expiry is per item
        self._cache: TLRUCache[str, tuple[bytes, float]] = TLRUCache(
            maxsize=maxsize,
            ttu=self._time_to_use,
            timer=timer,
        )

    @staticmethod
    def _time_to_use(_key: str, value: tuple[bytes, float], now: float) -> float:
        return now + value[1]

    async def get(self, key: str) -> bytes | None:
        """Retrieve cached value by key.

        Args:
            key: The cache key to retrieve.

        Returns:
            The cached value as bytes, or None if not found or expired.
        """
        entry = self._cache.get(key)
        if entry is None:
            return None
        payload = entry[0]
        return payload if isinstance(payload, bytes) else None

    async def set(
        self,
        key: str,
        value: bytes,
        ttl: timedelta | None = None,
    ) -> None:
        """Store value with optional TTL.

        Args:
            key: The cache key.
            value: The value to store as bytes.
            ttl: Optional time-to-live. If None, uses default.
        """
        seconds = ttl.total_seconds() if ttl is not None else self._default_ttl
        self._cache[key] = (value, seconds)

    async def delete(self, key: str) -> bool:
        """Delete cached value.

        Args:
            key: The cache key to delete.

        Returns:
            True if the key existed and was deleted, False otherwise.
        """
        try:
            del self._cache[key]
            return True
        except KeyError:
            return False

    async def exists(self, key: str) -> bool:
        """Check if key exists in cache.

        Args:
            key: The cache key to check.

        Returns:
            True if the key exists, False otherwise.
        """
        return key in self._cache

    async def clear(self) -> None:
        """Clear all cached values."""
        self._cache.clear()

    async def flush(self) -> None:
        """Alias of clear() so the backend can act as an auxiliary cache."""
        self._cache.clear()

    def __len__(self) -> int:
        """Return the number of items in the cache."""
        return len(self._cache)

    @property
    def maxsize(self) -> int:
        """Return the maximum size of the cache."""
        return self._maxsize
