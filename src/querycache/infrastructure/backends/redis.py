"""Redis cache backend implementation."""

from datetime import timedelta
from typing import Optional

import redis.asyncio as redis
from redis.exceptions import RedisError

from querycache.core.exceptions import CacheUnavailableError


class RedisCacheBackend:
    """Redis cache backend for distributed deployments.

    Supports per-key TTL and is suitable for multi-process and
    distributed deployments. All keys are stored under ``namespace``.
    Driver errors are raised as CacheUnavailableError.
    """

    def __init__(
        self,
        redis_url: str = "redis://localhost:6379",
        namespace: str = "querycache",
        default_ttl: Optional[int] = 1800,
        client: Optional[redis.Redis] = None,
    ) -> None:
        """Initialize the Redis cache backend.

        Args:
            redis_url: Redis connection URL.
            namespace: Prefix for all cache keys.
            default_ttl: Default TTL in seconds.
            client: An existing client to use instead of connecting to
                ``redis_url``.
        """
        self._redis: redis.Redis = client or redis.from_url(redis_url)  # type: ignore
        self._namespace = namespace
        self._default_ttl = default_ttl

    async def get(self, key: str) -> Optional[bytes]:
        """Retrieve cached value by key.

        Args:
            key: The cache key to retrieve.

        Returns:
            The cached value as bytes, or None if not found or expired.
        """
        try:
            return await self._redis.get(self._namespaced_key(key))
        except RedisError as e:
            raise CacheUnavailableError(f"Redis GET failed: {e}") from e

    async def set(
        self,
        key: str,
        value: bytes,
        ttl: Optional[timedelta] = None,
    ) -> None:
        """Store value with optional TTL.

        Args:
            key: The cache key.
            value: The value to store as bytes.
            ttl: Optional time-to-live. If None, uses default.
        """
        namespaced_key = self._namespaced_key(key)

        try:
            if ttl is not None:
                await self._redis.setex(namespaced_key, int(ttl.total_seconds()), value)
            elif self._default_ttl is not None:
                await self._redis.setex(namespaced_key, self._default_ttl, value)
            else:
                await self._redis.set(namespaced_key, value)
        except RedisError as e:
            raise CacheUnavailableError(f"Redis SET failed: {e}") from e

    async def delete(self, key: str) -> bool:
        """Delete cached value.

        Args:
            key: The cache key to delete.

        Returns:
            True if the key existed and was deleted, False otherwise.
        """
        try:
            result = await self._redis.delete(self._namespaced_key(key))
        except RedisError as e:
            raise CacheUnavailableError(f"Redis DEL failed: {e}") from e
        return result > 0

    async def exists(self, key: str) -> bool:
        """Check if key exists in cache.

        Args:
            key: The cache key to check.

        Returns:
            True if the key exists, False otherwise.
        """
        try:
            result = await self._redis.exists(self._namespaced_key(key))
        except RedisError as e:
            raise CacheUnavailableError(f"Redis EXISTS failed: {e}") from e
        return result > 0

    async def clear(self) -> None:
        """Clear all cached values in our namespace.

        Note: This only clears keys with our prefix, not the entire Redis DB.
        Uses SCAN instead of KEYS for production safety.
        """
        cursor = 0
        pattern = f"{self._namespace}:*"

        try:
            while True:
                cursor, keys = await self._redis.scan(cursor, match=pattern, count=100)

                if keys:
                    await self._redis.delete(*keys)

                if cursor == 0:
                    break
        except RedisError as e:
            raise CacheUnavailableError(f"Redis SCAN/DEL failed: {e}") from e

    def _namespaced_key(self, key: str) -> str:
        """Add the namespace to key if not already present.

        Args:
            key: The cache key.

        Returns:
            The key with namespace prefix.
        """
        if key.startswith(f"{self._namespace}:"):
            return key
        return f"{self._namespace}:{key}"

    async def close(self) -> None:
        """Close the Redis connection."""
        await self._redis.aclose()

    async def __aenter__(self) -> "RedisCacheBackend":
        """Async context manager entry."""
        return self

    async def __aexit__(self, exc_type: type, exc_val: Exception, exc_tb: object) -> None:
        """Async context manager exit."""
        await self.close()
