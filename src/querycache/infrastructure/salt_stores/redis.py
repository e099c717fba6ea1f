"""Redis salt store implementation."""

from typing import Optional

import redis.asyncio as redis
from redis.exceptions import RedisError

from querycache.core.exceptions import SaltStoreUnavailableError


class RedisSaltStore:
    """Durable salt store backed by a single Redis key.

    The key is written with a plain SET and never expires, so the
    latest writer wins and concurrent invalidations cannot corrupt it.
    The default key sits outside the default ``RedisCacheBackend``
    namespace, so clearing the result cache never drops the salt. Use a
    Redis instance with persistence, not the TTL-bounded result cache.
    """

    def __init__(
        self,
        redis_url: str = "redis://localhost:6379",
        key: str = "querycache_salt",
        client: Optional[redis.Redis] = None,
    ) -> None:
        """Initialize the Redis salt store.

        Args:
            redis_url: Redis connection URL.
            key: The key holding the salt.
            client: An existing client to use instead of connecting to
                ``redis_url``.
        """
        self._redis: redis.Redis = client or redis.from_url(redis_url)  # type: ignore
        self._key = key

    async def read_salt(self) -> Optional[str]:
        """Read the current salt.

        Returns:
            The salt token, or None if none has been written yet.
        """
        try:
            value = await self._redis.get(self._key)
        except RedisError as e:
            raise SaltStoreUnavailableError(f"Failed to read salt: {e}") from e

        if value is None:
            return None
        if isinstance(value, bytes):
            return value.decode("utf-8")
        return str(value)

    async def replace_salt(self, token: str) -> None:
        """Replace the salt with ``token``.

        Args:
            token: The new salt token.
        """
        try:
            await self._redis.set(self._key, token)
        except RedisError as e:
            raise SaltStoreUnavailableError(f"Failed to write salt: {e}") from e

    async def close(self) -> None:
        """Close the Redis connection."""
        await self._redis.aclose()
