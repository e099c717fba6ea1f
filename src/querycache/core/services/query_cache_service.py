"""Query cache service - composition root for caching operations."""

from collections.abc import AsyncIterator, Callable, Iterable
from contextlib import asynccontextmanager
from typing import Any

from querycache.core.entities.cache_config import CacheConfig
from querycache.core.entities.cached_result import CacheStats
from querycache.core.entities.query_spec import QuerySpec
from querycache.core.interfaces.auxiliary_cache import IAuxiliaryCache
from querycache.core.interfaces.cache_backend import ICacheBackend
from querycache.core.interfaces.content_type_registry import IContentTypeRegistry
from querycache.core.interfaces.entity_loader import IEntityLoader
from querycache.core.interfaces.key_builder import IKeyBuilder
from querycache.core.interfaces.salt_store import ISaltStore
from querycache.core.interfaces.serializer import ISerializer
from querycache.core.services.cacheability import CacheabilityPolicy
from querycache.core.services.invalidation import InvalidationController
from querycache.core.services.result_codec import ResultCodec, default_id_getter
from querycache.core.services.session import QueryCacheSession


class QueryCacheService:
    """Domain service that wires the query cache together.

    This is the main entry point: it composes the backend, key builder,
    serializer and collaborators once per process, and hands out
    per-query sessions and per-request invalidation controllers.
    """

    def __init__(
        self,
        backend: ICacheBackend,
        key_builder: IKeyBuilder,
        serializer: ISerializer,
        registry: IContentTypeRegistry,
        salt_store: ISaltStore,
        entity_loader: IEntityLoader,
        config: CacheConfig | None = None,
        auxiliary_caches: Iterable[IAuxiliaryCache] = (),
        id_getter: Callable[[Any], Any] = default_id_getter,
    ) -> None:
        """Initialize the query cache service.

        Args:
            backend: The cache backend to use for storage.
            key_builder: The key builder for generating cache keys.
            serializer: The serializer for encoding/decoding values.
            registry: Registry reporting which content types are cacheable.
            salt_store: Durable store for the invalidation salt.
            entity_loader: Hydrates cached identifiers into entities.
            config: Optional cache configuration. Uses defaults if not provided.
            auxiliary_caches: Secondary cache layers flushed on invalidation.
            id_getter: Extracts the identifier of a result object.
        """
        self._backend = backend
        self._key_builder = key_builder
        self._salt_store = salt_store
        self._entity_loader = entity_loader
        self._config = config or CacheConfig()
        self._auxiliary_caches = list(auxiliary_caches)
        self._codec = ResultCodec(serializer, id_getter=id_getter)
        self._policy = CacheabilityPolicy(registry, self._config)
        self._stats = CacheStats()

    @property
    def config(self) -> CacheConfig:
        """Get the cache configuration."""
        return self._config

    @property
    def policy(self) -> CacheabilityPolicy:
        """Get the cacheability policy."""
        return self._policy

    @property
    def stats(self) -> dict[str, int]:
        """Get cache statistics.

        Returns:
            Dictionary with hits, misses, errors, and total lookups.
        """
        return self._stats.as_dict()

    def session(
        self,
        bypass: bool = False,
        site_id: str | None = None,
    ) -> QueryCacheSession:
        """Create a session for one query lifecycle at a time.

        Args:
            bypass: Treat every lookup as a miss (force refresh).
            site_id: Site the queries run against.

        Returns:
            A new, idle session.
        """
        return QueryCacheSession(
            backend=self._backend,
            key_builder=self._key_builder,
            codec=self._codec,
            policy=self._policy,
            salt_store=self._salt_store,
            entity_loader=self._entity_loader,
            config=self._config,
            stats=self._stats,
            bypass=bypass,
            site_id=site_id,
        )

    @asynccontextmanager
    async def query(
        self,
        spec: QuerySpec,
        bypass: bool = False,
        site_id: str | None = None,
    ) -> AsyncIterator[QueryCacheSession]:
        """Run one query lifecycle; ``end()`` is guaranteed on exit.

        Example:
            async with service.query(spec) as session:
                cached = await session.try_get_cached()
                if cached is None:
                    result = await execute(spec)
                    await session.record(
                        result.results, result.found_count, result.page_count
                    )
        """
        session = self.session(bypass=bypass, site_id=site_id)
        await session.begin(spec)
        try:
            yield session
        finally:
            await session.end()

    def invalidation_controller(self) -> InvalidationController:
        """Create an invalidation controller for one request scope.

        Tracks ``config.tracked_types`` when set, otherwise every content
        type the registry reports as cacheable.
        """
        tracked = self._config.tracked_types
        if tracked is None:
            tracked = self._policy.supported_types

        return InvalidationController(
            salt_store=self._salt_store,
            tracked_types=tracked,
            auxiliary_caches=self._auxiliary_caches,
            config=self._config,
        )

    def reload_content_types(self) -> None:
        """Re-read the supported content types on next use."""
        self._policy.reload()

    async def clear(self) -> None:
        """Clear all cached entries."""
        await self._backend.clear()
        self._stats.reset()
