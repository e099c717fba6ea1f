"""querycache - Result caching for expensive search and listing queries.

A Python library that sits between a query orchestration layer and a slow
store (a relational database and/or a remote search index). It caches the
identifiers and pagination counters of search and listing queries, serves
them back instead of re-running the query, and invalidates every cached
query for writable content in O(1) by replacing a global salt.

Example:
    from querycache import (
        QueryCacheService,
        QuerySpec,
        InMemoryCacheBackend,
        DefaultKeyBuilder,
        JsonSerializer,
        InMemorySaltStore,
        StaticContentTypeRegistry,
    )

    service = QueryCacheService(
        backend=InMemoryCacheBackend(),
        key_builder=DefaultKeyBuilder(),
        serializer=JsonSerializer(),
        registry=StaticContentTypeRegistry({"post": True, "page": False}),
        salt_store=InMemorySaltStore(),
        entity_loader=post_loader,
    )

    spec = QuerySpec(search_term="widgets", content_types=("post",))

    async with service.query(spec) as session:
        cached = await session.try_get_cached()
        if cached is None:
            posts, found, pages = await run_search(spec)
            await session.record(posts, found, pages)

Invalidation on publish:
    controller = service.invalidation_controller()  # one per request
    await controller.on_content_published("post", "draft", "published")
"""

from querycache.adapters.orchestration import QueryCacheHandler
from querycache.core.entities import (
    CacheConfig,
    CachedMeta,
    CachedResult,
    CacheKey,
    QueryResult,
    QuerySpec,
    SessionState,
)
from querycache.core.exceptions import (
    CacheUnavailableError,
    MalformedCacheEntryError,
    QueryCacheError,
    SaltStoreUnavailableError,
)
from querycache.core.interfaces import (
    IAuxiliaryCache,
    ICacheBackend,
    IContentTypeRegistry,
    IEntityLoader,
    IKeyBuilder,
    ISaltStore,
    ISerializer,
)
from querycache.core.services import (
    CacheabilityPolicy,
    InvalidationController,
    QueryCacheService,
    QueryCacheSession,
    ResultCodec,
)
from querycache.decorators import cached_query, configure
from querycache.infrastructure import (
    DefaultKeyBuilder,
    InMemoryCacheBackend,
    InMemoryEntityLoader,
    InMemorySaltStore,
    JsonSerializer,
    StaticContentTypeRegistry,
)

__version__ = "0.1.0"

__all__ = [
    # Version
    "__version__",
    # Core entities
    "CacheConfig",
    "CacheKey",
    "CachedMeta",
    "CachedResult",
    "QueryResult",
    "QuerySpec",
    "SessionState",
    # Exceptions
    "QueryCacheError",
    "CacheUnavailableError",
    "MalformedCacheEntryError",
    "SaltStoreUnavailableError",
    # Core interfaces
    "ICacheBackend",
    "IKeyBuilder",
    "ISerializer",
    "IEntityLoader",
    "IContentTypeRegistry",
    "ISaltStore",
    "IAuxiliaryCache",
    # Core services
    "QueryCacheService",
    "QueryCacheSession",
    "CacheabilityPolicy",
    "InvalidationController",
    "ResultCodec",
    # Adapters
    "QueryCacheHandler",
    # Infrastructure implementations
    "InMemoryCacheBackend",
    "DefaultKeyBuilder",
    "JsonSerializer",
    "InMemorySaltStore",
    "InMemoryEntityLoader",
    "StaticContentTypeRegistry",
    # Decorators
    "cached_query",
    "configure",
]
