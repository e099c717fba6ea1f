"""Core domain layer for querycache."""

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
)

__all__ = [
    # Entities
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
    # Interfaces
    "ICacheBackend",
    "IKeyBuilder",
    "ISerializer",
    "IEntityLoader",
    "IContentTypeRegistry",
    "ISaltStore",
    "IAuxiliaryCache",
    # Services
    "CacheabilityPolicy",
    "InvalidationController",
    "QueryCacheService",
    "QueryCacheSession",
]
