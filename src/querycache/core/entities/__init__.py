"""Domain entities for querycache."""

from querycache.core.entities.cache_config import CacheConfig
from querycache.core.entities.cache_key import CacheKey
from querycache.core.entities.cached_result import (
    CacheStats,
    CachedMeta,
    CachedResult,
    QueryResult,
    SessionState,
)
from querycache.core.entities.query_spec import QuerySpec

__all__ = [
    "CacheConfig",
    "CacheKey",
    "CacheStats",
    "CachedMeta",
    "CachedResult",
    "QueryResult",
    "QuerySpec",
    "SessionState",
]
