"""Domain services for querycache."""

from querycache.core.services.cacheability import CacheabilityPolicy
from querycache.core.services.invalidation import InvalidationController
from querycache.core.services.query_cache_service import QueryCacheService
from querycache.core.services.result_codec import ResultCodec, default_id_getter
from querycache.core.services.session import QueryCacheSession

__all__ = [
    "QueryCacheService",
    "QueryCacheSession",
    "CacheabilityPolicy",
    "InvalidationController",
    "ResultCodec",
    "default_id_getter",
]
