"""Cache configuration entity."""

from dataclasses import dataclass
from datetime import timedelta


@dataclass
class CacheConfig:
    """Cache configuration.

    Provides configuration options for the query cache,
    including TTLs, key layout, and feature toggles.

    Feature toggles:
        cache_search: Cache full-text search queries.
        remote_index_integration: Cache listing queries that ask for
            remote search-index integration.

    Invalidation:
        Publishing content of a tracked type (a transition into
        ``published_status``) replaces the global salt. When
        ``tracked_types`` is None, the content types the registry reports
        as cacheable are tracked.
    """

    enabled: bool = True
    key_prefix: str = "querycache"
    meta_suffix: str = "_meta"

    # TTLs for the identifier list and its pagination metadata
    result_ttl: timedelta | None = None
    meta_ttl: timedelta | None = None

    # Cacheability toggles
    cache_search: bool = True
    remote_index_integration: bool = False

    # Invalidation
    published_status: str = "published"
    tracked_types: frozenset[str] | None = None

    def __post_init__(self) -> None:
        """Set default TTLs and normalize tracked types."""
        if self.result_ttl is None:
            self.result_ttl = timedelta(minutes=30)
        if self.meta_ttl is None:
            self.meta_ttl = timedelta(minutes=30)
        if self.tracked_types is not None:
            self.tracked_types = frozenset(self.tracked_types)
        if not self.meta_suffix:
            raise ValueError("meta_suffix must be a non-empty string")
