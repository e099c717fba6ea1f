"""Key builder interface."""

from collections.abc import Mapping
from typing import Any, Protocol

from querycache.core.entities.cache_key import CacheKey
from querycache.core.entities.query_spec import QuerySpec


class IKeyBuilder(Protocol):
    """Contract for deriving cache keys from query specifications.

    Key builders must be pure: the same spec, salt and context always
    produce the same key, and no I/O happens while building it.
    """

    def build(
        self,
        spec: QuerySpec,
        salt: str | None,
        context: Mapping[str, Any] | None = None,
    ) -> CacheKey | None:
        """Build the cache key for a query.

        Args:
            spec: The query specification.
            salt: The current invalidation salt, or None if none exists yet.
            context: Optional additional context for key generation
                (e.g., the site the query runs against).

        Returns:
            The cache key, or None if the spec opts out of caching.
        """
        ...
