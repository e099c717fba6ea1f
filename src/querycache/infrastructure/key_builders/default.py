"""Default key builder implementation."""

from collections.abc import Mapping
from typing import Any

from querycache.core.entities.cache_key import CacheKey
from querycache.core.entities.query_spec import QuerySpec
from querycache.utils.hashing import canonicalize_spec


class DefaultKeyBuilder:
    """Default key builder using a hash of the canonical query spec.

    Creates deterministic cache keys from query specifications
    using truncated SHA-256 hashing, salted with the current
    invalidation salt.
    """

    def __init__(
        self,
        prefix: str = "querycache",
        meta_suffix: str = "_meta",
    ) -> None:
        """Initialize the key builder.

        Args:
            prefix: Prefix for all cache keys.
            meta_suffix: Suffix appended to a key to form its metadata key.
        """
        self._prefix = prefix
        self._meta_suffix = meta_suffix

    def build(
        self,
        spec: QuerySpec,
        salt: str | None,
        context: Mapping[str, Any] | None = None,
    ) -> CacheKey | None:
        """Build the cache key for a query.

        Args:
            spec: The query specification.
            salt: The current invalidation salt, or None.
            context: Optional additional context (e.g. the site id).

        Returns:
            The cache key, or None if the spec opts out of caching.
        """
        if spec.skip_cache:
            return None

        return CacheKey.from_components(
            prefix=self._prefix,
            canonical_spec=canonicalize_spec(spec),
            salt=salt,
            context=context,
            meta_suffix=self._meta_suffix,
        )
