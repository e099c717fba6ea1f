"""Cacheability policy."""

from collections.abc import Set

from querycache.core.entities.cache_config import CacheConfig
from querycache.core.entities.query_spec import QuerySpec
from querycache.core.interfaces.content_type_registry import IContentTypeRegistry


class CacheabilityPolicy:
    """Decides whether a query is eligible for caching at all.

    Rules, evaluated in order:
        1. A search query is cacheable when search caching is enabled.
        2. Otherwise a listing query is cacheable when it forces caching,
           or asks for remote-index integration while that integration
           is enabled.
        3. Everything else is not cacheable.

    Rules 1 and 2 additionally require every content type named by the
    query to be supported. A query naming no content type is never
    cacheable.

    The supported set is asked from the registry once and kept until
    ``reload()`` is called.
    """

    def __init__(
        self,
        registry: IContentTypeRegistry,
        config: CacheConfig | None = None,
    ) -> None:
        self._registry = registry
        self._config = config or CacheConfig()
        self._supported_types: frozenset[str] | None = None

    @property
    def supported_types(self) -> frozenset[str]:
        """Content types that declare caching support."""
        if self._supported_types is None:
            self._supported_types = frozenset(self._registry.supported_types())
        return self._supported_types

    def reload(self) -> None:
        """Forget the supported set; the registry is asked again on next use."""
        self._supported_types = None

    def is_cacheable(
        self,
        spec: QuerySpec,
        supported_types: Set[str] | None = None,
    ) -> bool:
        """Check whether a query may be served from or stored in the cache.

        Args:
            spec: The query specification.
            supported_types: Override for the registry's supported set.

        Returns:
            True if the query is cacheable.
        """
        if not self._config.enabled or not spec.content_types:
            return False

        if spec.has_search_term and self._config.cache_search:
            eligible = True
        elif spec.force_cache or (
            spec.remote_index and self._config.remote_index_integration
        ):
            eligible = True
        else:
            eligible = False

        if not eligible:
            return False

        supported = self.supported_types if supported_types is None else supported_types
        return all(content_type in supported for content_type in spec.content_types)
