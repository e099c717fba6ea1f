"""Query cache session - per-query lifecycle state machine."""

import logging
from collections.abc import Sequence
from datetime import timedelta
from typing import Any

from querycache.core.entities.cache_config import CacheConfig
from querycache.core.entities.cache_key import CacheKey
from querycache.core.entities.cached_result import (
    CachedMeta,
    CachedResult,
    CacheStats,
    QueryResult,
    SessionState,
)
from querycache.core.entities.query_spec import QuerySpec
from querycache.core.exceptions import MalformedCacheEntryError
from querycache.core.interfaces.cache_backend import ICacheBackend
from querycache.core.interfaces.entity_loader import IEntityLoader
from querycache.core.interfaces.key_builder import IKeyBuilder
from querycache.core.interfaces.salt_store import ISaltStore
from querycache.core.services.cacheability import CacheabilityPolicy
from querycache.core.services.result_codec import ResultCodec

logger = logging.getLogger(__name__)


class QueryCacheSession:
    """Caching state for one query lifecycle.

    The orchestration layer drives a session through
    ``begin -> lookup -> [execute on miss] -> record -> end``:

    - ``begin(spec)`` resets the session, classifies the query and,
      when it is cacheable, derives its key and looks it up.
    - ``has_cached_results()`` tells the caller it may skip execution.
    - ``record(...)`` stores live results after a miss.
    - ``end()`` clears everything. Use the session as an async context
      manager (or ``QueryCacheService.query``) so it always runs.

    Every registry, backend, salt store and loader failure is logged and
    treated as a miss or a dropped write; nothing raises out of a session.

    A session instance may be reused for several queries, one at a time.
    It must never be shared between concurrent queries.
    """

    def __init__(
        self,
        backend: ICacheBackend,
        key_builder: IKeyBuilder,
        codec: ResultCodec,
        policy: CacheabilityPolicy,
        salt_store: ISaltStore,
        entity_loader: IEntityLoader,
        config: CacheConfig | None = None,
        stats: CacheStats | None = None,
        bypass: bool = False,
        site_id: str | None = None,
    ) -> None:
        """Initialize the session.

        Args:
            backend: Key-value store holding cached entries.
            key_builder: Derives cache keys from query specs.
            codec: Encodes identifier lists and metadata.
            policy: Decides which queries are cacheable.
            salt_store: Holds the current invalidation salt.
            entity_loader: Hydrates cached identifiers on a hit.
            config: Cache configuration.
            stats: Shared hit/miss counters.
            bypass: Treat every lookup as a miss (force refresh).
            site_id: Site the queries run against; part of every key.
        """
        self._backend = backend
        self._key_builder = key_builder
        self._codec = codec
        self._policy = policy
        self._salt_store = salt_store
        self._entity_loader = entity_loader
        self._config = config or CacheConfig()
        self._stats = stats or CacheStats()
        self._bypass = bypass
        self._site_id = site_id

        self._state = SessionState.IDLE
        self._spec: QuerySpec | None = None
        self._key: CacheKey | None = None
        self._result: CachedResult | None = None
        self._meta: CachedMeta | None = None
        self._looked_up = False

    @property
    def state(self) -> SessionState:
        return self._state

    @property
    def spec(self) -> QuerySpec | None:
        return self._spec

    @property
    def key(self) -> CacheKey | None:
        """The cache key of the current query, or None if not cacheable."""
        return self._key

    @property
    def cached_result(self) -> CachedResult | None:
        return self._result

    @property
    def cached_meta(self) -> CachedMeta | None:
        """Pagination metadata; absent whenever the result is empty."""
        if self._result is None or self._result.is_empty:
            return None
        return self._meta

    @property
    def is_cacheable(self) -> bool:
        return self._key is not None

    @property
    def site_id(self) -> str | None:
        return self._site_id

    async def begin(self, spec: QuerySpec, bypass: bool | None = None) -> None:
        """Start a new query lifecycle.

        Args:
            spec: The query about to be executed.
            bypass: Skip the eager lookup for this lifecycle. Defaults
                to the session's bypass flag.
        """
        self._reset()

        try:
            cacheable = self._policy.is_cacheable(spec)
        except Exception:
            self._stats.errors += 1
            logger.warning(
                "Cannot classify query, running it uncached",
                exc_info=True,
            )
            return

        if not cacheable:
            logger.debug("Query not cacheable: %r", spec)
            return

        try:
            salt = await self._salt_store.read_salt()
        except Exception:
            self._stats.errors += 1
            logger.warning(
                "Invalidation salt unavailable, running query uncached",
                exc_info=True,
            )
            return

        key = self._key_builder.build(spec, salt, context=self._key_context())
        if key is None:
            return

        self._spec = spec
        self._key = key
        self._state = SessionState.CLASSIFIED

        if self._bypass if bypass is None else bypass:
            return
        await self.lookup()

    async def lookup(self, bypass: bool | None = None) -> CachedResult | None:
        """Look up cached results for the current query.

        The backend is asked at most once per lifecycle; later calls
        return what the first one found. A bypassed call discards a
        pending hit, so a later lookup reads the backend again.

        Args:
            bypass: Treat this lookup as a miss without touching stored
                entries. Defaults to the session's bypass flag.

        Returns:
            The cached result, or None on a miss.
        """
        if self._key is None:
            return None

        if self._bypass if bypass is None else bypass:
            logger.debug("Cache bypassed for %s", self._key)
            if self._state == SessionState.HIT_PENDING:
                # Drop the eager hit so the caller executes the query
                self._result = None
                self._meta = None
                self._looked_up = False
                self._state = SessionState.CLASSIFIED
            return None

        if self._result is not None:
            return None if self._result.is_empty else self._result

        if self._looked_up:
            return None
        self._looked_up = True

        result = await self._fetch(self._key)
        if result is None:
            self._stats.misses += 1
            logger.debug("Cache miss for %s", self._key)
            return None

        self._result, self._meta = result
        self._state = SessionState.HIT_PENDING
        self._stats.hits += 1
        logger.debug("Cache hit for %s (%d results)", self._key, len(self._result))
        return self._result

    async def try_get_cached(self, bypass: bool | None = None) -> QueryResult | None:
        """Return cached results with their counters, or None on a miss.

        Args:
            bypass: Treat this call as a miss. Defaults to the session's
                bypass flag.
        """
        result = await self.lookup(bypass=bypass)
        meta = self.cached_meta
        if result is None or meta is None:
            return None
        return QueryResult(
            results=list(result.entities),
            found_count=meta.found_posts,
            page_count=meta.max_num_pages,
        )

    def has_cached_results(self) -> bool:
        """Check whether the caller may skip executing the query."""
        return self._result is not None and not self._result.is_empty

    def should_skip_remote_index(self, skip: bool = False) -> bool:
        """Decide whether the remote search index can be skipped.

        Args:
            skip: Whether the caller already decided to skip it.
        """
        return skip or self.has_cached_results()

    async def record(
        self,
        results: Sequence[Any],
        found_count: int,
        page_count: int,
    ) -> None:
        """Store the live results of the current query.

        Non-empty results replace the cached identifier list and its
        metadata. Empty results delete both entries instead, so a stale
        non-empty answer cannot outlive the content it pointed to.

        Args:
            results: The hydrated results returned by the real query.
            found_count: Total number of matching items.
            page_count: Number of pages for the query's page size.
        """
        key = self._key
        if key is None:
            return

        results = list(results)

        if results:
            try:
                identifiers = self._codec.extract_ids(results)
                meta = CachedMeta(
                    found_posts=int(found_count),
                    max_num_pages=int(page_count),
                )
                encoded_ids = self._codec.encode_ids(identifiers)
                encoded_meta = self._codec.encode_meta(meta)
            except (MalformedCacheEntryError, TypeError, ValueError):
                self._stats.errors += 1
                logger.warning("Cannot encode results for %s", key, exc_info=True)
                return

            await self._safe_set(key.result_key, encoded_ids, self._config.result_ttl)
            await self._safe_set(key.meta_key, encoded_meta, self._config.meta_ttl)

            self._result = CachedResult(ids=identifiers, entities=results)
            self._meta = meta
        else:
            await self._safe_delete(key.result_key)
            await self._safe_delete(key.meta_key)

            self._result = None
            self._meta = None

        self._looked_up = True
        self._state = SessionState.MISS_RECORDED

    async def end(self) -> None:
        """End the current query lifecycle and clear all state."""
        self._reset()

    async def __aenter__(self) -> "QueryCacheSession":
        return self

    async def __aexit__(self, exc_type: type, exc_val: Exception, exc_tb: object) -> None:
        await self.end()

    def _reset(self) -> None:
        self._state = SessionState.IDLE
        self._spec = None
        self._key = None
        self._result = None
        self._meta = None
        self._looked_up = False

    def _key_context(self) -> dict[str, Any] | None:
        if self._site_id is None:
            return None
        return {"site_id": self._site_id}

    async def _fetch(self, key: CacheKey) -> tuple[CachedResult, CachedMeta] | None:
        """Load, decode and hydrate the entry stored under ``key``."""
        data = await self._safe_get(key.result_key)
        if data is None:
            return None

        try:
            identifiers = self._codec.decode_ids(data)
        except MalformedCacheEntryError:
            logger.warning("Discarding malformed cache entry %s", key, exc_info=True)
            await self._discard(key)
            return None

        if not identifiers:
            return None

        meta_data = await self._safe_get(key.meta_key)
        if meta_data is None:
            logger.debug("Cache entry %s has no metadata", key)
            return None

        try:
            meta = self._codec.decode_meta(meta_data)
        except MalformedCacheEntryError:
            logger.warning("Discarding malformed cache metadata %s", key, exc_info=True)
            await self._discard(key)
            return None

        try:
            entities = await self._entity_loader.hydrate(identifiers)
        except Exception:
            self._stats.errors += 1
            logger.warning("Failed to hydrate cached results for %s", key, exc_info=True)
            return None

        if len(entities) != len(identifiers):
            logger.info(
                "Discarding cache entry %s: %d of %d identifiers no longer load",
                key,
                len(identifiers) - len(entities),
                len(identifiers),
            )
            await self._discard(key)
            return None

        return CachedResult(ids=identifiers, entities=list(entities)), meta

    async def _discard(self, key: CacheKey) -> None:
        await self._safe_delete(key.result_key)
        await self._safe_delete(key.meta_key)

    async def _safe_get(self, key: str) -> bytes | None:
        try:
            return await self._backend.get(key)
        except Exception:
            self._stats.errors += 1
            logger.warning("Cache read failed for %s", key, exc_info=True)
            return None

    async def _safe_set(self, key: str, value: bytes, ttl: timedelta | None) -> None:
        try:
            await self._backend.set(key, value, ttl)
        except Exception:
            self._stats.errors += 1
            logger.warning("Cache write failed for %s", key, exc_info=True)

    async def _safe_delete(self, key: str) -> None:
        try:
            await self._backend.delete(key)
        except Exception:
            self._stats.errors += 1
            logger.warning("Cache delete failed for %s", key, exc_info=True)
