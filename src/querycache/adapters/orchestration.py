"""Caching adapter for a query orchestration layer."""

import logging
from collections.abc import Awaitable, Callable, Sequence
from typing import Any

from querycache.core.entities.cached_result import QueryResult
from querycache.core.entities.query_spec import QuerySpec
from querycache.core.services.query_cache_service import QueryCacheService
from querycache.core.services.session import QueryCacheSession

logger = logging.getLogger(__name__)

QueryExecutor = Callable[[QuerySpec], Awaitable[QueryResult]]


class QueryCacheHandler:
    """Connects an orchestration pipeline to a query cache session.

    The pipeline calls the handler at fixed points:

    - ``announce_query(spec)`` before any storage query runs,
    - ``try_get_cached()`` to find out whether execution can be skipped,
    - ``record_results(...)`` after the real query completed,
    - ``end_query()`` once the query lifecycle is over, on every path.

    ``execute()`` runs all of those steps around an async executor.

    Usage:
        handler = QueryCacheHandler(service, site_id="main")

        result = await handler.execute(spec, run_query)
    """

    def __init__(
        self,
        cache_service: QueryCacheService,
        bypass: bool = False,
        site_id: str | None = None,
    ) -> None:
        """Initialize the handler.

        Args:
            cache_service: The query cache service.
            bypass: Default bypass flag for lookups made by this handler.
            site_id: Site the queries run against.
        """
        self._cache_service = cache_service
        self._session: QueryCacheSession = cache_service.session(
            bypass=bypass,
            site_id=site_id,
        )

    @property
    def session(self) -> QueryCacheSession:
        return self._session

    async def announce_query(
        self, spec: QuerySpec, bypass: bool | None = None
    ) -> None:
        await self._session.begin(spec, bypass=bypass)

    async def try_get_cached(self, bypass: bool | None = None) -> QueryResult | None:
        return await self._session.try_get_cached(bypass=bypass)

    def skip_remote_index(self, skip: bool = False) -> bool:
        """Whether the remote search-index request can be skipped."""
        return self._session.should_skip_remote_index(skip)

    async def record_results(
        self,
        results: Sequence[Any],
        found_count: int,
        page_count: int,
    ) -> None:
        await self._session.record(results, found_count, page_count)

    async def end_query(self) -> None:
        await self._session.end()

    async def execute(
        self,
        spec: QuerySpec,
        executor: QueryExecutor,
        bypass: bool | None = None,
    ) -> QueryResult:
        """Serve a query from cache, or execute and record it.

        Args:
            spec: The query to run.
            executor: Runs the real query against storage.
            bypass: Force a miss for this call.

        Returns:
            The cached or live query result.
        """
        await self.announce_query(spec, bypass=bypass)
        try:
            cached = await self.try_get_cached(bypass=bypass)
            if cached is not None:
                logger.debug("Serving query from cache: %s", self._session.key)
                return cached

            result = await executor(spec)
            await self.record_results(
                result.results,
                result.found_count,
                result.page_count,
            )
            return result
        finally:
            await self.end_query()
