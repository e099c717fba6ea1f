"""Decorator API for cached query executors.

Wraps an async function that runs a query and returns a QueryResult in
the full cache lifecycle, using a module-level configured service.
"""

import functools
from collections.abc import Callable
from typing import Any, TypeVar

from querycache.adapters.orchestration import QueryCacheHandler
from querycache.core.entities.query_spec import QuerySpec
from querycache.core.services.query_cache_service import QueryCacheService

F = TypeVar("F", bound=Callable[..., Any])

# Module-level cache service reference
_cache_service: QueryCacheService | None = None


def configure(cache_service: QueryCacheService) -> None:
    """Configure the cache service for decorators.

    Must be called before @cached_query starts caching; until then
    decorated functions execute directly.

    Args:
        cache_service: The cache service instance to use.

    Example:
        cache_service = QueryCacheService(
            backend=InMemoryCacheBackend(),
            key_builder=DefaultKeyBuilder(),
            serializer=JsonSerializer(),
            registry=StaticContentTypeRegistry(["post"]),
            salt_store=InMemorySaltStore(),
            entity_loader=loader,
        )
        configure(cache_service)
    """
    global _cache_service
    _cache_service = cache_service


def get_cache_service() -> QueryCacheService | None:
    """Get the configured cache service.

    Returns:
        The configured cache service, or None if not configured.
    """
    return _cache_service


def cached_query(
    site_id: str | Callable[..., str | None] | None = None,
) -> Callable[[F], F]:
    """Decorator for caching an async query executor.

    The decorated function must take the QuerySpec as its first
    positional argument (or as ``spec=``) and return a QueryResult.
    Pass ``bypass_cache=True`` at call time to force a refresh.

    Args:
        site_id: Site the queries run against, or a function receiving
            the call arguments and returning it.

    Returns:
        Decorated function.

    Example:
        @cached_query()
        async def search(spec: QuerySpec) -> QueryResult:
            rows = await db.search(spec)
            return QueryResult(rows, found_count=len(rows), page_count=1)
    """

    def decorator(func: F) -> F:
        @functools.wraps(func)
        async def wrapper(*args: Any, **kwargs: Any) -> Any:
            bypass = bool(kwargs.pop("bypass_cache", False))

            if _cache_service is None:
                # Cache not configured, execute directly
                return await func(*args, **kwargs)

            spec = _find_spec(args, kwargs)
            if spec is None:
                return await func(*args, **kwargs)

            resolved_site = site_id(*args, **kwargs) if callable(site_id) else site_id
            handler = QueryCacheHandler(
                _cache_service,
                bypass=bypass,
                site_id=resolved_site,
            )

            async def executor(_spec: QuerySpec) -> Any:
                return await func(*args, **kwargs)

            return await handler.execute(spec, executor)

        return wrapper  # type: ignore

    return decorator


def _find_spec(args: tuple[Any, ...], kwargs: dict[str, Any]) -> QuerySpec | None:
    spec = kwargs.get("spec")
    if isinstance(spec, QuerySpec):
        return spec
    for arg in args:
        if isinstance(arg, QuerySpec):
            return arg
    return None
