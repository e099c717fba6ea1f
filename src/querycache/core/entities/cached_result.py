"""Cached result entities."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class SessionState(Enum):
    """Lifecycle states of a query cache session.

    IDLE: No query, or the query is not cacheable.
    CLASSIFIED: The query is cacheable and has a key.
    HIT_PENDING: Cached results were found and are ready to serve.
    MISS_RECORDED: Live results were recorded after a miss.
    """

    IDLE = "idle"
    CLASSIFIED = "classified"
    HIT_PENDING = "hit_pending"
    MISS_RECORDED = "miss_recorded"


@dataclass(frozen=True)
class CachedMeta:
    """Pagination metadata stored alongside a cached result list."""

    found_posts: int
    max_num_pages: int


@dataclass
class CachedResult:
    """An ordered identifier list plus the entities it hydrated to.

    ``ids`` is what the backend stores. ``entities`` holds the hydrated
    objects served to the caller, in the same order.
    """

    ids: tuple[Any, ...]
    entities: list[Any] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.ids)

    @property
    def is_empty(self) -> bool:
        """Check if the result holds no identifiers."""
        return not self.ids


@dataclass
class QueryResult:
    """Results of a query together with its pagination counters.

    Returned by executors wrapped by the orchestration adapter and by
    ``try_get_cached()`` on a cache hit.
    """

    results: list[Any]
    found_count: int
    page_count: int


@dataclass
class CacheStats:
    """Counters shared by every session created from one service."""

    hits: int = 0
    misses: int = 0
    errors: int = 0

    def as_dict(self) -> dict[str, int]:
        return {
            "hits": self.hits,
            "misses": self.misses,
            "errors": self.errors,
            "total": self.hits + self.misses,
        }

    def reset(self) -> None:
        self.hits = 0
        self.misses = 0
        self.errors = 0
