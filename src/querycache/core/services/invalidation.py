"""Salt-based invalidation controller."""

import logging
import time
from collections.abc import Callable, Iterable, Set

from querycache.core.entities.cache_config import CacheConfig
from querycache.core.interfaces.auxiliary_cache import IAuxiliaryCache
from querycache.core.interfaces.salt_store import ISaltStore

logger = logging.getLogger(__name__)


def _time_ns_token() -> str:
    return str(time.time_ns())


class InvalidationController:
    """Invalidates every cached query for tracked content types at once.

    Publishing content of a tracked type replaces the global salt, so
    every key derived afterwards differs from the ones already stored.
    Old entries are left for the backend to expire.

    An instance is scoped to one outer request or transaction: the
    first successful salt replacement sets a flag and later publish
    events in the same scope are ignored.
    """

    def __init__(
        self,
        salt_store: ISaltStore,
        tracked_types: Set[str],
        auxiliary_caches: Iterable[IAuxiliaryCache] = (),
        config: CacheConfig | None = None,
        token_factory: Callable[[], str] = _time_ns_token,
    ) -> None:
        """Initialize the controller.

        Args:
            salt_store: Durable store holding the salt.
            tracked_types: Content types whose publication invalidates.
            auxiliary_caches: Secondary cache layers flushed alongside.
            config: Cache configuration.
            token_factory: Produces new salt tokens.
        """
        self._salt_store = salt_store
        self._tracked_types = frozenset(tracked_types)
        self._auxiliary_caches = list(auxiliary_caches)
        self._config = config or CacheConfig()
        self._token_factory = token_factory
        self._flushed = False

    @property
    def flushed(self) -> bool:
        """Whether the salt was already replaced in this scope."""
        return self._flushed

    async def on_content_published(
        self,
        content_type: str,
        old_status: str | None,
        new_status: str,
    ) -> bool:
        """Handle a content status transition.

        Args:
            content_type: The type of the content that changed.
            old_status: The status before the transition.
            new_status: The status after the transition.

        Returns:
            True if the salt was replaced by this call.
        """
        if new_status != self._config.published_status or old_status == new_status:
            return False
        if content_type not in self._tracked_types:
            return False
        if self._flushed:
            return False

        return await self._replace_salt(reason=f"{content_type} published")

    async def invalidate_all(self) -> bool:
        """Replace the salt now, ignoring the per-scope debounce.

        Returns:
            True if the new salt was stored.
        """
        return await self._replace_salt(reason="manual invalidation")

    async def _replace_salt(self, reason: str) -> bool:
        token = self._token_factory()
        try:
            await self._salt_store.replace_salt(token)
        except Exception:
            logger.warning(
                "Failed to replace invalidation salt (%s); cached queries "
                "stay valid until the next successful invalidation",
                reason,
                exc_info=True,
            )
            return False

        self._flushed = True
        logger.info("Replaced invalidation salt (%s)", reason)

        for cache in self._auxiliary_caches:
            try:
                await cache.flush()
            except Exception:
                logger.warning(
                    "Failed to flush auxiliary cache %r", cache, exc_info=True
                )

        return True
