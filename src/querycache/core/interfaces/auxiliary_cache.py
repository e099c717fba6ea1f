"""Auxiliary cache interface."""

from typing import Protocol


class IAuxiliaryCache(Protocol):
    """Contract for secondary caching layers flushed on invalidation."""

    async def flush(self) -> None:
        """Drop everything held by this cache layer."""
        ...
