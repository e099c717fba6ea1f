"""Entity loader interface."""

from collections.abc import Sequence
from typing import Any, Protocol


class IEntityLoader(Protocol):
    """Contract for materializing cached identifiers into full entities.

    Only called on a cache hit. Loaders should return entities in the
    order of the identifiers given and omit identifiers that no longer
    resolve, so the session can detect entries that went stale.
    """

    async def hydrate(self, identifiers: Sequence[Any]) -> list[Any]:
        """Load the entities for the given identifiers.

        Args:
            identifiers: Ordered content identifiers.

        Returns:
            The hydrated entities, in identifier order.
        """
        ...
