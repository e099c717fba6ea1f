"""Salt store implementations.

The Redis salt store lives in ``querycache.infrastructure.salt_stores.redis``
and needs the ``redis`` extra.
"""

from querycache.infrastructure.salt_stores.memory import InMemorySaltStore

__all__ = ["InMemorySaltStore"]
