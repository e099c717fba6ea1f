"""Entity loader implementations."""

from querycache.infrastructure.loaders.memory import InMemoryEntityLoader

__all__ = ["InMemoryEntityLoader"]
