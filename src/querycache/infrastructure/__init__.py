"""Infrastructure layer implementations for querycache."""

from querycache.infrastructure.backends import InMemoryCacheBackend
from querycache.infrastructure.key_builders import DefaultKeyBuilder
from querycache.infrastructure.loaders import InMemoryEntityLoader
from querycache.infrastructure.registries import StaticContentTypeRegistry
from querycache.infrastructure.salt_stores import InMemorySaltStore
from querycache.infrastructure.serializers import JsonSerializer

__all__ = [
    "InMemoryCacheBackend",
    "DefaultKeyBuilder",
    "JsonSerializer",
    "InMemorySaltStore",
    "InMemoryEntityLoader",
    "StaticContentTypeRegistry",
]
