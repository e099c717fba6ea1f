"""Core interfaces (Protocol classes) for querycache."""

from querycache.core.interfaces.auxiliary_cache import IAuxiliaryCache
from querycache.core.interfaces.cache_backend import ICacheBackend
from querycache.core.interfaces.content_type_registry import IContentTypeRegistry
from querycache.core.interfaces.entity_loader import IEntityLoader
from querycache.core.interfaces.key_builder import IKeyBuilder
from querycache.core.interfaces.salt_store import ISaltStore
from querycache.core.interfaces.serializer import ISerializer

__all__ = [
    "ICacheBackend",
    "IKeyBuilder",
    "ISerializer",
    "IEntityLoader",
    "IContentTypeRegistry",
    "ISaltStore",
    "IAuxiliaryCache",
]
