"""Content-type registry implementations."""

from querycache.infrastructure.registries.static import StaticContentTypeRegistry

__all__ = ["StaticContentTypeRegistry"]
