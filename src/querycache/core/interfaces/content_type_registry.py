"""Content-type registry interface."""

from typing import Protocol


class IContentTypeRegistry(Protocol):
    """Contract for the registry that knows which content types exist."""

    def supported_types(self) -> set[str]:
        """Return the content types that declare caching support."""
        ...
