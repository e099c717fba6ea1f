"""Static content-type registry implementation."""

from collections.abc import Iterable, Mapping


class StaticContentTypeRegistry:
    """Registry built from a fixed mapping of content type -> cacheable.

    Example:
        registry = StaticContentTypeRegistry({"post": True, "page": False})
        registry.supported_types()  # {"post"}
    """

    def __init__(self, types: Mapping[str, bool] | Iterable[str] = ()) -> None:
        """Initialize the registry.

        Args:
            types: Either a mapping of content type to its caching support,
                or an iterable of content types that all support caching.
        """
        if isinstance(types, Mapping):
            self._types = dict(types)
        else:
            self._types = {name: True for name in types}

    def register(self, content_type: str, cacheable: bool = True) -> None:
        """Register (or re-register) a content type."""
        self._types[content_type] = cacheable

    def supported_types(self) -> set[str]:
        """Return the content types that declare caching support."""
        return {name for name, cacheable in self._types.items() if cacheable}
