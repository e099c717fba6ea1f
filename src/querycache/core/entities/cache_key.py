"""Cache key value object."""

from collections.abc import Callable, Mapping
from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class CacheKey:
    """Immutable cache key value object.

    Encapsulates all components that make up a cache key,
    providing a structured representation before it is rendered
    to the string used by the backend.
    """

    prefix: str
    spec_hash: str
    context_hash: str | None = None
    salt: str | None = None
    meta_suffix: str = "_meta"

    def __str__(self) -> str:
        """Return the full cache key string.

        Returns:
            The complete cache key as a string.
        """
        parts = [self.prefix, self.spec_hash]
        if self.context_hash:
            parts.append(self.context_hash)
        key = ":".join(parts)
        if self.salt:
            key = f"{key}_{self.salt}"
        return key

    @property
    def result_key(self) -> str:
        """Key under which the identifier list is stored."""
        return str(self)

    @property
    def meta_key(self) -> str:
        """Key under which the pagination metadata is stored."""
        return f"{self}{self.meta_suffix}"

    @classmethod
    def from_components(
        cls,
        prefix: str,
        canonical_spec: Mapping[str, Any],
        salt: str | None = None,
        context: Mapping[str, Any] | None = None,
        meta_suffix: str = "_meta",
        hash_func: Callable[[Any], str] | None = None,
    ) -> "CacheKey":
        """Create a CacheKey from raw components.

        Args:
            prefix: Cache key prefix.
            canonical_spec: The canonicalized query specification.
            salt: The current invalidation salt, if any.
            context: Additional context for key generation.
            meta_suffix: Suffix of the companion metadata key.
            hash_func: Optional custom hash function.

        Returns:
            A new CacheKey instance.
        """
        from querycache.utils.hashing import hash_value

        hasher = hash_func or hash_value

        return cls(
            prefix=prefix,
            spec_hash=hasher(dict(canonical_spec)),
            context_hash=hasher(dict(context)) if context else None,
            salt=salt or None,
            meta_suffix=meta_suffix,
        )
