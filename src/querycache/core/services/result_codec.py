"""Result/metadata codec.

Maps between what the orchestration layer hands us (hydrated result
objects and two pagination counters) and what the backend stores
(an identifier list and a small metadata record). Kept apart from the
session so the storage representation can change on its own.
"""

from collections.abc import Callable, Sequence
from typing import Any

from querycache.core.entities.cached_result import CachedMeta
from querycache.core.exceptions import MalformedCacheEntryError
from querycache.core.interfaces.serializer import ISerializer

_META_FIELDS = ("found_posts", "max_num_pages")


def default_id_getter(result: Any) -> Any:
    """Extract the identifier of a result object.

    Plain ``int``/``str`` values are identifiers already; otherwise the
    ``id`` attribute or the ``"id"`` key is used.

    Raises:
        MalformedCacheEntryError: If no identifier can be found.
    """
    if isinstance(result, (int, str)) and not isinstance(result, bool):
        return result
    if isinstance(result, dict):
        if "id" in result:
            return result["id"]
    elif hasattr(result, "id"):
        return result.id
    raise MalformedCacheEntryError(
        f"Cannot extract an identifier from {type(result).__name__}"
    )


class ResultCodec:
    """Encodes identifier lists and pagination metadata for storage."""

    def __init__(
        self,
        serializer: ISerializer,
        id_getter: Callable[[Any], Any] = default_id_getter,
    ) -> None:
        self._serializer = serializer
        self._id_getter = id_getter

    def extract_ids(self, results: Sequence[Any]) -> tuple[Any, ...]:
        """Return the identifiers of the given results, in order."""
        return tuple(self._id_getter(result) for result in results)

    def encode_ids(self, identifiers: Sequence[Any]) -> bytes:
        return self._serializer.serialize(list(identifiers))

    def decode_ids(self, data: bytes) -> tuple[Any, ...]:
        """Decode a stored identifier list.

        Raises:
            MalformedCacheEntryError: If the value is not a list of
                scalar identifiers.
        """
        value = self._serializer.deserialize(data)
        if not isinstance(value, list):
            raise MalformedCacheEntryError(
                f"Expected an identifier list, got {type(value).__name__}"
            )
        for identifier in value:
            if isinstance(identifier, bool) or not isinstance(identifier, (int, str)):
                raise MalformedCacheEntryError(
                    f"Invalid identifier in cached result: {identifier!r}"
                )
        return tuple(value)

    def encode_meta(self, meta: CachedMeta) -> bytes:
        return self._serializer.serialize(
            {
                "found_posts": meta.found_posts,
                "max_num_pages": meta.max_num_pages,
            }
        )

    def decode_meta(self, data: bytes) -> CachedMeta:
        """Decode a stored metadata record.

        Raises:
            MalformedCacheEntryError: If the record is missing a counter
                or a counter is not a non-negative integer.
        """
        value = self._serializer.deserialize(data)
        if not isinstance(value, dict):
            raise MalformedCacheEntryError(
                f"Expected a metadata record, got {type(value).__name__}"
            )
        counters: dict[str, int] = {}
        for name in _META_FIELDS:
            counter = value.get(name)
            if isinstance(counter, bool) or not isinstance(counter, int) or counter < 0:
                raise MalformedCacheEntryError(
                    f"Invalid {name} in cached metadata: {counter!r}"
                )
            counters[name] = counter
        return CachedMeta(**counters)
