"""In-memory entity loader implementation."""

from collections.abc import Iterable, Mapping, Sequence
from typing import Any


class InMemoryEntityLoader:
    """Entity loader backed by a dictionary of identifier -> entity.

    Identifiers with no entity are skipped, which mirrors a store where
    the content was deleted after its identifier got cached.
    """

    def __init__(self, entities: Mapping[Any, Any] | None = None) -> None:
        self._entities: dict[Any, Any] = dict(entities or {})
        self.calls = 0

    def add(self, identifier: Any, entity: Any) -> None:
        self._entities[identifier] = entity

    def remove(self, identifier: Any) -> None:
        self._entities.pop(identifier, None)

    def extend(self, entities: Iterable[tuple[Any, Any]]) -> None:
        self._entities.update(entities)

    async def hydrate(self, identifiers: Sequence[Any]) -> list[Any]:
        self.calls += 1
        return [
            self._entities[identifier]
            for identifier in identifiers
            if identifier in self._entities
        ]
