"""Entity registry.

Append-only store for the LINK and IMAGE entities created while converting
markup. Keys are issued from a counter and never reused.
"""

import logging
from collections.abc import Iterator
from itertools import count

from .models import EntityInstance, Mutability

logger = logging.getLogger(__name__)


class EntityRegistry:
    """Creates entities and hands them back keyed by id."""

    def __init__(self) -> None:
        self._entities: dict[str, EntityInstance] = {}
        self._counter = count(1)

    def create(self, type: str, mutability: Mutability, data: dict[str, str] | None = None) -> str:
        """Register a new entity and return its key."""
        key = str(next(self._counter))
        self._entities[key] = EntityInstance(type=type, mutability=mutability, data=data or {})
        logger.debug("Created %s entity %s", type, key)
        return key

    def get(self, key: str) -> EntityInstance:
        return self._entities[key]

    def as_dict(self) -> dict[str, EntityInstance]:
        return dict(self._entities)

    def __contains__(self, key: object) -> bool:
        return key in self._entities

    def __iter__(self) -> Iterator[str]:
        return iter(self._entities)

    def __len__(self) -> int:
        return len(self._entities)
