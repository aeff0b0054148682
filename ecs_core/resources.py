"""Type-keyed storage for singleton values (frame rate, world size, ...)."""

import logging
from collections.abc import Iterator
from typing import Any, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")


class Resources:
    """
    Holds at most one value per type.

    Lookups return the stored object itself, so mutating a returned value
    mutates the resource.
    """

    def __init__(self) -> None:
        self._data: dict[type, Any] = {}

    def add(self, resource: Any) -> None:
        """Store a resource, replacing any existing value of the same type."""
        resource_type = type(resource)
        if resource_type in self._data:
            logger.debug(f"Replacing resource {resource_type.__name__}")
        self._data[resource_type] = resource

    def get(self, resource_type: type[T]) -> T | None:
        return self._data.get(resource_type)

    # Values are shared references, so a mutable lookup is the same lookup.
    get_mut = get

    def remove(self, resource_type: type[T]) -> T | None:
        """Remove a resource and return it, or None if it was never added."""
        return self._data.pop(resource_type, None)

    def items(self) -> Iterator[tuple[type, Any]]:
        return iter(list(self._data.items()))

    def __contains__(self, resource_type: object) -> bool:
        return resource_type in self._data

    def __len__(self) -> int:
        return len(self._data)
