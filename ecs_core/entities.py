"""
Entity and component storage.

Every entity is a slot index shared by all component lists. Each registered
component type owns one bit; an entity's mask is the OR of the bits of the
components it currently carries. A slot whose mask is 0 is free and gets
reused by the next create_entity() call.
"""

import logging
from collections.abc import Iterator
from typing import Any

from ecs_common.errors import (
    ComponentNotRegisteredError,
    CreateComponentNeverCalledError,
    EntityDoesNotExistError,
)

logger = logging.getLogger(__name__)


class Entities:
    """Column store of components, one list per registered type."""

    def __init__(self) -> None:
        self.components: dict[type, list[Any | None]] = {}
        self.bit_masks: dict[type, int] = {}
        self.map: list[int] = []
        self.first_empty_index: int | None = None

    def register_component(self, component_type: type) -> None:
        """
        Register a component type and assign it the next free bit.

        Registering the same type again is a no-op. Types registered after
        entities exist get a slot (empty) for every existing entity.
        """
        if component_type in self.bit_masks:
            return
        self.components[component_type] = [None] * len(self.map)
        self.bit_masks[component_type] = 1 << (len(self.components) - 1)
        logger.debug(
            f"Registered component {component_type.__name__} "
            f"with bitmask {self.bit_masks[component_type]}"
        )

    def create_entity(self) -> "Entities":
        """
        Start building an entity and return self for with_component() chaining.

        The lowest free slot is reused; a new slot is appended otherwise.
        """
        for index, mask in enumerate(self.map):
            if mask == 0:
                for component_list in self.components.values():
                    component_list[index] = None
                self.first_empty_index = index
                break
        else:
            self.first_empty_index = self.push_empty_slot()
        logger.debug(f"Building entity {self.first_empty_index}")
        return self

    def push_empty_slot(self) -> int:
        """Append a free slot and return its entity id."""
        for component_list in self.components.values():
            component_list.append(None)
        self.map.append(0)
        return len(self.map) - 1

    def with_component(self, component: Any) -> "Entities":
        """
        Attach a component to the entity currently being built.

        Raises:
            ComponentNotRegisteredError: If the component's type was never registered
            CreateComponentNeverCalledError: If create_entity() was never called
        """
        component_type = type(component)
        if component_type not in self.components:
            raise ComponentNotRegisteredError(component_type)
        index = self.first_empty_index
        if index is None or index >= len(self.map):
            raise CreateComponentNeverCalledError()
        self.components[component_type][index] = component
        self.map[index] |= self.bit_masks[component_type]
        return self

    def get_bitmask(self, component_type: type) -> int | None:
        return self.bit_masks.get(component_type)

    def delete_component_by_entity_id(self, component_type: type, entity_id: int) -> None:
        """Remove a component from an entity; absent components are left absent."""
        mask = self._mask_for(component_type)
        self._check_entity(entity_id)
        self.map[entity_id] &= ~mask
        self.components[component_type][entity_id] = None

    def add_component_by_entity_id(self, entity_id: int, component: Any) -> None:
        """Attach (or replace) a component on an existing entity slot."""
        component_type = type(component)
        mask = self._mask_for(component_type)
        self._check_entity(entity_id)
        self.components[component_type][entity_id] = component
        self.map[entity_id] |= mask

    def delete_by_id(self, entity_id: int) -> None:
        """Free an entity slot so that create_entity() can reuse it."""
        self._check_entity(entity_id)
        self.map[entity_id] = 0
        for component_list in self.components.values():
            component_list[entity_id] = None
        logger.debug(f"Deleted entity {entity_id}")

    def get_component(self, entity_id: int, component_type: type) -> Any | None:
        """Return an entity's component of the given type, or None if it has none."""
        mask = self._mask_for(component_type)
        self._check_entity(entity_id)
        if self.map[entity_id] & mask == 0:
            return None
        return self.components[component_type][entity_id]

    def is_alive(self, entity_id: int) -> bool:
        return 0 <= entity_id < len(self.map) and self.map[entity_id] != 0

    def entity_ids(self) -> Iterator[int]:
        """Ids of all entities carrying at least one component."""
        return (index for index, mask in enumerate(self.map) if mask != 0)

    def component_types(self) -> list[type]:
        """Registered component types in registration (bit) order."""
        return list(self.bit_masks)

    def __len__(self) -> int:
        return len(self.map)

    def _mask_for(self, component_type: type) -> int:
        mask = self.bit_masks.get(component_type)
        if mask is None:
            raise ComponentNotRegisteredError(component_type)
        return mask

    def _check_entity(self, entity_id: int) -> None:
        if not 0 <= entity_id < len(self.map):
            raise EntityDoesNotExistError(entity_id)
