"""
The World facade.

A World owns one Resources store and one Entities store and is the entry point
applications use; Entities, Query and Resources can also be used on their own.
"""

import logging
from collections.abc import Iterable
from typing import Any, TypeVar

from ecs_common.errors import ComponentCodecError
from ecs_common.models import EntityRecord, WorldSnapshot

from . import codec
from .entities import Entities
from .query import Query
from .resources import Resources

logger = logging.getLogger(__name__)

T = TypeVar("T")


class World:
    """
    Resources plus entities.

    Example:
        world = World()
        world.register_component(Location)
        world.register_component(Size)
        world.create_entity().with_component(Location(42.0, 24.0)).with_component(Size(10.0))
        indices, (locations, sizes) = world.query().with_component(Location).with_component(Size).run()
    """

    def __init__(self) -> None:
        self.resources = Resources()
        self.entities = Entities()

    def add_resource(self, resource: Any) -> None:
        """Add a resource, replacing any existing resource of the same type."""
        self.resources.add(resource)

    def get_resource(self, resource_type: type[T]) -> T | None:
        """Return the resource of the given type, or None if it was never added."""
        return self.resources.get(resource_type)

    def get_resource_mut(self, resource_type: type[T]) -> T | None:
        """Same as get_resource(); the returned object is the stored one."""
        return self.resources.get_mut(resource_type)

    def remove_resource(self, resource_type: type[T]) -> T | None:
        """Remove a resource. Returns None if it wasn't present, otherwise the value."""
        return self.resources.remove(resource_type)

    def register_component(self, component_type: type) -> None:
        self.entities.register_component(component_type)

    def create_entity(self) -> Entities:
        return self.entities.create_entity()

    def query(self) -> Query:
        return Query(self.entities)

    def delete_component_by_entity_id(self, component_type: type, entity_id: int) -> None:
        self.entities.delete_component_by_entity_id(component_type, entity_id)

    def add_component_to_entity_by_id(self, entity_id: int, component: Any) -> None:
        self.entities.add_component_by_entity_id(entity_id, component)

    def delete_entity_by_id(self, entity_id: int) -> None:
        self.entities.delete_by_id(entity_id)

    def snapshot(self, name: str) -> WorldSnapshot:
        """
        Capture the world as a WorldSnapshot.

        Raises:
            ComponentCodecError: If a component or resource cannot be encoded
        """
        component_types = self.entities.component_types()
        records = []
        for entity_id, mask in enumerate(self.entities.map):
            components = {}
            for component_type in component_types:
                if mask & self.entities.bit_masks[component_type]:
                    value = self.entities.components[component_type][entity_id]
                    components[codec.type_name(component_type)] = codec.encode(value)
            records.append(EntityRecord(id=entity_id, mask=mask, components=components))

        resources = {
            codec.type_name(resource_type): codec.encode(value)
            for resource_type, value in self.resources.items()
        }
        return WorldSnapshot(
            name=name,
            component_types=[codec.type_name(t) for t in component_types],
            entities=records,
            resources=resources,
        )

    @classmethod
    def from_snapshot(
        cls,
        snapshot: WorldSnapshot,
        component_types: Iterable[type],
        resource_types: Iterable[type] = (),
    ) -> "World":
        """
        Rebuild a world from a snapshot.

        Args:
            snapshot: Snapshot to restore
            component_types: Classes for every component type named in the snapshot
            resource_types: Classes for every resource type named in the snapshot

        Raises:
            ComponentCodecError: If the snapshot names a type that wasn't supplied,
                holds data that doesn't decode, or an entity mask disagrees with
                the components stored for it
        """
        components_by_name = codec.type_registry(component_types)
        resources_by_name = codec.type_registry(resource_types)
        world = cls()

        # Registration order fixes the bit of every type.
        for name in snapshot.component_types:
            world.register_component(codec.resolve(name, components_by_name))

        for expected_id, record in enumerate(sorted(snapshot.entities, key=lambda r: r.id)):
            if record.id != expected_id:
                raise ComponentCodecError(
                    f"Snapshot {snapshot.name} has a gap in entity ids at {expected_id}"
                )
            world.entities.push_empty_slot()
            for name, data in record.components.items():
                component_type = codec.resolve(name, components_by_name)
                world.add_component_to_entity_by_id(
                    record.id, codec.decode(data, component_type)
                )
            if world.entities.map[record.id] != record.mask:
                raise ComponentCodecError(
                    f"Entity {record.id} mask {record.mask} does not match its components"
                )

        for name, data in snapshot.resources.items():
            world.add_resource(codec.decode(data, codec.resolve(name, resources_by_name)))

        logger.debug(
            f"Restored world {snapshot.name} with {len(world.entities)} entity slots"
        )
        return world
