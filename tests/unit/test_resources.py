"""Unit tests for ecs_core.resources and the World resource methods."""

from dataclasses import dataclass

from ecs_core.resources import Resources
from ecs_core.world import World


@dataclass
class WorldWidth:
    value: float


@dataclass
class FpsResource:
    value: int


class TestResources:
    """Test suite for the Resources store."""

    def test_add_resource(self):
        resources = Resources()
        resources.add(WorldWidth(100.0))

        assert WorldWidth in resources
        assert resources.get(WorldWidth).value == 100.0

    def test_get_resource(self):
        resources = Resources()
        assert resources.get(WorldWidth) is None

        resources.add(WorldWidth(100.0))

        assert resources.get(WorldWidth) == WorldWidth(100.0)

    def test_get_mut(self):
        """Changes made through get_mut are visible to later lookups."""
        resources = Resources()
        assert resources.get_mut(WorldWidth) is None
        resources.add(WorldWidth(100.0))

        world_width = resources.get_mut(WorldWidth)
        world_width.value += 100.0

        assert resources.get(WorldWidth) == WorldWidth(200.0)

    def test_add_replaces_same_type(self):
        resources = Resources()
        resources.add(WorldWidth(1.0))
        resources.add(WorldWidth(2.0))

        assert len(resources) == 1
        assert resources.get(WorldWidth) == WorldWidth(2.0)

    def test_remove(self):
        resources = Resources()
        resources.add(WorldWidth(100.0))

        removed = resources.remove(WorldWidth)

        assert removed == WorldWidth(100.0)
        assert resources.get(WorldWidth) is None
        assert resources.remove(WorldWidth) is None

    def test_items(self):
        resources = Resources()
        resources.add(WorldWidth(1.0))
        resources.add(3)

        assert dict(resources.items()) == {WorldWidth: WorldWidth(1.0), int: 3}


class TestWorldResources:
    """Test suite for resources reached through the World facade."""

    def test_create_and_get_resources_immutably(self):
        world = World()
        assert world.get_resource(FpsResource) is None

        world.add_resource(FpsResource(60))

        assert world.get_resource(FpsResource) == FpsResource(60)

    def test_get_resources_mutably(self):
        world = World()
        assert world.get_resource_mut(FpsResource) is None
        world.add_resource(FpsResource(60))

        fps = world.get_resource_mut(FpsResource)
        fps.value += 1

        assert world.get_resource(FpsResource) == FpsResource(61)

    def test_immutable_resource_updated_by_re_adding(self):
        world = World()
        world.add_resource(1)

        world.add_resource(world.get_resource(int) + 1)

        assert world.get_resource(int) == 2

    def test_delete_resource(self):
        world = World()
        assert world.remove_resource(FpsResource) is None

        world.add_resource(FpsResource(60))

        assert world.remove_resource(FpsResource) == FpsResource(60)
        assert world.get_resource(FpsResource) is None
