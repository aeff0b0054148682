"""
Unit tests for the repository layer.

Tests the SQLite snapshot repository to ensure worlds are saved, listed,
restored and deleted correctly.
"""

import os
import tempfile
from dataclasses import dataclass
from datetime import UTC, datetime, timedelta

import pytest
import pytest_asyncio

from ecs_common.errors import ComponentCodecError, SnapshotNotFoundError
from ecs_common.models import EntityRecord, WorldSnapshot
from ecs_core.world import World
from ecs_persistence.sqlite_repository import SQLiteWorldRepository


@dataclass
class Position:
    x: int
    y: int


@dataclass
class Tag:
    label: str


@pytest_asyncio.fixture
async def temp_db():
    """Create a temporary database file for testing."""
    fd, path = tempfile.mkstemp(suffix=".db")
    os.close(fd)

    repo = SQLiteWorldRepository(path)
    await repo.initialize()

    yield repo

    await repo.close()
    if os.path.exists(path):
        os.unlink(path)


def build_world() -> World:
    world = World()
    world.register_component(Position)
    world.register_component(Tag)
    world.create_entity().with_component(Position(1, 2)).with_component(Tag("hero"))
    world.create_entity().with_component(Position(3, 4))
    world.create_entity().with_component(Tag("ghost"))
    world.delete_entity_by_id(2)
    world.add_resource(42)
    return world


@pytest.mark.asyncio
async def test_save_and_get_snapshot(temp_db):
    """A saved snapshot comes back unchanged."""
    repo = temp_db
    snapshot = build_world().snapshot("level-1")

    await repo.save_snapshot(snapshot)
    retrieved = await repo.get_snapshot("level-1")

    assert retrieved is not None
    assert retrieved.name == "level-1"
    assert retrieved.component_types == snapshot.component_types
    assert retrieved.entities == snapshot.entities
    assert retrieved.resources == {"builtins:int": 42}
    assert abs((retrieved.created_at - snapshot.created_at).total_seconds()) < 1


@pytest.mark.asyncio
async def test_get_nonexistent_snapshot(temp_db):
    assert await temp_db.get_snapshot("missing") is None


@pytest.mark.asyncio
async def test_restore_world_from_saved_snapshot(temp_db):
    """A world restored from the database answers queries like the original."""
    repo = temp_db
    await repo.save_snapshot(build_world().snapshot("level-1"))

    snapshot = await repo.get_snapshot("level-1")
    world = World.from_snapshot(snapshot, [Position, Tag], [int])

    indices, (positions, tags) = (
        world.query().with_component(Position).with_component(Tag).run()
    )
    assert indices == [0]
    assert positions == [Position(1, 2)]
    assert tags == [Tag("hero")]
    assert world.get_resource(int) == 42
    assert world.entities.map == [3, 1, 0]


@pytest.mark.asyncio
async def test_save_replaces_existing_snapshot(temp_db):
    """Saving under an existing name replaces the old entities."""
    repo = temp_db
    await repo.save_snapshot(build_world().snapshot("slot"))

    world = World()
    world.register_component(Tag)
    world.create_entity().with_component(Tag("only"))
    await repo.save_snapshot(world.snapshot("slot"))

    retrieved = await repo.get_snapshot("slot")
    assert retrieved is not None
    assert len(retrieved.entities) == 1
    assert retrieved.entities[0].components == {f"{__name__}:Tag": {"label": "only"}}
    assert len(await repo.list_snapshots()) == 1


@pytest.mark.asyncio
async def test_large_mask_survives_storage(temp_db):
    """Masks wider than 64 bits are stored without loss."""
    repo = temp_db
    snapshot = WorldSnapshot(
        name="wide", entities=[EntityRecord(id=0, mask=1 << 70, components={})]
    )

    await repo.save_snapshot(snapshot)
    retrieved = await repo.get_snapshot("wide")

    assert retrieved.entities[0].mask == 1 << 70


@pytest.mark.asyncio
async def test_list_snapshots(temp_db):
    """Listings are newest first and count only live entities."""
    repo = temp_db
    now = datetime.now(UTC)

    older = build_world().snapshot("older")
    older.created_at = now - timedelta(hours=1)
    newer = build_world().snapshot("newer")
    newer.created_at = now

    await repo.save_snapshot(older)
    await repo.save_snapshot(newer)

    snapshots = await repo.list_snapshots()

    assert [s.name for s in snapshots] == ["newer", "older"]
    assert all(s.entities == [] for s in snapshots)
    assert [s.entity_count for s in snapshots] == [2, 2]
    assert snapshots[0].to_summary_dict()["entity_count"] == 2


@pytest.mark.asyncio
async def test_list_snapshots_empty(temp_db):
    assert await temp_db.list_snapshots() == []


@pytest.mark.asyncio
async def test_delete_snapshot(temp_db):
    repo = temp_db
    await repo.save_snapshot(build_world().snapshot("doomed"))

    await repo.delete_snapshot("doomed")

    assert await repo.get_snapshot("doomed") is None
    assert await repo.list_snapshots() == []


@pytest.mark.asyncio
async def test_delete_snapshot_cascades_entities(temp_db):
    """Deleting a snapshot removes its entity rows too."""
    repo = temp_db
    await repo.save_snapshot(build_world().snapshot("doomed"))

    await repo.delete_snapshot("doomed")

    conn = await repo._get_connection()
    cursor = await conn.execute("SELECT COUNT(*) FROM entities")
    row = await cursor.fetchone()
    assert row[0] == 0


@pytest.mark.asyncio
async def test_delete_nonexistent_snapshot(temp_db):
    with pytest.raises(SnapshotNotFoundError, match="missing"):
        await temp_db.delete_snapshot("missing")


@pytest.mark.asyncio
async def test_initialize_is_idempotent(temp_db):
    repo = temp_db
    await repo.save_snapshot(build_world().snapshot("kept"))

    await repo.initialize()

    assert await repo.get_snapshot("kept") is not None


@dataclass
class Stamp:
    at: datetime


@pytest.mark.asyncio
async def test_unsavable_world_raises_codec_error(temp_db):
    """A world holding non-JSON data fails with ComponentCodecError and saves nothing."""
    repo = temp_db
    world = World()
    world.register_component(Stamp)
    world.create_entity().with_component(Stamp(at=datetime(2020, 1, 1)))

    with pytest.raises(ComponentCodecError):
        await repo.save_snapshot(world.snapshot("s"))

    assert await repo.list_snapshots() == []
