"""
SQLite implementation of the world snapshot repository.

Uses aiosqlite for async operations.
Can be easily replaced with PostgreSQL/MySQL implementations.
"""

import json
import logging
from datetime import datetime

import aiosqlite

from ecs_common.errors import SnapshotNotFoundError
from ecs_common.models import EntityRecord, WorldSnapshot
from ecs_common.repository import WorldRepository

logger = logging.getLogger(__name__)


class SQLiteWorldRepository(WorldRepository):
    """
    SQLite-based snapshot storage implementation.

    Uses a single database file with two tables:
    - snapshots: One row per saved world (component types, resources)
    - entities: One row per entity slot with foreign key to snapshots
    """

    def __init__(self, db_path: str = "ecs_worlds.db"):
        """
        Initialize the SQLite repository.

        Args:
            db_path: Path to the SQLite database file
        """
        self.db_path = db_path
        self._connection: aiosqlite.Connection | None = None

    async def _get_connection(self) -> aiosqlite.Connection:
        """Get or create database connection."""
        if self._connection is None:
            self._connection = await aiosqlite.connect(self.db_path)
            # Needed for ON DELETE CASCADE
            await self._connection.execute("PRAGMA foreign_keys = ON")
        return self._connection

    async def initialize(self) -> None:
        """
        Create database tables if they don't exist.

        Masks are stored as text because they grow past 64 bits once more than
        63 component types are registered.
        """
        conn = await self._get_connection()

        await conn.execute("""
            CREATE TABLE IF NOT EXISTS snapshots (
                name TEXT PRIMARY KEY,
                component_types TEXT NOT NULL,
                resources TEXT NOT NULL,
                created_at TEXT NOT NULL
            )
        """)

        await conn.execute("""
            CREATE TABLE IF NOT EXISTS entities (
                snapshot_name TEXT NOT NULL,
                entity_id INTEGER NOT NULL,
                mask TEXT NOT NULL,
                components TEXT NOT NULL,
                PRIMARY KEY (snapshot_name, entity_id),
                FOREIGN KEY (snapshot_name) REFERENCES snapshots(name) ON DELETE CASCADE
            )
        """)

        await conn.commit()

    async def close(self) -> None:
        """Close the database connection."""
        if self._connection:
            await self._connection.close()
            self._connection = None

    async def save_snapshot(self, snapshot: WorldSnapshot) -> None:
        """
        Save a snapshot, replacing any snapshot with the same name.

        Args:
            snapshot: WorldSnapshot object to persist
        """
        conn = await self._get_connection()

        try:
            await conn.execute("DELETE FROM snapshots WHERE name = ?", (snapshot.name,))
            await conn.execute(
                """
                INSERT INTO snapshots (name, component_types, resources, created_at)
                VALUES (?, ?, ?, ?)
                """,
                (
                    snapshot.name,
                    json.dumps(snapshot.component_types),
                    json.dumps(snapshot.resources),
                    snapshot.created_at.isoformat(),
                ),
            )
            await conn.executemany(
                """
                INSERT INTO entities (snapshot_name, entity_id, mask, components)
                VALUES (?, ?, ?, ?)
                """,
                [
                    (
                        snapshot.name,
                        record.id,
                        str(record.mask),
                        json.dumps(record.components),
                    )
                    for record in snapshot.entities
                ],
            )
            await conn.commit()
        except Exception:
            await conn.rollback()
            raise

        logger.info(
            f"Saved snapshot {snapshot.name} with {len(snapshot.entities)} entity slots"
        )

    async def get_snapshot(self, name: str) -> WorldSnapshot | None:
        """
        Retrieve a snapshot with all its entities.

        Args:
            name: Name of the snapshot

        Returns:
            WorldSnapshot if found, None otherwise
        """
        conn = await self._get_connection()

        cursor = await conn.execute(
            "SELECT name, component_types, resources, created_at FROM snapshots WHERE name = ?",
            (name,),
        )
        row = await cursor.fetchone()

        if row is None:
            return None

        name, component_types_json, resources_json, created_at_str = row

        cursor = await conn.execute(
            """
            SELECT entity_id, mask, components
            FROM entities
            WHERE snapshot_name = ?
            ORDER BY entity_id
            """,
            (name,),
        )
        rows = await cursor.fetchall()

        entities = [
            EntityRecord(id=entity_id, mask=int(mask), components=json.loads(components))
            for entity_id, mask, components in rows
        ]

        return WorldSnapshot(
            name=name,
            component_types=json.loads(component_types_json),
            entities=entities,
            resources=json.loads(resources_json),
            created_at=datetime.fromisoformat(created_at_str),
        )

    async def list_snapshots(self) -> list[WorldSnapshot]:
        """
        List all snapshots (without entity rows for efficiency).

        Returns:
            List of WorldSnapshot objects, newest first, with entity_count
            holding the number of live entities
        """
        conn = await self._get_connection()

        cursor = await conn.execute(
            """
            SELECT s.name, s.component_types, s.resources, s.created_at,
                   (SELECT COUNT(*) FROM entities e
                    WHERE e.snapshot_name = s.name AND e.mask != '0')
            FROM snapshots s
            ORDER BY s.created_at DESC
            """
        )
        rows = await cursor.fetchall()

        return [
            WorldSnapshot(
                name=name,
                component_types=json.loads(component_types_json),
                resources=json.loads(resources_json),
                created_at=datetime.fromisoformat(created_at_str),
                entity_count=entity_count,
                entities=[],  # Don't load entities for listing efficiency
            )
            for name, component_types_json, resources_json, created_at_str, entity_count in rows
        ]

    async def delete_snapshot(self, name: str) -> None:
        """
        Delete a snapshot and its entity rows.

        Raises:
            SnapshotNotFoundError: If no snapshot has that name
        """
        conn = await self._get_connection()

        cursor = await conn.execute("DELETE FROM snapshots WHERE name = ?", (name,))
        await conn.commit()

        if cursor.rowcount == 0:
            raise SnapshotNotFoundError(name)

        logger.info(f"Deleted snapshot {name}")
