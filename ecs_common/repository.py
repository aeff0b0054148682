"""
Abstract repository interface for world snapshot persistence.

This module defines the contract that any database implementation must follow,
allowing easy swapping between SQLite, PostgreSQL, MySQL, etc.
"""

from abc import ABC, abstractmethod

from .models import WorldSnapshot


class WorldRepository(ABC):
    """
    Abstract base class for snapshot storage operations.

    Implementations handle their own connection management.
    """

    @abstractmethod
    async def save_snapshot(self, snapshot: WorldSnapshot) -> None:
        """
        Save a snapshot, replacing any existing snapshot with the same name.

        Args:
            snapshot: WorldSnapshot object to persist
        """
        pass

    @abstractmethod
    async def get_snapshot(self, name: str) -> WorldSnapshot | None:
        """
        Retrieve a snapshot with all its entities.

        Args:
            name: Name of the snapshot

        Returns:
            WorldSnapshot if found, None otherwise
        """
        pass

    @abstractmethod
    async def list_snapshots(self) -> list[WorldSnapshot]:
        """
        List all snapshots (without entity rows for efficiency).

        Returns:
            List of WorldSnapshot objects with entity_count set and no entities
        """
        pass

    @abstractmethod
    async def delete_snapshot(self, name: str) -> None:
        """
        Delete a snapshot and its entities.

        Raises:
            SnapshotNotFoundError: If no snapshot has that name
        """
        pass

    @abstractmethod
    async def initialize(self) -> None:
        """
        Initialize the database (create tables, etc.).

        Called once before first use.
        """
        pass

    @abstractmethod
    async def close(self) -> None:
        """Close database connections and cleanup resources."""
        pass
