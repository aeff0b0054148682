"""
Data models for world snapshots.

These models represent a saved world independently of the storage mechanism.
Component and resource values are kept in their encoded (JSON-compatible) form;
see ecs_core.codec for how live objects are converted.
"""

from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import Any


@dataclass
class EntityRecord:
    """
    A single entity slot as saved in a snapshot.

    Dead slots (mask 0) are saved too so that entity ids survive a restore.
    """

    id: int
    mask: int
    components: dict[str, Any] = field(default_factory=dict)  # type name -> data

    def to_dict(self) -> dict[str, Any]:
        """Convert entity record to dictionary format (for JSON serialization)."""
        return {"id": self.id, "mask": self.mask, "components": self.components}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "EntityRecord":
        """Create entity record from dictionary format."""
        return cls(
            id=data["id"],
            mask=data.get("mask", 0),
            components=dict(data.get("components") or {}),
        )


@dataclass
class WorldSnapshot:
    """
    A saved world: registered component types, entity slots and resources.

    component_types is kept in registration order, which is what fixes the
    bit assigned to each type.
    """

    name: str
    component_types: list[str] = field(default_factory=list)
    entities: list[EntityRecord] = field(default_factory=list)
    resources: dict[str, Any] = field(default_factory=dict)
    created_at: datetime = field(default_factory=lambda: datetime.now(UTC))
    entity_count: int | None = None  # Set by listings that skip entity rows

    def live_entities(self) -> list[EntityRecord]:
        return [record for record in self.entities if record.mask != 0]

    def to_dict(self) -> dict[str, Any]:
        """Convert snapshot to dictionary format (for JSON output)."""
        return {
            "name": self.name,
            "component_types": list(self.component_types),
            "entities": [record.to_dict() for record in self.entities],
            "resources": self.resources,
            "created_at": self.created_at.isoformat(),
        }

    def to_summary_dict(self) -> dict[str, Any]:
        """Convert snapshot to summary format (without entities, for listings)."""
        return {
            "name": self.name,
            "component_types": list(self.component_types),
            "entity_count": self.entity_count
            if self.entity_count is not None
            else len(self.live_entities()),
            "resource_types": sorted(self.resources),
            "created_at": self.created_at.isoformat(),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "WorldSnapshot":
        """Create snapshot from dictionary format."""
        created_at = data.get("created_at")
        return cls(
            name=data["name"],
            component_types=list(data.get("component_types") or []),
            entities=[EntityRecord.from_dict(e) for e in data.get("entities") or []],
            resources=dict(data.get("resources") or {}),
            created_at=datetime.fromisoformat(created_at)
            if created_at
            else datetime.now(UTC),
        )
