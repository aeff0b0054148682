"""
ECS Common module.

This module contains shared exceptions, snapshot models and the repository
interface used across the ECS packages (core, persistence, admin).

The common module has no dependencies on other ecs_* modules, making it
a pure domain layer that can be imported by any component.
"""

from .errors import (
    ComponentCodecError,
    ComponentNotRegisteredError,
    CreateComponentNeverCalledError,
    EcsError,
    EntityDoesNotExistError,
    SnapshotNotFoundError,
)
from .models import EntityRecord, WorldSnapshot
from .repository import WorldRepository

__all__ = [
    "ComponentCodecError",
    "ComponentNotRegisteredError",
    "CreateComponentNeverCalledError",
    "EcsError",
    "EntityDoesNotExistError",
    "EntityRecord",
    "SnapshotNotFoundError",
    "WorldRepository",
    "WorldSnapshot",
]
