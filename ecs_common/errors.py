"""Exceptions raised by the ECS packages."""


class EcsError(Exception):
    """Base class for every error raised by the ECS packages."""


class CreateComponentNeverCalledError(EcsError):
    def __init__(self) -> None:
        super().__init__(
            "Attempting to add component to an entity without creating component first"
        )


class ComponentNotRegisteredError(EcsError):
    def __init__(self, component_type: type | None = None) -> None:
        self.component_type = component_type
        super().__init__("Attempted to reference a component that wasn't registered")


class EntityDoesNotExistError(EcsError):
    def __init__(self, entity_id: int | None = None) -> None:
        self.entity_id = entity_id
        super().__init__("Attempted to reference an entity that doesn't exist")


class SnapshotNotFoundError(EcsError):
    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"Snapshot not found: {name}")


class ComponentCodecError(EcsError):
    """A component or resource could not be encoded or decoded for a snapshot."""
