"""Queries select entities by the set of component types they carry."""

from typing import Any, NamedTuple

from ecs_common.errors import ComponentNotRegisteredError

from .entities import Entities


class QueryResult(NamedTuple):
    """
    Matching entity ids and, per requested type, their components.

    components[i][j] is the component of the i-th requested type belonging to
    entity indices[j].
    """

    indices: list[int]
    components: list[list[Any]]


class Query:
    """Builder for a component-mask query over an Entities store."""

    def __init__(self, entities: Entities) -> None:
        self.entities = entities
        self.map = 0
        self.type_ids: list[type] = []

    def with_component(self, component_type: type) -> "Query":
        bitmask = self.entities.get_bitmask(component_type)
        if bitmask is None:
            raise ComponentNotRegisteredError(component_type)
        self.map |= bitmask
        self.type_ids.append(component_type)
        return self

    def run(self) -> QueryResult:
        """Return every live entity whose mask contains all requested bits."""
        indices = [
            index
            for index, entity_map in enumerate(self.entities.map)
            if entity_map != 0 and entity_map & self.map == self.map
        ]
        results = []
        for component_type in self.type_ids:
            components = self.entities.components[component_type]
            results.append([components[index] for index in indices])
        return QueryResult(indices, results)
