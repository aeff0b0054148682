"""
ECS Core module.

In-memory entity-component-system: a World owns a Resources store of
type-keyed singletons and an Entities store of bitmask-tagged component slots,
which Query objects filter.
"""

from .entities import Entities
from .query import Query, QueryResult
from .resources import Resources
from .world import World

__all__ = ["Entities", "Query", "QueryResult", "Resources", "World"]
