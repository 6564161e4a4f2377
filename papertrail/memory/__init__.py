"""Entity data models and the entity graph store."""

from papertrail.memory.entities import (
    Entity,
    EntityGraph,
    EntityType,
    PositionedEntity,
    Relation,
)

__all__ = [
    "Entity",
    "EntityGraph",
    "EntityType",
    "PositionedEntity",
    "Relation",
]
