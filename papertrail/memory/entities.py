"""Entity models for the Paper Trail graph.

Entities and relations are produced by the extraction pipeline and only read
by the graph view. Field aliases accept the camelCase keys written by the
browser app so its saved graphs load unchanged.
"""

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

EntityType = Literal["person", "organization", "topic", "location", "source"]


class Entity(BaseModel):
    """A named entity mentioned in one or more articles."""

    model_config = ConfigDict(populate_by_name=True)

    id: str
    name: str
    type: EntityType
    article_ids: list[str] = Field(default_factory=list, alias="articleIds")
    mention_count: int = Field(default=0, ge=0, alias="mentionCount")


class Relation(BaseModel):
    """Co-occurrence link between two entities."""

    model_config = ConfigDict(populate_by_name=True)

    source_id: str = Field(alias="sourceId")
    target_id: str = Field(alias="targetId")
    strength: float = Field(default=1.0, ge=0)  # Co-occurrence count

    def touches(self, entity_id: str) -> bool:
        """Return True if either endpoint is *entity_id*."""
        return self.source_id == entity_id or self.target_id == entity_id


class PositionedEntity(Entity):
    """An entity with a layout position in canvas coordinates."""

    x: float
    y: float
    radius: float


class EntityGraph(BaseModel):
    """Snapshot of extracted entities and their relations."""

    model_config = ConfigDict(populate_by_name=True)

    entities: list[Entity] = Field(default_factory=list)
    relations: list[Relation] = Field(default_factory=list)
    last_updated: str = Field(
        default_factory=lambda: datetime.now().isoformat(), alias="lastUpdated"
    )
