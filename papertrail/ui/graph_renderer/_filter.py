"""Entity type filtering for the graph view."""

import logging
from collections.abc import Iterable, Sequence

from papertrail.memory.entities import Entity, Relation
from papertrail.utils.constants import ENTITY_TYPES

logger = logging.getLogger(__name__)


class FilterModel:
    """Set of entity types currently shown in the graph."""

    def __init__(self, active_types: Iterable[str] | None = None):
        """Initialize the filter.

        Args:
            active_types: Types to show. Defaults to all entity types.

        Raises:
            ValueError: If an unknown entity type is given.
        """
        types = set(ENTITY_TYPES if active_types is None else active_types)
        self._check_types(types)
        self._active: set[str] = types

    @property
    def active_types(self) -> frozenset[str]:
        """Currently visible entity types."""
        return frozenset(self._active)

    def is_active(self, entity_type: str) -> bool:
        """Return True if entities of this type are shown."""
        return entity_type in self._active

    def toggle(self, entity_type: str) -> bool:
        """Show or hide an entity type.

        Args:
            entity_type: Type to toggle.

        Returns:
            True if the type is visible after the toggle.

        Raises:
            ValueError: If the type is not a known entity type.
        """
        self._check_types({entity_type})
        if entity_type in self._active:
            self._active.remove(entity_type)
            logger.debug("Filter: hiding %s", entity_type)
            return False
        self._active.add(entity_type)
        logger.debug("Filter: showing %s", entity_type)
        return True

    def set_types(self, types: Iterable[str]) -> None:
        """Replace the active type set."""
        new_types = set(types)
        self._check_types(new_types)
        self._active = new_types

    def filter_entities(self, entities: Sequence[Entity]) -> list[Entity]:
        """Keep entities whose type is active, preserving order."""
        return [e for e in entities if e.type in self._active]

    @staticmethod
    def visible_relations(
        entities: Sequence[Entity], relations: Sequence[Relation]
    ) -> list[Relation]:
        """Keep relations whose endpoints are both in *entities*.

        Relations naming unknown or filtered-out ids are dropped silently.
        """
        entity_ids = {e.id for e in entities}
        return [r for r in relations if r.source_id in entity_ids and r.target_id in entity_ids]

    @staticmethod
    def counts_by_type(entities: Sequence[Entity]) -> dict[str, int]:
        """Count entities per type over the unfiltered list, for the filter bar."""
        counts = dict.fromkeys(ENTITY_TYPES, 0)
        for entity in entities:
            counts[entity.type] = counts.get(entity.type, 0) + 1
        return counts

    @staticmethod
    def _check_types(types: set[str]) -> None:
        unknown = types - set(ENTITY_TYPES)
        if unknown:
            raise ValueError(
                f"Unknown entity type(s): {sorted(unknown)}; expected one of {list(ENTITY_TYPES)}"
            )
