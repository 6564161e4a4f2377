"""Selection and hover highlighting for the entity graph."""

import logging
from collections.abc import Collection, Iterable

from papertrail.memory.entities import Entity, Relation
from papertrail.ui.graph_renderer._constants import (
    EDGE_ACTIVE_MAX_WIDTH,
    EDGE_ACTIVE_OPACITY,
    EDGE_DIM_MAX_WIDTH,
    EDGE_DIM_OPACITY,
    EDGE_FADED_OPACITY,
    EdgeStyle,
    NodeStyle,
)
from papertrail.ui.theme import EDGE_COLORS, NODE_STATE_COLORS, get_entity_color

logger = logging.getLogger(__name__)


class SelectionModel:
    """Tracks the selected and hovered entity and derives highlight styles."""

    def __init__(self) -> None:
        self.selected_id: str | None = None
        self.hovered_id: str | None = None

    def select(self, entity_id: str) -> str | None:
        """Select an entity, or deselect it if it is already selected.

        Returns:
            The selection after the call.
        """
        if self.selected_id == entity_id:
            self.selected_id = None
            logger.debug("Deselected %s", entity_id)
        else:
            self.selected_id = entity_id
            logger.debug("Selected %s", entity_id)
        return self.selected_id

    def clear(self) -> None:
        self.selected_id = None

    def set_hover(self, entity_id: str | None) -> None:
        self.hovered_id = entity_id

    def connected_relations(self, relations: Iterable[Relation]) -> list[Relation]:
        """Relations with the selected entity at either end."""
        if self.selected_id is None:
            return []
        return [r for r in relations if r.touches(self.selected_id)]

    def neighbor_ids(self, relations: Iterable[Relation]) -> set[str]:
        """Ids linked to the selection by at least one relation, excluding the selection."""
        if self.selected_id is None:
            return set()
        neighbors: set[str] = set()
        for relation in self.connected_relations(relations):
            neighbors.add(relation.source_id)
            neighbors.add(relation.target_id)
        neighbors.discard(self.selected_id)
        return neighbors

    def edge_style(self, relation: Relation) -> EdgeStyle:
        """Stroke for a relation given the current selection (before zoom scaling)."""
        if self.selected_id is None:
            return EdgeStyle(
                stroke=EDGE_COLORS["dim"],
                opacity=EDGE_DIM_OPACITY,
                width=min(relation.strength, EDGE_DIM_MAX_WIDTH),
            )
        if relation.touches(self.selected_id):
            return EdgeStyle(
                stroke=EDGE_COLORS["active"],
                opacity=EDGE_ACTIVE_OPACITY,
                width=min(relation.strength + 1, EDGE_ACTIVE_MAX_WIDTH),
            )
        return EdgeStyle(stroke=EDGE_COLORS["dim"], opacity=EDGE_FADED_OPACITY, width=1.0)

    def node_style(self, entity: Entity, neighbors: Collection[str]) -> NodeStyle:
        """Fill and stroke for an entity.

        Precedence is selected, then hovered, then neighbor of the selection,
        then the entity type color.

        Args:
            entity: Entity to style.
            neighbors: Result of ``neighbor_ids`` for the current relations.
        """
        is_selected = entity.id == self.selected_id
        is_hovered = entity.id == self.hovered_id
        is_connected = entity.id in neighbors

        if is_selected:
            fill = NODE_STATE_COLORS["selected_fill"]
            stroke = NODE_STATE_COLORS["selected_stroke"]
        else:
            stroke = get_entity_color(entity.type, "stroke")
            if is_hovered:
                fill = NODE_STATE_COLORS["hover_fill"]
            elif is_connected:
                fill = NODE_STATE_COLORS["connected_fill"]
            else:
                fill = get_entity_color(entity.type, "fill")

        return NodeStyle(
            fill=fill,
            stroke=stroke,
            is_selected=is_selected,
            is_connected=is_connected,
            is_hovered=is_hovered,
        )
