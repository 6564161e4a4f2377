"""View state for the entity graph.

All mutable graph view state (data, filter, layout cache, viewport and
selection) lives in one GraphViewState and changes only through its methods.
Layout is cached behind a dirty flag: changing the data or the filter marks
it dirty and positions are recomputed on the next read.
"""

import logging
import math
import random
from collections.abc import Callable, Sequence
from dataclasses import dataclass, field

from papertrail.memory.entities import Entity, EntityGraph, PositionedEntity, Relation
from papertrail.memory.entity_graph import get_most_connected
from papertrail.settings import Settings
from papertrail.ui.graph_renderer import (
    FilterModel,
    LayoutEngine,
    RenderFrame,
    SelectionModel,
    ViewportController,
    build_render_frame,
    render_summary_text,
)

logger = logging.getLogger(__name__)


@dataclass
class GraphViewState:
    """Centralized state for one graph view.

    Usage:
        state = GraphViewState(settings=Settings.load())
        state.set_data(graph.entities, graph.relations)
        frame = state.build_frame()
    """

    settings: Settings
    rng: random.Random | None = None

    # ========== Inputs ==========
    entities: list[Entity] = field(default_factory=list)
    relations: list[Relation] = field(default_factory=list)
    is_building: bool = False  # True while the extraction pipeline runs

    # ========== Callbacks ==========
    on_entity_click: Callable[[str], None] | None = None
    on_build_graph: Callable[[], None] | None = None

    # ========== Owned Models ==========
    filters: FilterModel = field(default_factory=FilterModel)
    selection: SelectionModel = field(default_factory=SelectionModel)
    viewport: ViewportController = field(init=False)
    layout_engine: LayoutEngine = field(init=False)

    # ========== Layout Cache ==========
    _positioned: list[PositionedEntity] = field(default_factory=list, init=False, repr=False)
    _layout_dirty: bool = field(default=True, init=False, repr=False)

    def __post_init__(self) -> None:
        self.viewport = ViewportController(self.settings)
        self.layout_engine = LayoutEngine(self.settings, self.rng)

    # ========== Data & Filter ==========

    def set_data(self, entities: Sequence[Entity], relations: Sequence[Relation]) -> None:
        """Replace the graph data and mark the layout dirty."""
        self.entities = list(entities)
        self.relations = list(relations)
        self._layout_dirty = True
        logger.info(
            "Graph data set: %d entities, %d relations", len(self.entities), len(self.relations)
        )
        self._drop_stale_selection()

    def set_building(self, is_building: bool) -> None:
        self.is_building = is_building

    def toggle_filter(self, entity_type: str) -> bool:
        """Show or hide an entity type.

        Returns:
            True if the type is visible after the toggle.

        Raises:
            ValueError: If the type is unknown.
        """
        visible = self.filters.toggle(entity_type)
        self._layout_dirty = True
        self._drop_stale_selection()
        return visible

    @property
    def layout_dirty(self) -> bool:
        return self._layout_dirty

    @property
    def filtered_entities(self) -> list[Entity]:
        return self.filters.filter_entities(self.entities)

    @property
    def visible_relations(self) -> list[Relation]:
        """Relations whose endpoints are both visible."""
        return FilterModel.visible_relations(self.filtered_entities, self.relations)

    @property
    def type_counts(self) -> dict[str, int]:
        return FilterModel.counts_by_type(self.entities)

    @property
    def positioned_entities(self) -> list[PositionedEntity]:
        """Laid-out visible entities, recomputed if the data or filter changed."""
        if self._layout_dirty:
            self._positioned = self.layout_engine.layout(self.filtered_entities)
            self._layout_dirty = False
        return self._positioned

    def _drop_stale_selection(self) -> None:
        visible_ids = {e.id for e in self.filtered_entities}
        if self.selection.selected_id is not None and self.selection.selected_id not in visible_ids:
            logger.debug("Clearing selection %s: no longer visible", self.selection.selected_id)
            self.selection.clear()
        if self.selection.hovered_id is not None and self.selection.hovered_id not in visible_ids:
            self.selection.set_hover(None)

    # ========== Selection ==========

    @property
    def selected_id(self) -> str | None:
        return self.selection.selected_id

    def select_entity(self, entity_id: str) -> str | None:
        """Toggle selection of an entity.

        Fires ``on_entity_click`` when the selection changes to an entity.

        Returns:
            The selection after the call.
        """
        previous = self.selection.selected_id
        selected = self.selection.select(entity_id)
        if selected is not None and selected != previous and self.on_entity_click:
            self.on_entity_click(selected)
        return selected

    def clear_selection(self) -> None:
        self.selection.clear()

    def set_hover(self, entity_id: str | None) -> None:
        self.selection.set_hover(entity_id)

    def get_entity(self, entity_id: str | None) -> PositionedEntity | None:
        """Find a positioned (visible) entity by id."""
        if entity_id is None:
            return None
        for entity in self.positioned_entities:
            if entity.id == entity_id:
                return entity
        return None

    def neighbor_ids(self) -> set[str]:
        return self.selection.neighbor_ids(self.visible_relations)

    def selected_connections(self) -> list[tuple[Entity, Relation]]:
        """Visible entities linked to the selection, strongest relation first.

        Each entity appears once, paired with its strongest relation to the
        selection.
        """
        selected_id = self.selection.selected_id
        if selected_id is None:
            return []
        by_id = {e.id: e for e in self.filtered_entities}
        strongest: dict[str, tuple[Entity, Relation]] = {}
        for relation in self.selection.connected_relations(self.visible_relations):
            other_id = (
                relation.target_id if relation.source_id == selected_id else relation.source_id
            )
            other = by_id.get(other_id)
            if other is None or other_id == selected_id:
                continue
            # One row per entity; a pair linked both ways keeps its strongest relation
            current = strongest.get(other_id)
            if current is None or relation.strength > current[1].strength:
                strongest[other_id] = (other, relation)
        return sorted(strongest.values(), key=lambda pair: pair[1].strength, reverse=True)

    def most_connected(self, limit: int | None = None) -> list[tuple[Entity, int]]:
        """Visible entities with the most visible connections, highest first.

        Entities without any connection are left out.
        """
        limit = self.settings.most_connected_count if limit is None else limit
        graph = EntityGraph(entities=self.filtered_entities, relations=self.visible_relations)
        ranked = get_most_connected(graph, limit)
        return [(entity, degree) for entity, degree in ranked if degree > 0]

    # ========== Viewport ==========

    def zoom_to_fit(self) -> None:
        self.viewport.zoom_to_fit(self.positioned_entities)

    def zoom_to_entity(self, entity_id: str) -> bool:
        """Center on a visible entity.

        Returns:
            False if the id is not visible.
        """
        entity = self.get_entity(entity_id)
        if entity is None:
            logger.debug("Cannot focus %s: not visible", entity_id)
            return False
        self.viewport.zoom_to_entity(entity)
        return True

    def entity_at(self, content_x: float, content_y: float) -> PositionedEntity | None:
        """Hit-test a canvas point against the drawn node discs.

        Later nodes are drawn on top, so they win overlaps.
        """
        root_scale = math.sqrt(self.viewport.transform.scale)
        for entity in reversed(self.positioned_entities):
            radius = entity.radius / root_scale
            if math.hypot(entity.x - content_x, entity.y - content_y) <= radius:
                return entity
        return None

    # ========== Build ==========

    def request_build(self) -> bool:
        """Ask the host to rebuild the graph.

        Returns:
            False if a build is already running or no callback is set.
        """
        if self.is_building or self.on_build_graph is None:
            return False
        logger.info("Graph build requested")
        self.on_build_graph()
        return True

    # ========== Output ==========

    def build_frame(self) -> RenderFrame:
        """Build the current RenderFrame."""
        return build_render_frame(
            self.positioned_entities,
            self.visible_relations,
            self.viewport.transform,
            self.selection,
            self.settings,
        )

    def summary_text(self) -> str:
        linked = len(self.neighbor_ids()) if self.selection.selected_id is not None else None
        return render_summary_text(
            len(self.positioned_entities), len(self.visible_relations), linked
        )
