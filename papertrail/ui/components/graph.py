"""Entity graph component rendered as SVG."""

import logging
from collections.abc import Callable
from typing import Any

from nicegui import ui
from nicegui.element import Element

from papertrail.memory.entities import Entity, Relation
from papertrail.settings import Settings
from papertrail.ui.graph_renderer import (
    format_connection_label,
    render_empty_state_html,
    render_entity_footer_html,
    render_entity_header_html,
    render_svg,
)
from papertrail.ui.state import GraphViewState
from papertrail.ui.theme import COLORS, get_entity_color
from papertrail.utils.constants import ENTITY_TYPES

logger = logging.getLogger(__name__)

# Browser-side conversion of a mouse event to SVG viewBox (canvas) units.
_SVG_POINT_JS = """
    const svg = e.currentTarget.querySelector('svg');
    let x = e.offsetX, y = e.offsetY;
    if (svg && svg.getScreenCTM()) {
        const pt = svg.createSVGPoint();
        pt.x = e.clientX;
        pt.y = e.clientY;
        const p = pt.matrixTransform(svg.getScreenCTM().inverse());
        x = p.x;
        y = p.y;
    }
"""


def _mouse_js(extra: str = "", prevent: bool = False) -> str:
    prevent_js = "e.preventDefault();" if prevent else ""
    return f"(e) => {{ {prevent_js} {_SVG_POINT_JS} emit({{x: x, y: y, button: e.button{extra}}}); }}"


class EntityGraphComponent:
    """Interactive entity relationship graph.

    Features:
    - Repulsion force layout
    - Entity type filtering with counts
    - Wheel zoom around the cursor, drag to pan
    - Click to select, double-click to focus
    - Detail panel for the selected entity with clickable connections
    - Shortcuts to the most connected entities
    """

    def __init__(
        self,
        entities: list[Entity] | None = None,
        relations: list[Relation] | None = None,
        settings: Settings | None = None,
        on_entity_click: Callable[[str], Any] | None = None,
        on_build_graph: Callable[[], Any] | None = None,
        is_building: bool = False,
    ):
        """Initialize the graph component.

        Args:
            entities: Entities to show.
            relations: Relations between them.
            settings: Application settings. Loaded from disk when omitted.
            on_entity_click: Called with the id when an entity becomes selected.
            on_build_graph: Called when the user asks for a rebuild.
            is_building: True while a build is running.
        """
        self.settings = settings or Settings.load()
        self.state = GraphViewState(
            settings=self.settings,
            on_entity_click=on_entity_click,
            on_build_graph=on_build_graph,
            is_building=is_building,
        )
        self.state.set_data(entities or [], relations or [])

        self._canvas: Element | None = None
        self._empty_state: Element | None = None
        self._graph_area: Element | None = None
        self._summary_label: Element | None = None
        self._zoom_label: Element | None = None
        self._detail: Element | None = None
        self._hubs_row: Element | None = None
        self._build_buttons: list[Element] = []
        self._filter_buttons: dict[str, Element] = {}
        self._dragged = False

    @property
    def is_built(self) -> bool:
        return self._canvas is not None

    def build(self) -> None:
        """Build the graph UI."""
        with ui.column().classes("w-full gap-2"):
            # Empty state
            with ui.column().classes("w-full items-center") as self._empty_state:
                ui.html(render_empty_state_html(), sanitize=False)
                self._build_buttons.append(
                    ui.button("Build graph", icon="hub", on_click=self._on_build_click)
                )

            with ui.column().classes("w-full gap-2") as self._graph_area:
                # Toolbar
                with ui.row().classes("w-full items-center gap-2"):
                    self._summary_label = ui.label("").classes("text-sm font-medium")
                    ui.space()
                    ui.button(icon="restart_alt", on_click=self._on_reset_view).props(
                        "flat round"
                    ).tooltip("Reset view")
                    ui.button(icon="fit_screen", on_click=self._on_zoom_to_fit).props(
                        "flat round"
                    ).tooltip("Zoom to fit")
                    ui.button(icon="remove", on_click=self._on_zoom_out).props(
                        "flat round"
                    ).tooltip("Zoom out")
                    self._zoom_label = ui.label("100%").classes("text-sm w-12 text-center")
                    ui.button(icon="add", on_click=self._on_zoom_in).props("flat round").tooltip(
                        "Zoom in"
                    )
                    self._build_buttons.append(
                        ui.button(icon="refresh", on_click=self._on_build_click)
                        .props("flat round")
                        .tooltip("Rebuild graph")
                    )

                # Most connected
                self._hubs_row = ui.row().classes("w-full items-center gap-1")

                # Type filter
                with ui.row().classes("w-full items-center gap-2"):
                    ui.label("Show:").classes("text-sm font-medium")
                    for entity_type in ENTITY_TYPES:
                        self._filter_buttons[entity_type] = ui.button(
                            entity_type,
                            on_click=lambda _, t=entity_type: self._on_toggle_filter(t),
                        ).props("unelevated no-caps dense")

                # Canvas
                self._canvas = (
                    ui.html("", sanitize=False)
                    .classes("w-full")
                    .style(f"border: 3px solid {COLORS['border']}; overflow: hidden;")
                )
                self._canvas.on(
                    "wheel",
                    self._on_wheel,
                    js_handler=_mouse_js(", deltaY: e.deltaY", prevent=True),
                )
                self._canvas.on("mousedown", self._on_mouse_down, js_handler=_mouse_js())
                self._canvas.on(
                    "mousemove", self._on_mouse_move, js_handler=_mouse_js(), throttle=0.03
                )
                self._canvas.on("mouseup", self._on_mouse_up, js_handler=_mouse_js())
                self._canvas.on("mouseleave", self._on_mouse_leave)
                self._canvas.on("click", self._on_click, js_handler=_mouse_js())
                self._canvas.on("dblclick", self._on_double_click, js_handler=_mouse_js())

                ui.label(
                    "Drag to pan · Scroll to zoom · Click to select · Double-click to focus"
                ).classes("text-xs text-gray-500")

                self._detail = (
                    ui.column()
                    .classes("w-full gap-1 p-4")
                    .style(f"border: 2px solid {COLORS['border']}; background: {COLORS['surface']};")
                )

        self._refresh_panels()

    # ========== Public API ==========

    def set_data(self, entities: list[Entity], relations: list[Relation]) -> None:
        """Replace the graph data and redraw."""
        self.state.set_data(entities, relations)
        self._refresh_panels()

    def set_building(self, is_building: bool) -> None:
        """Update the building flag and the rebuild buttons."""
        self.state.set_building(is_building)
        self._refresh()

    def refresh(self) -> None:
        """Redraw the graph and its panels."""
        self._refresh_panels()

    # ========== Event Handlers ==========

    def _on_build_click(self) -> None:
        self.state.request_build()

    def _on_reset_view(self) -> None:
        self.state.viewport.reset_view()
        self._refresh()

    def _on_zoom_to_fit(self) -> None:
        self.state.zoom_to_fit()
        self._refresh()

    def _on_zoom_in(self) -> None:
        self.state.viewport.zoom_in()
        self._refresh()

    def _on_zoom_out(self) -> None:
        self.state.viewport.zoom_out()
        self._refresh()

    def _on_toggle_filter(self, entity_type: str) -> None:
        self.state.toggle_filter(entity_type)
        self._refresh_panels()

    def _on_connection_click(self, entity_id: str) -> None:
        """Move the selection to an entity listed in the detail panel."""
        self.state.select_entity(entity_id)
        self._refresh_panels()

    def _on_hub_click(self, entity_id: str) -> None:
        """Select a most-connected entity and center on it."""
        if self.state.selected_id != entity_id:
            self.state.select_entity(entity_id)
        self.state.zoom_to_entity(entity_id)
        self._refresh_panels()

    @staticmethod
    def _point(e: Any) -> tuple[float, float] | None:
        args = e.args if isinstance(getattr(e, "args", None), dict) else None
        if not args or "x" not in args or "y" not in args:
            logger.debug("Graph mouse event without coordinates: %s", getattr(e, "args", None))
            return None
        return float(args["x"]), float(args["y"])

    def _on_wheel(self, e: Any) -> None:
        point = self._point(e)
        if point is None:
            return
        self.state.viewport.wheel_zoom(point[0], point[1], float(e.args.get("deltaY", 0)))
        self._refresh()

    def _on_mouse_down(self, e: Any) -> None:
        point = self._point(e)
        if point is None:
            return
        self._dragged = False
        self.state.viewport.pan_start(point[0], point[1], int(e.args.get("button", 0)))

    def _on_mouse_move(self, e: Any) -> None:
        point = self._point(e)
        if point is None:
            return
        if self.state.viewport.pan_move(point[0], point[1]):
            self._dragged = True
            self._refresh()
            return

        content_x, content_y = self.state.viewport.screen_to_content(*point)
        hit = self.state.entity_at(content_x, content_y)
        hovered = hit.id if hit else None
        if hovered != self.state.selection.hovered_id:
            self.state.set_hover(hovered)
            self._refresh()

    def _on_mouse_up(self, _e: Any = None) -> None:
        self.state.viewport.pan_end()

    def _on_mouse_leave(self, _e: Any = None) -> None:
        self.state.viewport.pan_end()
        if self.state.selection.hovered_id is not None:
            self.state.set_hover(None)
            self._refresh()

    def _on_click(self, e: Any) -> None:
        if self._dragged:
            self._dragged = False
            return
        point = self._point(e)
        if point is None:
            return
        hit = self.state.entity_at(*self.state.viewport.screen_to_content(*point))
        if hit is None:
            return
        self.state.select_entity(hit.id)
        self._refresh_panels()

    def _on_double_click(self, e: Any) -> None:
        point = self._point(e)
        if point is None:
            return
        hit = self.state.entity_at(*self.state.viewport.screen_to_content(*point))
        if hit is not None and self.state.zoom_to_entity(hit.id):
            self._refresh()

    # ========== Rendering ==========

    def _refresh(self) -> None:
        """Redraw the canvas, toolbar labels and button states."""
        if not self.is_built:
            return

        has_data = bool(self.state.entities)
        if self._empty_state:
            self._empty_state.set_visibility(not has_data)
        if self._graph_area:
            self._graph_area.set_visibility(has_data)
        for button in self._build_buttons:
            button.set_enabled(not self.state.is_building)

        if not has_data:
            return

        frame = self.state.build_frame()
        if self._canvas:
            self._canvas.set_content(render_svg(frame, self.settings))
        if self._summary_label:
            self._summary_label.set_text(self.state.summary_text())
        if self._zoom_label:
            self._zoom_label.set_text(f"{frame.zoom_percent}%")

    def _refresh_panels(self) -> None:
        """Rebuild the filter buttons, hub shortcuts and detail panel, then redraw."""
        if not self.is_built:
            return

        counts = self.state.type_counts
        for entity_type, button in self._filter_buttons.items():
            active = self.state.filters.is_active(entity_type)
            button.set_text(f"{entity_type} ({counts.get(entity_type, 0)})")
            fill = get_entity_color(entity_type, "fill") if active else COLORS["surface"]
            button.style(
                f"background-color: {fill} !important; color: {COLORS['text']} !important; "
                f"border: 2px solid {COLORS['border']}; opacity: {1 if active else 0.5};"
            )

        self._render_hubs()
        self._render_detail()
        self._refresh()

    def _render_hubs(self) -> None:
        if self._hubs_row is None:
            return
        self._hubs_row.clear()
        hubs = self.state.most_connected()
        self._hubs_row.set_visibility(bool(hubs))
        with self._hubs_row:
            ui.label("Most connected:").classes("text-sm font-medium")
            for entity, degree in hubs:
                ui.button(
                    f"{entity.name} ({degree})",
                    on_click=lambda _, eid=entity.id: self._on_hub_click(eid),
                ).props("flat no-caps dense")

    def _render_detail(self) -> None:
        if self._detail is None:
            return
        self._detail.clear()
        selected = self.state.get_entity(self.state.selected_id)
        if selected is None:
            self._detail.set_visibility(False)
            return

        connections = self.state.selected_connections()
        shown = connections[: self.settings.detail_max_connections]
        with self._detail:
            ui.html(render_entity_header_html(selected), sanitize=False)
            if connections:
                ui.label(f"Connections ({len(connections)})").classes(
                    "text-xs font-bold uppercase mt-2"
                )
                for other, relation in shown:
                    ui.button(
                        format_connection_label(other, relation),
                        on_click=lambda _, eid=other.id: self._on_connection_click(eid),
                    ).props("flat no-caps dense align=left").classes("w-full")
            else:
                ui.label("No connections").classes("text-sm text-gray-500 mt-2")
            ui.html(
                render_entity_footer_html(selected, len(connections) - len(shown)),
                sanitize=False,
            )
        self._detail.set_visibility(True)
