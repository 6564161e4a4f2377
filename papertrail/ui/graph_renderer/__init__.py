"""Entity graph rendering.

Filtering, force layout, pan/zoom, selection highlighting and SVG output for
the Paper Trail entity graph.
"""

from papertrail.ui.graph_renderer._constants import (
    DrawableEdge,
    DrawableNode,
    EdgeStyle,
    NodeStyle,
    RenderFrame,
)
from papertrail.ui.graph_renderer._filter import FilterModel
from papertrail.ui.graph_renderer._layout import LayoutEngine
from papertrail.ui.graph_renderer._renderer import build_render_frame, render_svg, truncate_label
from papertrail.ui.graph_renderer._results import (
    format_connection_label,
    render_empty_state_html,
    render_entity_footer_html,
    render_entity_header_html,
    render_summary_text,
)
from papertrail.ui.graph_renderer._selection import SelectionModel
from papertrail.ui.graph_renderer._viewport import PRIMARY_BUTTON, Transform, ViewportController

__all__ = [
    "PRIMARY_BUTTON",
    # Result types
    "DrawableEdge",
    "DrawableNode",
    "EdgeStyle",
    # Models
    "FilterModel",
    "LayoutEngine",
    "NodeStyle",
    "RenderFrame",
    "SelectionModel",
    "Transform",
    "ViewportController",
    # Rendering
    "build_render_frame",
    "format_connection_label",
    "render_empty_state_html",
    "render_entity_footer_html",
    "render_entity_header_html",
    "render_summary_text",
    "render_svg",
    "truncate_label",
]
