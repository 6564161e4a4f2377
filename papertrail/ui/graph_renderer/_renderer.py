"""Frame building and SVG rendering for the entity graph.

The whole drawing sits in one transformed group. Node sizes are scaled
against the zoom so the graph stays readable: radius, ring offset and label
offset shrink with ``1/sqrt(scale)``, strokes, dashes and font sizes with
``1/scale``.
"""

import html
import logging
import math
from collections.abc import Sequence

from papertrail.memory.entities import PositionedEntity, Relation
from papertrail.settings import Settings
from papertrail.ui.graph_renderer._constants import (
    FONT_SIZE,
    LABEL_GAP,
    NODE_STROKE_WIDTH,
    RING_DASH,
    RING_OFFSET,
    RING_OPACITY,
    SELECTED_FONT_SIZE,
    SELECTED_STROKE_WIDTH,
    DrawableEdge,
    DrawableNode,
    RenderFrame,
)
from papertrail.ui.graph_renderer._selection import SelectionModel
from papertrail.ui.graph_renderer._viewport import Transform
from papertrail.ui.theme import COLORS, FONT_FAMILY, NODE_STATE_COLORS

logger = logging.getLogger(__name__)


def truncate_label(name: str, max_chars: int) -> str:
    """Cut *name* to *max_chars* characters, appending "..." when shortened."""
    if len(name) <= max_chars:
        return name
    return name[:max_chars] + "..."


def build_render_frame(
    positioned: Sequence[PositionedEntity],
    relations: Sequence[Relation],
    transform: Transform,
    selection: SelectionModel,
    settings: Settings,
) -> RenderFrame:
    """Turn positioned entities and visible relations into drawables.

    Args:
        positioned: Laid-out entities.
        relations: Relations to draw. Any relation with an endpoint missing
            from *positioned* is skipped.
        transform: Current viewport transform.
        selection: Current selection and hover state.
        settings: Label truncation length.

    Returns:
        RenderFrame for the renderer.
    """
    scale = transform.scale
    root_scale = math.sqrt(scale)
    by_id = {e.id: e for e in positioned}
    neighbors = selection.neighbor_ids(relations)

    edges: list[DrawableEdge] = []
    for relation in relations:
        source = by_id.get(relation.source_id)
        target = by_id.get(relation.target_id)
        if source is None or target is None:
            continue
        style = selection.edge_style(relation)
        edges.append(
            DrawableEdge(
                source_id=source.id,
                target_id=target.id,
                x1=source.x,
                y1=source.y,
                x2=target.x,
                y2=target.y,
                stroke_color=style.stroke,
                stroke_width=style.width / scale,
                opacity=style.opacity,
            )
        )

    nodes: list[DrawableNode] = []
    for entity in positioned:
        style = selection.node_style(entity, neighbors)
        render_radius = entity.radius / root_scale

        ring_radius = ring_color = ring_dash = None
        if style.is_selected or style.is_connected:
            ring_radius = render_radius + RING_OFFSET / root_scale
            if style.is_selected:
                ring_color = NODE_STATE_COLORS["selected_fill"]
            else:
                ring_color = NODE_STATE_COLORS["connected_ring"]
                dash = RING_DASH / scale
                ring_dash = f"{dash:g},{dash:g}"

        nodes.append(
            DrawableNode(
                id=entity.id,
                x=entity.x,
                y=entity.y,
                render_radius=render_radius,
                fill_color=style.fill,
                stroke_color=style.stroke,
                stroke_width=(SELECTED_STROKE_WIDTH if style.is_selected else NODE_STROKE_WIDTH)
                / scale,
                label_text=truncate_label(entity.name, settings.label_max_chars),
                label_font_size=(SELECTED_FONT_SIZE if style.is_selected else FONT_SIZE) / scale,
                label_offset=render_radius + LABEL_GAP / scale,
                title=entity.name,
                label_color=COLORS["text"] if style.is_selected else COLORS["text_muted"],
                label_weight=600 if style.is_selected else 400,
                ring_radius=ring_radius,
                ring_color=ring_color,
                ring_dash=ring_dash,
            )
        )

    logger.debug("Built frame: %d nodes, %d edges, scale=%.2f", len(nodes), len(edges), scale)
    return RenderFrame(
        nodes=tuple(nodes),
        edges=tuple(edges),
        transform_x=transform.x,
        transform_y=transform.y,
        scale=scale,
        zoom_percent=round(scale * 100),
    )


def render_svg(frame: RenderFrame, settings: Settings) -> str:
    """Render a frame as an SVG document.

    The viewBox matches the canvas so mouse offsets scale into canvas units.
    Edges are drawn before nodes so nodes sit on top.

    Args:
        frame: Frame from ``build_render_frame``.
        settings: Canvas size and render height.

    Returns:
        SVG markup string.
    """
    width = settings.canvas_width
    height = settings.canvas_height
    transform = Transform(frame.transform_x, frame.transform_y, frame.scale)
    parts = [
        f'<svg xmlns="http://www.w3.org/2000/svg" viewBox="0 0 {width:g} {height:g}" '
        f'width="100%" height="{settings.render_height}" '
        f'style="background: {COLORS["background"]}; font-family: {html.escape(FONT_FAMILY)}; '
        'user-select: none; display: block;">',
        f'<g transform="{transform.to_svg()}">',
    ]

    for edge in frame.edges:
        parts.append(
            f'<line x1="{edge.x1:.2f}" y1="{edge.y1:.2f}" x2="{edge.x2:.2f}" y2="{edge.y2:.2f}" '
            f'stroke="{edge.stroke_color}" stroke-width="{edge.stroke_width:.3f}" '
            f'stroke-opacity="{edge.opacity:g}" />'
        )

    for node in frame.nodes:
        parts.append(f'<g data-entity-id="{html.escape(node.id)}" style="cursor: pointer;">')
        parts.append(f"<title>{html.escape(node.title)}</title>")
        if node.ring_radius is not None:
            dash = f' stroke-dasharray="{node.ring_dash}"' if node.ring_dash else ""
            parts.append(
                f'<circle cx="{node.x:.2f}" cy="{node.y:.2f}" r="{node.ring_radius:.2f}" '
                f'fill="none" stroke="{node.ring_color}" '
                f'stroke-width="{node.stroke_width:.3f}" stroke-opacity="{RING_OPACITY:g}"{dash} />'
            )
        parts.append(
            f'<circle cx="{node.x:.2f}" cy="{node.y:.2f}" r="{node.render_radius:.2f}" '
            f'fill="{node.fill_color}" stroke="{node.stroke_color}" '
            f'stroke-width="{node.stroke_width:.3f}" />'
        )
        parts.append(
            f'<text x="{node.x:.2f}" y="{node.y + node.label_offset:.2f}" text-anchor="middle" '
            f'font-size="{node.label_font_size:.2f}" font-weight="{node.label_weight}" '
            f'fill="{node.label_color}">{html.escape(node.label_text)}</text>'
        )
        parts.append("</g>")

    parts.append("</g></svg>")
    return "".join(parts)
