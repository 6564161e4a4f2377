"""Constants and render result types for the entity graph."""

from dataclasses import dataclass

# Semantic zoom base sizes (screen units at scale 1)
RING_OFFSET = 10.0
LABEL_GAP = 32.0
NODE_STROKE_WIDTH = 4.0
SELECTED_STROKE_WIDTH = 5.0
FONT_SIZE = 14.0
SELECTED_FONT_SIZE = 16.0
RING_DASH = 4.0
RING_OPACITY = 0.8

# Edge highlight policy
EDGE_DIM_OPACITY = 0.4
EDGE_FADED_OPACITY = 0.1
EDGE_ACTIVE_OPACITY = 1.0
EDGE_DIM_MAX_WIDTH = 3.0
EDGE_ACTIVE_MAX_WIDTH = 4.0


@dataclass(frozen=True)
class EdgeStyle:
    """Stroke style for an edge before zoom scaling."""

    stroke: str
    opacity: float
    width: float


@dataclass(frozen=True)
class NodeStyle:
    """Highlight state of a node before zoom scaling."""

    fill: str
    stroke: str
    is_selected: bool
    is_connected: bool
    is_hovered: bool


@dataclass(frozen=True)
class DrawableNode:
    """A node ready to draw inside the transformed group.

    Attributes:
        id: Entity id.
        x: Canvas x coordinate.
        y: Canvas y coordinate.
        render_radius: Radius after semantic zoom.
        fill_color: Node fill.
        stroke_color: Node outline.
        stroke_width: Outline width after semantic zoom.
        label_text: Possibly truncated entity name.
        label_font_size: Font size after semantic zoom.
        label_offset: Distance from node center to label baseline.
        title: Full entity name for tooltips.
        label_color: Label fill.
        label_weight: Label font weight.
        ring_radius: Highlight ring radius, or None when no ring is drawn.
        ring_color: Highlight ring stroke.
        ring_dash: SVG dash array for the ring, or None for a solid ring.
    """

    id: str
    x: float
    y: float
    render_radius: float
    fill_color: str
    stroke_color: str
    stroke_width: float
    label_text: str
    label_font_size: float
    label_offset: float
    title: str
    label_color: str
    label_weight: int
    ring_radius: float | None = None
    ring_color: str | None = None
    ring_dash: str | None = None


@dataclass(frozen=True)
class DrawableEdge:
    """An edge ready to draw inside the transformed group."""

    source_id: str
    target_id: str
    x1: float
    y1: float
    x2: float
    y2: float
    stroke_color: str
    stroke_width: float
    opacity: float


@dataclass(frozen=True)
class RenderFrame:
    """Everything a renderer needs to draw one frame.

    Attributes:
        nodes: Drawable nodes in layout order.
        edges: Drawable edges; both endpoints are always in ``nodes``.
        transform_x: Horizontal translation of the whole drawing.
        transform_y: Vertical translation of the whole drawing.
        scale: Uniform scale of the whole drawing.
        zoom_percent: Rounded zoom readout.
    """

    nodes: tuple[DrawableNode, ...]
    edges: tuple[DrawableEdge, ...]
    transform_x: float
    transform_y: float
    scale: float
    zoom_percent: int
