"""Theme configuration for the Paper Trail graph.

Centralized colors, fonts and badge styles. Entity type colors live in
papertrail.utils.constants so non-UI code can use them.
"""

from papertrail.utils.constants import (
    ENTITY_COLORS,
    INK_SCALE,
    YELLOW_SCALE,
    get_entity_color,
)

# Re-export for convenience
__all__ = [
    "COLORS",
    "EDGE_COLORS",
    "ENTITY_COLORS",
    "FONT_FAMILY",
    "NODE_STATE_COLORS",
    "entity_badge_style",
    "get_entity_color",
]

# ========== Base Colors ==========
COLORS = {
    "primary": "#000000",
    "accent": YELLOW_SCALE[500],
    "background": "#F5F5F0",
    "surface": "#FFFFFF",
    "text": "#000000",
    "text_muted": INK_SCALE["dark"],
    "border": "#000000",
}

FONT_FAMILY = "'Inter', 'Helvetica Neue', 'Arial', sans-serif"

# ========== Graph Highlight Colors ==========
NODE_STATE_COLORS = {
    "selected_fill": "#EF4444",
    "selected_stroke": "#DC2626",
    "hover_fill": YELLOW_SCALE[400],
    "connected_fill": YELLOW_SCALE[300],
    "connected_ring": YELLOW_SCALE[300],
}

EDGE_COLORS = {
    "dim": INK_SCALE["mid"],
    "active": "#EF4444",
}


def entity_badge_style(entity_type: str) -> str:
    """Get inline style for an entity type badge.

    Args:
        entity_type: Type of entity.

    Returns:
        CSS inline style string.
    """
    fill = get_entity_color(entity_type, "fill")
    stroke = get_entity_color(entity_type, "stroke")
    return (
        f"background-color: {fill}; color: {COLORS['text']}; border: 2px solid {stroke}; "
        "padding: 2px 8px; font-size: 11px; font-weight: 600; text-transform: uppercase;"
    )
