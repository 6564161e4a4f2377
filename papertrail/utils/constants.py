"""Shared constants used across the application."""

import logging

logger = logging.getLogger(__name__)

# ========== Entity Types ==========
# Display order for the filter bar
ENTITY_TYPES: tuple[str, ...] = ("person", "organization", "topic", "location", "source")

# ========== Palette ==========
YELLOW_SCALE: dict[int, str] = {
    50: "#FFFEF0",
    100: "#FFFCD6",
    200: "#FFF8A3",
    300: "#FFF170",
    400: "#FFEA3D",
    500: "#FFE500",
    600: "#E6CE00",
    700: "#CCB700",
    800: "#998A00",
    900: "#665C00",
}

INK_SCALE: dict[str, str] = {
    "white": "#FFFFFF",
    "paper": "#F5F5F0",
    "light": "#E5E5E0",
    "mid": "#A3A3A3",
    "dark": "#525252",
    "ink": "#1A1A1A",
    "black": "#000000",
}

# ========== Entity Type Colors ==========
# Used for graph nodes, filter buttons and entity badges
ENTITY_COLORS: dict[str, dict[str, str]] = {
    "person": {"fill": YELLOW_SCALE[500], "stroke": "#000000"},
    "organization": {"fill": "#A78BFA", "stroke": "#000000"},
    "topic": {"fill": "#FFFFFF", "stroke": "#000000"},
    "location": {"fill": "#6EE7B7", "stroke": "#000000"},
    "source": {"fill": INK_SCALE["mid"], "stroke": "#000000"},
}


def get_entity_color(entity_type: str, part: str = "fill") -> str:
    """Retrieve the hex color associated with an entity type.

    Args:
        entity_type: Entity type name (case-insensitive).
        part: Either "fill" or "stroke".

    Returns:
        Hex color code; unknown types fall back to the electric yellow fill
        and the deep yellow stroke.
    """
    colors = ENTITY_COLORS.get(entity_type.lower())
    if colors is None:
        logger.warning(
            "Unknown entity type '%s' - using fallback color. Valid types: %s",
            entity_type,
            list(ENTITY_COLORS),
        )
        return YELLOW_SCALE[500] if part == "fill" else YELLOW_SCALE[700]
    return colors[part]
