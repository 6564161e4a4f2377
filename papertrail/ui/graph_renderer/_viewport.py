"""Pan and zoom state for the entity graph.

The transform maps canvas (content) coordinates to screen coordinates:
``screen = content * scale + offset``. Every mutation clamps the scale to the
configured limits.
"""

import logging
from collections.abc import Sequence
from dataclasses import dataclass

from papertrail.memory.entities import PositionedEntity
from papertrail.settings import Settings

logger = logging.getLogger(__name__)

PRIMARY_BUTTON = 0


@dataclass(frozen=True)
class Transform:
    """Translate + uniform scale applied to the whole drawing."""

    x: float = 0.0
    y: float = 0.0
    scale: float = 1.0

    def to_svg(self) -> str:
        """Format as an SVG transform attribute."""
        return f"translate({self.x:.3f}, {self.y:.3f}) scale({self.scale:.5f})"


class ViewportController:
    """Owns the Transform and every operation that changes it."""

    def __init__(self, settings: Settings):
        self.settings = settings
        self._transform = Transform()
        self._dragging = False
        self._drag_origin: tuple[float, float] = (0.0, 0.0)

    @property
    def transform(self) -> Transform:
        """Current transform (read-only snapshot)."""
        return self._transform

    @property
    def is_dragging(self) -> bool:
        return self._dragging

    @property
    def zoom_percent(self) -> int:
        """Zoom readout, e.g. 100 for scale 1."""
        return round(self._transform.scale * 100)

    @property
    def canvas_center(self) -> tuple[float, float]:
        return self.settings.canvas_width / 2, self.settings.canvas_height / 2

    def _clamp_scale(self, scale: float) -> float:
        return max(self.settings.min_scale, min(self.settings.max_scale, scale))

    def _set(self, x: float, y: float, scale: float) -> None:
        self._transform = Transform(x=x, y=y, scale=self._clamp_scale(scale))

    def screen_to_content(self, screen_x: float, screen_y: float) -> tuple[float, float]:
        """Convert a screen point to canvas coordinates using the current transform."""
        t = self._transform
        return (screen_x - t.x) / t.scale, (screen_y - t.y) / t.scale

    def content_to_screen(self, content_x: float, content_y: float) -> tuple[float, float]:
        """Convert a canvas point to screen coordinates."""
        t = self._transform
        return content_x * t.scale + t.x, content_y * t.scale + t.y

    def zoom(self, delta: float, cx: float | None = None, cy: float | None = None) -> None:
        """Change scale by *delta*, keeping content point (cx, cy) fixed on screen.

        Args:
            delta: Scale change; the result is clamped.
            cx: Content x to zoom toward. Defaults to the canvas center.
            cy: Content y to zoom toward. Defaults to the canvas center.
        """
        center_x, center_y = self.canvas_center
        cx = center_x if cx is None else cx
        cy = center_y if cy is None else cy

        t = self._transform
        new_scale = self._clamp_scale(t.scale + delta)
        scale_diff = new_scale - t.scale
        self._set(t.x - cx * scale_diff, t.y - cy * scale_diff, new_scale)
        logger.debug("Zoom %+.2f toward (%.1f, %.1f): scale=%.2f", delta, cx, cy, new_scale)

    def wheel_zoom(self, screen_x: float, screen_y: float, delta_y: float) -> None:
        """Zoom one wheel step around the cursor.

        Scrolling down (positive delta_y) zooms out.
        """
        content_x, content_y = self.screen_to_content(screen_x, screen_y)
        step = self.settings.wheel_zoom_step
        self.zoom(-step if delta_y > 0 else step, content_x, content_y)

    def zoom_in(self) -> None:
        """Toolbar zoom in, toward the canvas center."""
        self.zoom(self.settings.button_zoom_step)

    def zoom_out(self) -> None:
        """Toolbar zoom out, away from the canvas center."""
        self.zoom(-self.settings.button_zoom_step)

    def pan_start(self, screen_x: float, screen_y: float, button: int = PRIMARY_BUTTON) -> bool:
        """Begin a drag. Only the primary button starts one.

        Returns:
            True if dragging started.
        """
        if button != PRIMARY_BUTTON:
            return False
        t = self._transform
        self._dragging = True
        self._drag_origin = (screen_x - t.x, screen_y - t.y)
        return True

    def pan_move(self, screen_x: float, screen_y: float) -> bool:
        """Move the drawing with the cursor while dragging.

        Returns:
            True if the transform changed.
        """
        if not self._dragging:
            return False
        origin_x, origin_y = self._drag_origin
        self._set(screen_x - origin_x, screen_y - origin_y, self._transform.scale)
        return True

    def pan_end(self) -> None:
        self._dragging = False

    def reset_view(self) -> None:
        """Back to identity: no pan, scale 1."""
        self._set(0.0, 0.0, 1.0)
        logger.debug("View reset")

    def zoom_to_fit(self, entities: Sequence[PositionedEntity]) -> None:
        """Fit every entity disc in the canvas, never zooming past ``fit_max_scale``.

        Does nothing when there are no entities.
        """
        if not entities:
            return

        min_x = min(e.x - e.radius for e in entities)
        max_x = max(e.x + e.radius for e in entities)
        min_y = min(e.y - e.radius for e in entities)
        max_y = max(e.y + e.radius for e in entities)

        padding = self.settings.fit_padding
        content_width = max_x - min_x + padding
        content_height = max_y - min_y + padding

        scale = self._clamp_scale(
            min(
                self.settings.canvas_width / content_width,
                self.settings.canvas_height / content_height,
                self.settings.fit_max_scale,
            )
        )
        center_x, center_y = self.canvas_center
        box_center_x = (min_x + max_x) / 2
        box_center_y = (min_y + max_y) / 2
        self._set(center_x - box_center_x * scale, center_y - box_center_y * scale, scale)
        logger.debug("Zoom to fit %d entities: scale=%.2f", len(entities), scale)

    def zoom_to_entity(self, entity: PositionedEntity) -> None:
        """Center the canvas on an entity at the focus scale."""
        scale = self._clamp_scale(self.settings.focus_scale)
        center_x, center_y = self.canvas_center
        self._set(center_x - entity.x * scale, center_y - entity.y * scale, scale)
        logger.debug("Zoom to entity %s", entity.id)
