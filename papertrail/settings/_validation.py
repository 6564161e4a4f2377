"""Validation functions for Settings."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from papertrail.settings._types import LOG_LEVELS

if TYPE_CHECKING:
    from papertrail.settings._settings import Settings

logger = logging.getLogger(__name__)


def validate(settings: Settings) -> None:
    """Validate all settings fields.

    Raises:
        ValueError: If any field contains an invalid value.
    """
    _validate_log_level(settings)
    _validate_canvas(settings)
    _validate_layout(settings)
    _validate_viewport(settings)
    _validate_rendering(settings)
    logger.debug("Settings validated")


def _validate_log_level(settings: Settings) -> None:
    """Validate log_level is a known logging level."""
    if settings.log_level not in LOG_LEVELS:
        raise ValueError(
            f"log_level must be one of {list(LOG_LEVELS.keys())}, got {settings.log_level}"
        )


def _validate_canvas(settings: Settings) -> None:
    """Validate canvas dimensions leave room for the layout margins."""
    if settings.canvas_width <= 0 or settings.canvas_height <= 0:
        raise ValueError(
            f"canvas size must be positive, got {settings.canvas_width}x{settings.canvas_height}"
        )

    smallest_side = min(settings.canvas_width, settings.canvas_height)
    if not 0 <= settings.layout_initial_margin < smallest_side / 2:
        raise ValueError(
            f"layout_initial_margin must be between 0 and {smallest_side / 2}, "
            f"got {settings.layout_initial_margin}"
        )
    if not 0 <= settings.layout_bounds_margin < smallest_side / 2:
        raise ValueError(
            f"layout_bounds_margin must be between 0 and {smallest_side / 2}, "
            f"got {settings.layout_bounds_margin}"
        )


def _validate_layout(settings: Settings) -> None:
    """Validate force simulation parameters."""
    if not 0 <= settings.layout_iterations <= 10000:
        raise ValueError(
            f"layout_iterations must be between 0 and 10000, got {settings.layout_iterations}"
        )

    if settings.node_radius <= 0:
        raise ValueError(f"node_radius must be positive, got {settings.node_radius}")

    if settings.node_spacing < 0:
        raise ValueError(f"node_spacing must be non-negative, got {settings.node_spacing}")

    if settings.repulsion_force < 0:
        raise ValueError(f"repulsion_force must be non-negative, got {settings.repulsion_force}")

    for name in ("repulsion_near_multiplier", "repulsion_far_multiplier"):
        value = getattr(settings, name)
        if not 0.0 <= value <= 10.0:
            raise ValueError(f"{name} must be between 0.0 and 10.0, got {value}")

    if not 0.0 <= settings.layout_bounds_start <= 1.0:
        raise ValueError(
            f"layout_bounds_start must be between 0.0 and 1.0, got {settings.layout_bounds_start}"
        )

    if not 0.0 < settings.layout_bounds_pull <= 1.0:
        raise ValueError(
            f"layout_bounds_pull must be in (0.0, 1.0], got {settings.layout_bounds_pull}"
        )


def _validate_viewport(settings: Settings) -> None:
    """Validate zoom limits and steps."""
    if not 0 < settings.min_scale <= settings.max_scale:
        raise ValueError(
            f"min_scale must be positive and not exceed max_scale, "
            f"got {settings.min_scale} and {settings.max_scale}"
        )

    for name in ("wheel_zoom_step", "button_zoom_step"):
        value = getattr(settings, name)
        if not 0 < value <= settings.max_scale:
            raise ValueError(f"{name} must be between 0 and {settings.max_scale}, got {value}")

    if settings.fit_padding < 0:
        raise ValueError(f"fit_padding must be non-negative, got {settings.fit_padding}")

    for name in ("fit_max_scale", "focus_scale"):
        value = getattr(settings, name)
        if not settings.min_scale <= value <= settings.max_scale:
            raise ValueError(
                f"{name} must be between {settings.min_scale} and {settings.max_scale}, "
                f"got {value}"
            )


def _validate_rendering(settings: Settings) -> None:
    """Validate label and panel limits."""
    if settings.label_max_chars < 1:
        raise ValueError(f"label_max_chars must be at least 1, got {settings.label_max_chars}")

    if settings.detail_max_connections < 0:
        raise ValueError(
            f"detail_max_connections must be non-negative, got {settings.detail_max_connections}"
        )

    if settings.most_connected_count < 0:
        raise ValueError(
            f"most_connected_count must be non-negative, got {settings.most_connected_count}"
        )

    if not 100 <= settings.render_height <= 4000:
        raise ValueError(
            f"render_height must be between 100 and 4000, got {settings.render_height}"
        )
