"""Main Settings dataclass for Paper Trail.

Settings are stored in settings.json next to the package. Layout and
viewport tuning lives here so the graph view, tests and the launcher all
read the same values.
"""

from __future__ import annotations

import json
import logging
import shutil
from dataclasses import asdict, dataclass, fields
from pathlib import Path
from typing import Any, ClassVar

from papertrail.settings import _paths
from papertrail.settings import _validation as _validation_mod
from papertrail.utils.json_io import atomic_write_json

logger = logging.getLogger(__name__)


def _merge_with_defaults(data: dict[str, Any], settings_cls: type) -> bool:
    """Merge loaded JSON data with dataclass defaults.

    - Adds missing keys with their default values
    - Removes keys that no longer exist in the dataclass

    Modifies *data* in place.

    Returns:
        True if any changes were made, False otherwise.
    """
    default_dict = asdict(settings_cls())
    known_fields = {f.name for f in fields(settings_cls)}
    changed = False

    for key in list(data):
        if key not in known_fields:
            logger.info("Removing obsolete setting: %s", key)
            del data[key]
            changed = True

    for key in known_fields:
        if key not in data:
            logger.info("Adding new setting with default: %s", key)
            data[key] = default_dict[key]
            changed = True

    return changed


def _backup_corrupt_file(path: Path) -> None:
    """Copy an unreadable settings file aside before defaults replace it."""
    backup_path = path.with_suffix(".json.corrupt")
    try:
        shutil.copy(path, backup_path)
        logger.info("Backed up corrupted settings to %s", backup_path)
    except OSError as copy_err:
        logger.warning("Failed to backup corrupted settings: %s", copy_err)


@dataclass
class Settings:
    """Application settings, stored as JSON."""

    # General
    log_level: str = "INFO"
    graph_file: str | None = None  # Entity graph JSON opened on startup

    # Logical canvas (world coordinates)
    canvas_width: float = 3000.0
    canvas_height: float = 2400.0

    # Layout simulation
    layout_iterations: int = 400
    node_radius: float = 32.0
    node_spacing: float = 400.0  # Below this distance repulsion is strong
    repulsion_force: float = 25000.0
    repulsion_near_multiplier: float = 0.8
    repulsion_far_multiplier: float = 0.15
    layout_initial_margin: float = 200.0  # Inset for random initial placement
    layout_bounds_margin: float = 100.0  # Soft boundary distance from canvas edges
    layout_bounds_start: float = 0.7  # Fraction of iterations before bounds apply
    layout_bounds_pull: float = 0.1  # Fraction of overshoot corrected per iteration
    layout_seed: int | None = None  # None = non-reproducible layouts

    # Viewport
    min_scale: float = 0.25
    max_scale: float = 4.0
    wheel_zoom_step: float = 0.1
    button_zoom_step: float = 0.25
    fit_padding: float = 100.0
    fit_max_scale: float = 2.0
    focus_scale: float = 2.0

    # Rendering
    label_max_chars: int = 20
    detail_max_connections: int = 10
    most_connected_count: int = 5  # Hub shortcuts shown above the canvas
    render_height: int = 800  # Pixel height of the graph canvas

    def save(self) -> None:
        """Save settings to JSON file."""
        self.validate()
        atomic_write_json(_paths.SETTINGS_FILE, asdict(self))
        logger.debug("Settings saved to %s", _paths.SETTINGS_FILE)

    def validate(self) -> None:
        """Validate all settings fields. Delegates to _validation module.

        Raises:
            ValueError: If any field contains an invalid value.
        """
        _validation_mod.validate(self)

    # Class-level cache for settings (speeds up repeated load() calls)
    _cached_instance: ClassVar[Settings | None] = None

    @classmethod
    def load(cls, use_cache: bool = True) -> Settings:
        """Load settings from JSON file, or create defaults.

        New settings get default values and removed settings are cleaned
        up; customized values are preserved.

        Args:
            use_cache: If True, return cached instance if available. Set to False
                to force reload from disk.

        Returns:
            Settings instance.

        Raises:
            ValueError: If a stored value has the wrong type or is out of range.
        """
        if use_cache and cls._cached_instance is not None:
            return cls._cached_instance

        settings_file = _paths.SETTINGS_FILE
        data: dict[str, Any] = {}
        loaded_from_file = False

        if settings_file.exists():
            try:
                with open(settings_file, encoding="utf-8") as f:
                    raw = json.load(f)
                if isinstance(raw, dict):
                    data = raw
                    loaded_from_file = True
                else:
                    logger.error(
                        "Corrupted settings file (expected JSON object, got %s)",
                        type(raw).__name__,
                    )
                    _backup_corrupt_file(settings_file)
            except json.JSONDecodeError as e:
                logger.error("Corrupted settings file (invalid JSON): %s", e)
                _backup_corrupt_file(settings_file)
            except OSError as e:
                logger.error("Cannot read settings file: %s", e)

        logger.info(
            "Settings load: loaded_from_file=%s, keys_read=%d", loaded_from_file, len(data)
        )

        changed = _merge_with_defaults(data, cls)

        try:
            settings = cls(**data)
            settings.validate()
        except TypeError as e:
            raise ValueError(f"A setting has an invalid type: {e}") from e

        if changed or not loaded_from_file:
            try:
                atomic_write_json(settings_file, asdict(settings))
                logger.info("Settings written to %s", settings_file)
            except OSError as write_err:
                logger.warning("Could not persist settings to disk: %s", write_err)

        cls._cached_instance = settings
        return settings

    @classmethod
    def clear_cache(cls) -> None:
        """Clear the cached settings instance.

        Use this in tests that need to verify settings loading behavior,
        or after programmatically modifying settings files.
        """
        cls._cached_instance = None
