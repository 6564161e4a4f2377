"""Path constants for Paper Trail settings and output directories."""

from pathlib import Path

SETTINGS_FILE = Path(__file__).parent.parent / "settings.json"

# Go up from papertrail/settings to papertrail/, then to project root, then into output/
GRAPHS_DIR = Path(__file__).parent.parent.parent / "output" / "graphs"

__all__ = [
    "GRAPHS_DIR",
    "SETTINGS_FILE",
]
