"""Settings package for Paper Trail.

- _paths.py: Path constants for settings and output directories
- _types.py: Option tables shared by settings and validation
- _validation.py: Settings validation functions
- _settings.py: Main Settings dataclass
"""

from papertrail.settings._paths import GRAPHS_DIR, SETTINGS_FILE
from papertrail.settings._settings import Settings
from papertrail.settings._types import LOG_LEVELS

__all__ = [
    "GRAPHS_DIR",
    "LOG_LEVELS",
    "SETTINGS_FILE",
    "Settings",
]
