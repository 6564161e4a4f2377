"""Centralized exception hierarchy for Paper Trail.

Exception Hierarchy:

    PaperTrailError (base for all application errors)
    ├── ConfigError (configuration parsing/validation failures)
    └── GraphDataError (entity graph file unreadable or malformed)

The layout, viewport and selection code has no error pathways of its own:
edge cases such as dangling relations or coincident points are handled
silently. These exceptions cover the I/O around it.

Usage:
    from papertrail.utils.exceptions import GraphDataError

    try:
        graph = load_graph(path)
    except GraphDataError:
        logger.error("Could not load entity graph")
"""

import logging
from pathlib import Path

logger = logging.getLogger(__name__)


class PaperTrailError(Exception):
    """Base exception for all Paper Trail errors.

    All custom exceptions should inherit from this class to allow
    catching all application-specific errors with a single except clause.
    """

    pass


class ConfigError(PaperTrailError):
    """Raised when configuration parsing or validation fails.

    This indicates issues with settings.json or other configuration
    that cannot be loaded or is invalid.
    """

    pass


class GraphDataError(PaperTrailError):
    """Raised when an entity graph file cannot be read or parsed.

    Attributes:
        path: The graph file that failed to load, if known.
    """

    def __init__(self, message: str, path: Path | str | None = None):
        """Initialize GraphDataError with the offending path.

        Args:
            message: Human-readable error message.
            path: Path of the graph file that failed.
        """
        super().__init__(message)
        self.path = Path(path) if path is not None else None
        logger.debug("GraphDataError initialized: message=%s, path=%s", message, self.path)
