"""Paper Trail entity graph: layout, viewport and selection for the article connections view."""

__version__ = "0.1.0"
