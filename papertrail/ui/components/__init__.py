"""Reusable UI components for Paper Trail."""

from .graph import EntityGraphComponent

__all__ = ["EntityGraphComponent"]
