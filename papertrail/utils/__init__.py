"""Shared utilities for Paper Trail."""
