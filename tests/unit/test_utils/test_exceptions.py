"""Unit tests for custom exceptions in exceptions.py."""

from pathlib import Path

import pytest

from papertrail.utils.exceptions import ConfigError, GraphDataError, PaperTrailError


class TestHierarchy:
    """Tests for the exception hierarchy."""

    @pytest.mark.parametrize("error_cls", [ConfigError, GraphDataError])
    def test_subclasses_base(self, error_cls) -> None:
        """Test that every application error can be caught as PaperTrailError."""
        assert issubclass(error_cls, PaperTrailError)

    def test_config_error_message(self) -> None:
        """Test that ConfigError keeps its message."""
        assert str(ConfigError("bad settings")) == "bad settings"


class TestGraphDataError:
    """Tests for GraphDataError exception."""

    def test_stores_path(self) -> None:
        """Test GraphDataError converts and stores the path."""
        error = GraphDataError("Entity graph is not valid JSON", path="output/graphs/g.json")

        assert str(error) == "Entity graph is not valid JSON"
        assert error.path == Path("output/graphs/g.json")

    def test_path_defaults_to_none(self) -> None:
        """Test GraphDataError without a path."""
        assert GraphDataError("Broken").path is None
