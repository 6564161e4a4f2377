"""Pytest fixtures for Paper Trail tests."""

import logging
import random

import pytest

from papertrail.memory.entities import Entity, Relation
from papertrail.settings import Settings

pytest_plugins = ["nicegui.testing.user_plugin"]


@pytest.fixture(autouse=True, scope="function")
def cleanup_production_log_handlers():
    """Remove file handlers pointing to the production log after each test.

    Tests that call setup_logging() with the default file would otherwise
    leave a handler writing to output/logs/papertrail.log.
    """
    yield

    root_logger = logging.getLogger()
    production_log_name = "papertrail.log"

    handlers_to_remove = [
        handler
        for handler in root_logger.handlers
        if isinstance(handler, logging.FileHandler)
        and production_log_name in getattr(handler, "baseFilename", "")
    ]
    for handler in handlers_to_remove:
        handler.close()
        root_logger.removeHandler(handler)


@pytest.fixture(autouse=True)
def isolate_settings_file(tmp_path, monkeypatch):
    """Redirect settings.json to a temp directory so tests never touch the real one."""
    import papertrail.settings._paths as paths_module

    monkeypatch.setattr(paths_module, "SETTINGS_FILE", tmp_path / "settings.json")


@pytest.fixture(autouse=True)
def clear_settings_cache_per_test():
    """Clear Settings cache before each test to ensure isolation."""
    Settings.clear_cache()
    yield
    Settings.clear_cache()


@pytest.fixture
def settings() -> Settings:
    """Default settings with a fixed layout seed."""
    return Settings(layout_seed=42)


@pytest.fixture
def rng() -> random.Random:
    """Seeded random source for layout tests."""
    return random.Random(1234)


@pytest.fixture
def sample_entities() -> list[Entity]:
    """Three entities of different types."""
    return [
        Entity(id="a", name="Ada Lovelace", type="person", article_ids=["art-1", "art-2"]),
        Entity(id="b", name="Computing", type="topic", article_ids=["art-1"], mention_count=1),
        Entity(id="c", name="Royal Society", type="organization", mention_count=4),
    ]


@pytest.fixture
def sample_relations() -> list[Relation]:
    """A single a-b relation of strength 2."""
    return [Relation(source_id="a", target_id="b", strength=2)]
