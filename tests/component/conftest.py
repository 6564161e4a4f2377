"""Pytest configuration for NiceGUI component tests.

These tests use NiceGUI's User fixture for fast, lightweight testing
of UI components without requiring a browser.

Note: The pytest_plugins for NiceGUI is registered in the root conftest.py.
"""

import random

import pytest

from papertrail.memory.entities import Entity, Relation
from papertrail.ui.components import EntityGraphComponent


@pytest.fixture
def make_graph(settings, sample_entities, sample_relations):
    """Factory for graph components with deterministic layout.

    The component is returned unbuilt; call ``build()`` inside a page.
    """

    def _make(
        entities: list[Entity] | None = None,
        relations: list[Relation] | None = None,
        **kwargs,
    ) -> EntityGraphComponent:
        comp = EntityGraphComponent(
            entities=sample_entities if entities is None else entities,
            relations=sample_relations if relations is None else relations,
            settings=settings,
            **kwargs,
        )
        comp.state.layout_engine.rng = random.Random(8)
        return comp

    return _make
