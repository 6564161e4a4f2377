"""Tests for GraphViewState."""

import math
import random
from unittest.mock import MagicMock

import pytest

from papertrail.memory.entities import Entity, Relation
from papertrail.ui.state import GraphViewState


@pytest.fixture
def state(settings, sample_entities, sample_relations) -> GraphViewState:
    view = GraphViewState(settings=settings, rng=random.Random(21))
    view.set_data(sample_entities, sample_relations)
    return view


class TestScenario:
    """End-to-end behaviour of the three-entity example graph."""

    def test_hide_organization_keeps_edges(self, state):
        """Test that hiding organizations drops c but keeps the a-b edge."""
        state.toggle_filter("organization")

        assert [e.id for e in state.positioned_entities] == ["a", "b"]
        assert [(r.source_id, r.target_id) for r in state.visible_relations] == [("a", "b")]

    def test_selecting_a_links_b(self, state):
        """Test that selecting a gives neighbors {b}."""
        state.select_entity("a")

        assert state.neighbor_ids() == {"b"}
        assert state.summary_text() == "3 entities · 1 connections · 1 linked"

    def test_frame_edges_reference_rendered_nodes(self, state):
        """Test that rendered edges only connect rendered nodes."""
        state.set_data(
            state.entities, state.relations + [Relation(source_id="a", target_id="zzz")]
        )
        frame = state.build_frame()
        node_ids = {n.id for n in frame.nodes}

        assert all(e.source_id in node_ids and e.target_id in node_ids for e in frame.edges)
        assert len(frame.edges) == 1


class TestLayoutCache:
    """Tests for the dirty-flag layout cache."""

    def test_layout_computed_lazily_once(self, state):
        """Test that positions are cached until something changes."""
        assert state.layout_dirty

        first = state.positioned_entities
        assert not state.layout_dirty
        assert state.positioned_entities is first

    def test_filter_change_marks_dirty(self, state):
        """Test that toggling a filter invalidates the layout."""
        _ = state.positioned_entities
        state.toggle_filter("topic")

        assert state.layout_dirty

    def test_set_data_marks_dirty(self, state, sample_entities):
        """Test that new data invalidates the layout."""
        _ = state.positioned_entities
        state.set_data(sample_entities[:1], [])

        assert state.layout_dirty
        assert [e.id for e in state.positioned_entities] == ["a"]

    def test_selection_does_not_relayout(self, state):
        """Test that selecting keeps existing positions."""
        before = [(e.x, e.y) for e in state.positioned_entities]
        state.select_entity("b")

        assert not state.layout_dirty
        assert [(e.x, e.y) for e in state.positioned_entities] == before


class TestStaleSelection:
    """Tests for clearing selections that are no longer visible."""

    def test_filtering_out_selection_clears_it(self, state):
        """Test that hiding the selected entity's type clears the selection."""
        state.select_entity("c")
        state.toggle_filter("organization")

        assert state.selected_id is None

    def test_filtering_other_type_keeps_selection(self, state):
        """Test that unrelated filter changes keep the selection."""
        state.select_entity("a")
        state.toggle_filter("organization")

        assert state.selected_id == "a"

    def test_removing_entity_from_data_clears_selection(self, state, sample_entities):
        """Test that replacing data without the selected entity clears it."""
        state.select_entity("b")
        state.set_data([sample_entities[0]], [])

        assert state.selected_id is None

    def test_hidden_hover_cleared(self, state):
        """Test that hover is dropped when its entity is hidden."""
        state.set_hover("b")
        state.toggle_filter("topic")

        assert state.selection.hovered_id is None


class TestCallbacks:
    """Tests for host callbacks."""

    def test_entity_click_fires_on_select(self, settings, sample_entities):
        """Test that on_entity_click gets the id on a new selection."""
        on_click = MagicMock()
        view = GraphViewState(settings=settings, on_entity_click=on_click)
        view.set_data(sample_entities, [])

        view.select_entity("a")

        on_click.assert_called_once_with("a")

    def test_entity_click_not_fired_on_deselect(self, settings, sample_entities):
        """Test that toggling off does not fire the callback."""
        on_click = MagicMock()
        view = GraphViewState(settings=settings, on_entity_click=on_click)
        view.set_data(sample_entities, [])

        view.select_entity("a")
        view.select_entity("a")

        assert on_click.call_count == 1

    def test_request_build_calls_callback(self, settings):
        """Test that a build request reaches the host."""
        on_build = MagicMock()
        view = GraphViewState(settings=settings, on_build_graph=on_build)

        assert view.request_build() is True
        on_build.assert_called_once_with()

    def test_request_build_ignored_while_building(self, settings):
        """Test that no second build starts while one is running."""
        on_build = MagicMock()
        view = GraphViewState(settings=settings, on_build_graph=on_build, is_building=True)

        assert view.request_build() is False
        on_build.assert_not_called()

    def test_request_build_without_callback(self, settings):
        """Test that a missing callback is not an error."""
        assert GraphViewState(settings=settings).request_build() is False


class TestQueries:
    """Tests for lookups and hit testing."""

    def test_get_entity_only_returns_visible(self, state):
        """Test that hidden entities do not resolve."""
        assert state.get_entity("c") is not None
        state.toggle_filter("organization")

        assert state.get_entity("c") is None
        assert state.get_entity(None) is None

    def test_selected_connections_sorted_by_strength(self, settings):
        """Test that the detail panel list puts strong relations first."""
        entities = [
            Entity(id="a", name="A", type="person"),
            Entity(id="b", name="B", type="topic"),
            Entity(id="c", name="C", type="topic"),
        ]
        relations = [
            Relation(source_id="a", target_id="b", strength=1),
            Relation(source_id="c", target_id="a", strength=5),
        ]
        view = GraphViewState(settings=settings)
        view.set_data(entities, relations)
        view.select_entity("a")

        connections = view.selected_connections()

        assert [(e.id, r.strength) for e, r in connections] == [("c", 5), ("b", 1)]

    def test_selected_connections_one_row_per_entity(self, settings):
        """Test that a pair linked both ways is listed once with its strongest relation."""
        entities = [
            Entity(id="a", name="A", type="person"),
            Entity(id="b", name="B", type="topic"),
        ]
        relations = [
            Relation(source_id="a", target_id="b", strength=2),
            Relation(source_id="b", target_id="a", strength=1),
        ]
        view = GraphViewState(settings=settings)
        view.set_data(entities, relations)
        view.select_entity("a")

        connections = view.selected_connections()

        assert [(e.id, r.strength) for e, r in connections] == [("b", 2)]
        assert view.summary_text().endswith("1 linked")

    def test_most_connected_ranks_by_degree(self, settings):
        """Test that hubs come first and isolated entities are left out."""
        entities = [
            Entity(id="hub", name="Hub", type="person"),
            Entity(id="x", name="X", type="topic"),
            Entity(id="y", name="Y", type="topic"),
            Entity(id="lonely", name="Lonely", type="location"),
        ]
        relations = [
            Relation(source_id="hub", target_id="x"),
            Relation(source_id="y", target_id="hub"),
        ]
        view = GraphViewState(settings=settings)
        view.set_data(entities, relations)

        ranked = [(e.id, degree) for e, degree in view.most_connected()]

        assert ranked[0] == ("hub", 2)
        assert sorted(ranked[1:]) == [("x", 1), ("y", 1)]
        assert "lonely" not in [entity_id for entity_id, _ in ranked]

    def test_most_connected_follows_filter(self, state):
        """Test that hidden entities and their relations are not ranked."""
        assert [e.id for e, _ in state.most_connected()] == ["a", "b"]

        state.toggle_filter("topic")

        assert state.most_connected() == []

    def test_most_connected_limit(self, state, settings):
        """Test the configured and explicit limits."""
        settings.most_connected_count = 1

        assert len(state.most_connected()) == 1
        assert len(state.most_connected(limit=0)) == 0

    def test_entity_at_hits_node_disc(self, state):
        """Test hit testing inside and outside a node."""
        target = state.positioned_entities[0]

        assert state.entity_at(target.x + 5, target.y - 5).id == target.id
        assert state.entity_at(-10_000, -10_000) is None

    def test_entity_at_uses_rendered_radius(self, state):
        """Test that hit radius shrinks with the zoom like the drawn node."""
        target = state.positioned_entities[0]
        state.viewport.zoom(3)  # scale 4, drawn radius halves
        offset = target.radius * 0.75

        hit = state.entity_at(target.x + offset, target.y)
        assert hit is None or hit.id != target.id
        assert math.isclose(state.viewport.transform.scale, 4.0)

    def test_zoom_to_entity_unknown(self, state):
        """Test that focusing a hidden id is refused."""
        assert state.zoom_to_entity("nope") is False

    def test_zoom_to_entity_centers(self, state, settings):
        """Test that focusing centers the entity at scale 2."""
        entity = state.positioned_entities[1]

        assert state.zoom_to_entity(entity.id) is True
        assert state.viewport.content_to_screen(entity.x, entity.y) == pytest.approx(
            (settings.canvas_width / 2, settings.canvas_height / 2)
        )

    def test_zoom_to_fit_empty_is_noop(self, settings):
        """Test that fitting an empty graph does nothing."""
        view = GraphViewState(settings=settings)
        view.viewport.zoom(1)
        before = view.viewport.transform

        view.zoom_to_fit()

        assert view.viewport.transform == before

    def test_type_counts_ignore_filter(self, state):
        """Test that counts cover hidden types too."""
        state.toggle_filter("person")

        assert state.type_counts["person"] == 1
