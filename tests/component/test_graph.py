"""Component tests for the entity graph.

Tests that would catch runtime NiceGUI errors like:
- ui.html() missing required sanitize parameter
- Panels rebuilt from inside their own click handlers
"""

import pytest
from nicegui import ui
from nicegui.testing import User


@pytest.mark.component
class TestEntityGraphComponent:
    """Tests for the EntityGraphComponent class."""

    async def test_builds_without_data(self, user: User, make_graph):
        """Graph component shows the empty state when there are no entities."""
        graphs = {}

        @ui.page("/test-graph-empty")
        def test_page():
            graphs["graph"] = make_graph(entities=[], relations=[])
            graphs["graph"].build()

        await user.open("/test-graph-empty")
        await user.should_see("No entities yet")

        graph = graphs["graph"]
        assert graph.is_built
        assert graph._empty_state.visible
        assert not graph._graph_area.visible

    async def test_builds_with_data(self, user: User, make_graph):
        """Graph component renders SVG, counts and hub shortcuts for real data."""
        graphs = {}

        @ui.page("/test-graph-data")
        def test_page():
            graphs["graph"] = make_graph()
            graphs["graph"].build()

        await user.open("/test-graph-data")
        await user.should_see("3 entities · 1 connections")
        await user.should_see("Most connected:")
        await user.should_see("person (1)")

        graph = graphs["graph"]
        assert not graph._empty_state.visible
        assert graph._graph_area.visible
        assert "<svg" in graph._canvas.content
        assert 'data-entity-id="c"' in graph._canvas.content
        assert not graph._detail.visible

    async def test_set_data_after_build(self, user: User, make_graph, sample_entities):
        """Loading data into an empty component swaps the empty state for the canvas."""
        graphs = {}

        @ui.page("/test-graph-set-data")
        def test_page():
            graphs["graph"] = make_graph(entities=[], relations=[])
            graphs["graph"].build()

        await user.open("/test-graph-set-data")
        graph = graphs["graph"]
        graph.set_data(sample_entities, [])

        assert graph._graph_area.visible
        assert "<svg" in graph._canvas.content
        assert graph.state.most_connected() == []
        assert not graph._hubs_row.visible

    async def test_filter_toggle(self, user: User, make_graph):
        """Clicking a type filter hides that type from the canvas."""
        graphs = {}

        @ui.page("/test-graph-filter")
        def test_page():
            graphs["graph"] = make_graph()
            graphs["graph"].build()

        await user.open("/test-graph-filter")
        user.find("organization (1)").click()

        graph = graphs["graph"]
        assert not graph.state.filters.is_active("organization")
        assert [e.id for e in graph.state.positioned_entities] == ["a", "b"]
        assert 'data-entity-id="c"' not in graph._canvas.content
        await user.should_see("2 entities · 1 connections")

    async def test_hub_click_opens_detail_panel(self, user: User, make_graph):
        """Clicking a most-connected shortcut selects the entity and shows its details."""
        graphs = {}

        @ui.page("/test-graph-hub")
        def test_page():
            graphs["graph"] = make_graph()
            graphs["graph"].build()

        await user.open("/test-graph-hub")
        user.find("Ada Lovelace (1)").click()

        graph = graphs["graph"]
        assert graph.state.selected_id == "a"
        assert graph._detail.visible
        await user.should_see("Connections (1)")
        await user.should_see("Computing ×2")
        await user.should_see("Appears in 2 articles")

    async def test_connection_click_moves_selection(self, user: User, make_graph):
        """Clicking a connection row selects that entity and rebuilds the panel."""
        selected = []
        graphs = {}

        @ui.page("/test-graph-connection")
        def test_page():
            graphs["graph"] = make_graph(on_entity_click=selected.append)
            graphs["graph"].build()

        await user.open("/test-graph-connection")
        graph = graphs["graph"]
        graph.state.select_entity("a")
        graph.refresh()

        user.find("Computing ×2").click()

        assert graph.state.selected_id == "b"
        assert selected == ["a", "b"]
        await user.should_see("Ada Lovelace ×2")
        await user.should_see("1 mention")

    async def test_selection_without_connections(self, user: User, make_graph):
        """An isolated entity shows the no-connections line."""
        graphs = {}

        @ui.page("/test-graph-isolated")
        def test_page():
            graphs["graph"] = make_graph()
            graphs["graph"].build()

        await user.open("/test-graph-isolated")
        graph = graphs["graph"]
        graph.state.select_entity("c")
        graph.refresh()

        await user.should_see("No connections")
        await user.should_see("4 mentions")

    async def test_filtering_out_selection_hides_detail(self, user: User, make_graph):
        """Hiding the selected entity's type closes the detail panel."""
        graphs = {}

        @ui.page("/test-graph-filter-selection")
        def test_page():
            graphs["graph"] = make_graph()
            graphs["graph"].build()

        await user.open("/test-graph-filter-selection")
        graph = graphs["graph"]
        graph.state.select_entity("c")
        graph.refresh()
        assert graph._detail.visible

        user.find("organization (1)").click()

        assert graph.state.selected_id is None
        assert not graph._detail.visible

    async def test_build_buttons_disabled_while_building(self, user: User, make_graph):
        """Build buttons are disabled while a build runs and re-enabled after."""
        graphs = {}

        @ui.page("/test-graph-building")
        def test_page():
            graphs["graph"] = make_graph(entities=[], relations=[], is_building=True)
            graphs["graph"].build()

        await user.open("/test-graph-building")
        graph = graphs["graph"]
        assert len(graph._build_buttons) == 2
        assert all(not button.enabled for button in graph._build_buttons)

        graph.set_building(False)

        assert all(button.enabled for button in graph._build_buttons)
