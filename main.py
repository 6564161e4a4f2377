#!/usr/bin/env python3
"""Paper Trail - entity relationship graph viewer.

Shows the people, organizations, topics, locations and sources extracted
from saved articles as an interactive graph.

Usage:
    python main.py                          # Default graph file
    python main.py --graph path/to/graph.json
    python main.py --clear-graph            # Delete the stored graph
"""

import argparse
import logging
import time
from pathlib import Path

from papertrail.utils.exceptions import ConfigError
from papertrail.utils.logging_config import setup_logging

logger = logging.getLogger(__name__)

DEFAULT_GRAPH_NAME = "entity_graph.json"


def resolve_graph_path(cli_path: str | None, settings_path: str | None) -> Path:
    """Pick the graph file: command line first, then settings, then the default."""
    from papertrail.settings import GRAPHS_DIR

    if cli_path:
        return Path(cli_path)
    if settings_path:
        return Path(settings_path)
    return GRAPHS_DIR / DEFAULT_GRAPH_NAME


def run_web_ui(graph_path: Path, host: str = "127.0.0.1", port: int = 7861) -> None:
    """Launch the NiceGUI graph viewer.

    Args:
        graph_path: Entity graph JSON file.
        host: Host to bind to.
        port: Port to listen on.
    """
    from nicegui import ui

    from papertrail.memory.entity_graph import load_graph
    from papertrail.settings import Settings
    from papertrail.ui.components import EntityGraphComponent
    from papertrail.utils.exceptions import GraphDataError

    logger.info("Starting Paper Trail graph viewer for %s", graph_path)
    settings = Settings.load()

    def read_graph():
        try:
            return load_graph(graph_path)
        except GraphDataError as e:
            logger.error("Could not load entity graph: %s", e)
            ui.notify(f"Could not load entity graph: {e}", type="negative")
            return None

    @ui.page("/")
    def index() -> None:
        graph = read_graph()
        component: EntityGraphComponent | None = None

        def rebuild() -> None:
            if component is None:
                return
            logger.info("Rebuilding graph view")
            component.set_building(True)
            try:
                fresh = read_graph()
                if fresh is not None:
                    component.set_data(fresh.entities, fresh.relations)
            finally:
                component.set_building(False)

        ui.label("Paper Trail").classes("text-2xl font-bold")
        component = EntityGraphComponent(
            entities=graph.entities if graph else [],
            relations=graph.relations if graph else [],
            settings=settings,
            on_entity_click=lambda entity_id: logger.info("Entity selected: %s", entity_id),
            on_build_graph=rebuild,
        )
        component.build()

    ui.run(host=host, port=port, title="Paper Trail", reload=False, show=False)


def main() -> None:
    """Main entry point."""
    t0 = time.perf_counter()
    parser = argparse.ArgumentParser(description="Paper Trail - entity relationship graph viewer")
    parser.add_argument(
        "--graph",
        type=str,
        metavar="PATH",
        help=f"Entity graph JSON file (default: output/graphs/{DEFAULT_GRAPH_NAME})",
    )
    parser.add_argument(
        "--host",
        type=str,
        default="127.0.0.1",
        help="Host for web UI (default: 127.0.0.1)",
    )
    parser.add_argument(
        "--port",
        type=int,
        default=7861,
        help="Port for web UI (default: 7861)",
    )
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        default=None,
        help="Logging level (default: the persisted setting)",
    )
    parser.add_argument(
        "--log-file",
        type=str,
        default="default",
        help="Log file path (default: output/logs/papertrail.log, use 'none' to disable)",
    )
    parser.add_argument(
        "--clear-graph",
        action="store_true",
        help="Delete the stored entity graph and exit",
    )

    args = parser.parse_args()

    from papertrail.settings import Settings

    try:
        settings = Settings.load()
    except ValueError as e:
        raise ConfigError(f"Invalid settings file: {e}") from e
    log_file = None if args.log_file.lower() == "none" else args.log_file
    setup_logging(level=args.log_level or settings.log_level, log_file=log_file)
    logger.info("Settings loaded in %.2fs", time.perf_counter() - t0)

    graph_path = resolve_graph_path(args.graph, settings.graph_file)
    if args.clear_graph:
        from papertrail.memory.entity_graph import clear_graph

        clear_graph(graph_path)
        return
    run_web_ui(graph_path, host=args.host, port=args.port)


if __name__ in {"__main__", "__mp_main__"}:
    main()
