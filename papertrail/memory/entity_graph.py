"""Entity graph storage and NetworkX queries.

The graph file is the JSON snapshot written by the extraction pipeline.
Loading tolerates a missing file (no graph built yet) but not a malformed
one.
"""

import json
import logging
from pathlib import Path

import networkx as nx
from pydantic import ValidationError

from papertrail.memory.entities import Entity, EntityGraph
from papertrail.utils.exceptions import GraphDataError
from papertrail.utils.json_io import atomic_write_json

logger = logging.getLogger(__name__)


def load_graph(path: Path | str) -> EntityGraph | None:
    """Load an entity graph from a JSON file.

    Args:
        path: Graph file path.

    Returns:
        The loaded EntityGraph, or None if the file does not exist.

    Raises:
        GraphDataError: If the file cannot be read or does not match the schema.
    """
    path = Path(path)
    if not path.exists():
        logger.info("No entity graph at %s", path)
        return None

    try:
        with open(path, encoding="utf-8") as f:
            data = json.load(f)
    except json.JSONDecodeError as e:
        raise GraphDataError(f"Entity graph is not valid JSON: {e}", path=path) from e
    except OSError as e:
        raise GraphDataError(f"Cannot read entity graph: {e}", path=path) from e

    try:
        graph = EntityGraph.model_validate(data)
    except ValidationError as e:
        raise GraphDataError(
            f"Entity graph does not match schema ({e.error_count()} errors)", path=path
        ) from e

    logger.info(
        "Loaded entity graph from %s: %d entities, %d relations",
        path,
        len(graph.entities),
        len(graph.relations),
    )
    return graph


def save_graph(graph: EntityGraph, path: Path | str) -> None:
    """Save an entity graph as JSON using the camelCase keys of the browser app.

    Args:
        graph: Graph to save.
        path: Destination file path.
    """
    atomic_write_json(path, graph.model_dump(by_alias=True))
    logger.info(
        "Saved entity graph to %s: %d entities, %d relations",
        path,
        len(graph.entities),
        len(graph.relations),
    )


def clear_graph(path: Path | str) -> None:
    """Delete a stored entity graph if present."""
    path = Path(path)
    try:
        path.unlink()
        logger.info("Cleared entity graph at %s", path)
    except FileNotFoundError:
        logger.debug("No entity graph to clear at %s", path)


def to_networkx(graph: EntityGraph) -> nx.Graph:
    """Build an undirected NetworkX graph.

    Relations whose endpoints are unknown are skipped. Strength becomes the
    edge weight; repeated relations between the same pair add up.
    """
    g = nx.Graph()
    for entity in graph.entities:
        g.add_node(entity.id, name=entity.name, type=entity.type)

    skipped = 0
    for relation in graph.relations:
        if relation.source_id not in g or relation.target_id not in g:
            skipped += 1
            continue
        if g.has_edge(relation.source_id, relation.target_id):
            g[relation.source_id][relation.target_id]["weight"] += relation.strength
        else:
            g.add_edge(relation.source_id, relation.target_id, weight=relation.strength)

    if skipped:
        logger.debug("Skipped %d dangling relations building graph", skipped)
    return g


def get_most_connected(graph: EntityGraph, limit: int = 10) -> list[tuple[Entity, int]]:
    """Get entities with the highest degree.

    Args:
        graph: Entity graph.
        limit: Maximum number to return.

    Returns:
        List of (Entity, connection_count) tuples, most connected first.
    """
    g = to_networkx(graph)
    by_id = {e.id: e for e in graph.entities}
    ranked = sorted(g.degree, key=lambda item: item[1], reverse=True)
    return [(by_id[node_id], degree) for node_id, degree in ranked[:limit]]
