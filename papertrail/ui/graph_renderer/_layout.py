"""Force-directed layout for the entity graph.

Repulsion only: every pair of nodes pushes apart, strongly when closer than
the configured spacing and gently otherwise, so the layout keeps spreading
instead of settling early. Relations never attract their endpoints; edges of
any length are acceptable.

Cost is O(iterations * N^2) and runs synchronously. Past a few hundred
entities a rebuild blocks noticeably.
"""

import logging
import math
import random
from collections.abc import Sequence

from papertrail.memory.entities import Entity, PositionedEntity
from papertrail.settings import Settings
from papertrail.utils.logging_config import log_performance

logger = logging.getLogger(__name__)


class LayoutEngine:
    """Assigns canvas positions to entities with a repulsion simulation."""

    def __init__(self, settings: Settings, rng: random.Random | None = None):
        """Initialize the layout engine.

        Args:
            settings: Canvas and simulation parameters.
            rng: Random source for initial placement. Defaults to a generator
                seeded from ``settings.layout_seed`` (unseeded when None).
        """
        self.settings = settings
        self.rng = rng if rng is not None else random.Random(settings.layout_seed)

    def layout(self, entities: Sequence[Entity]) -> list[PositionedEntity]:
        """Lay out entities on the canvas.

        Args:
            entities: Filtered entities to place.

        Returns:
            Positioned entities in the same order as the input.
        """
        if not entities:
            return []

        with log_performance(logger, f"graph_layout[{len(entities)} entities]"):
            positions = self.initial_positions(len(entities))
            self.simulate(positions)

        radius = self.settings.node_radius
        return [
            PositionedEntity(**entity.model_dump(), x=x, y=y, radius=radius)
            for entity, (x, y) in zip(entities, positions, strict=True)
        ]

    def initial_positions(self, count: int) -> list[list[float]]:
        """Place *count* points uniformly at random inside the inset canvas."""
        margin = self.settings.layout_initial_margin
        width = self.settings.canvas_width - 2 * margin
        height = self.settings.canvas_height - 2 * margin
        return [
            [margin + self.rng.random() * width, margin + self.rng.random() * height]
            for _ in range(count)
        ]

    def simulate(self, positions: list[list[float]], iterations: int | None = None) -> None:
        """Run the simulation in place.

        Args:
            positions: Mutable [x, y] pairs.
            iterations: Number of steps; defaults to ``settings.layout_iterations``.
        """
        total = self.settings.layout_iterations if iterations is None else iterations
        bounds_after = total * self.settings.layout_bounds_start
        for iteration in range(total):
            self.apply_repulsion(positions)
            if iteration > bounds_after:
                self.apply_soft_bounds(positions)
        logger.debug("Layout simulation finished: %d points, %d iterations", len(positions), total)

    def apply_repulsion(self, positions: list[list[float]]) -> None:
        """Push every pair of points apart along the line between them."""
        spacing = self.settings.node_spacing
        repulsion = self.settings.repulsion_force
        near = self.settings.repulsion_near_multiplier
        far = self.settings.repulsion_far_multiplier
        count = len(positions)

        for i in range(count):
            pi = positions[i]
            for j in range(i + 1, count):
                pj = positions[j]
                dx = pj[0] - pi[0]
                dy = pj[1] - pi[1]
                raw = math.hypot(dx, dy)
                if raw > 0:
                    ux, uy = dx / raw, dy / raw
                else:
                    # Coincident points: no line to push along, pick one
                    angle = self.rng.random() * 2 * math.pi
                    ux, uy = math.cos(angle), math.sin(angle)

                dist = max(raw, 1.0)
                multiplier = near if dist < spacing else far
                force = repulsion / (dist * dist) * multiplier
                fx = ux * force
                fy = uy * force

                pi[0] -= fx
                pi[1] -= fy
                pj[0] += fx
                pj[1] += fy

    def apply_soft_bounds(self, positions: list[list[float]]) -> None:
        """Pull points outside the margin back by a fraction of the overshoot.

        Never clamps: a point far outside the canvas moves back gradually
        over the remaining iterations.
        """
        margin = self.settings.layout_bounds_margin
        pull = self.settings.layout_bounds_pull
        max_x = self.settings.canvas_width - margin
        max_y = self.settings.canvas_height - margin

        for point in positions:
            if point[0] < margin:
                point[0] += (margin - point[0]) * pull
            if point[0] > max_x:
                point[0] -= (point[0] - max_x) * pull
            if point[1] < margin:
                point[1] += (margin - point[1]) * pull
            if point[1] > max_y:
                point[1] -= (point[1] - max_y) * pull
