"""
Force-directed layout using spring physics.

Simulates physical forces:
- All tables repel each other (like charged particles)
- Related tables attract toward an ideal separation (like springs)

Nodes start on a circle (no randomness), movement per iteration is capped
by a temperature that cools geometrically, and the final layout is
centered on the origin. Cost is O(iterations * tables^2); there is no cap
on table count, so very large schemas should be laid out off the UI thread.
"""

import logging
import math
import time

from .config import (
    ATTRACTION_STRENGTH,
    COOLING_FACTOR,
    FORCE_ITERATIONS,
    INITIAL_TEMPERATURE,
    MIN_CIRCLE_RADIUS,
    MIN_DISTANCE,
    RADIUS_PER_TABLE,
    REPULSION_STRENGTH,
)
from .geometry import build_result, circle_positions, empty_result
from .models import (
    LayoutAlgorithm,
    LayoutOptions,
    LayoutResult,
    Position,
    PositionedNode,
    Schema,
)

logger = logging.getLogger(__name__)

Point = tuple[float, float]


def initial_radius(table_count: int) -> float:
    """Radius of the starting circle: grows with the table count, at least 200."""
    return max(MIN_CIRCLE_RADIUS, table_count * RADIUS_PER_TABLE)


def _separation(p1: Point, p2: Point) -> tuple[float, float, float]:
    """Vector from p1 to p2 and its length, floored to MIN_DISTANCE."""
    dx = p2[0] - p1[0]
    dy = p2[1] - p1[1]
    dist = max(MIN_DISTANCE, math.sqrt(dx * dx + dy * dy))
    return dx, dy, dist


def compute_displacements(
    positions: list[Point],
    springs: list[tuple[int, int]],
    ideal_distance: float,
) -> list[Point]:
    """
    Compute the net force on every node for one iteration.

    Args:
        positions: Current node positions (index-aligned with the tables)
        springs: (source_index, target_index) for every resolvable relation
        ideal_distance: Rest length of the springs

    Returns:
        A new list of (dx, dy) displacements, one per node
    """
    forces = [[0.0, 0.0] for _ in positions]

    # Repulsion between all node pairs (Coulomb's law: F = k / r^2)
    for i in range(len(positions)):
        for j in range(i + 1, len(positions)):
            dx, dy, dist = _separation(positions[i], positions[j])
            force = REPULSION_STRENGTH / (dist * dist)
            fx = dx / dist * force
            fy = dy / dist * force
            forces[i][0] -= fx
            forces[i][1] -= fy
            forces[j][0] += fx
            forces[j][1] += fy

    # Attraction along relations (Hooke's law: F = k * (d - ideal))
    for source, target in springs:
        dx, dy, dist = _separation(positions[source], positions[target])
        force = ATTRACTION_STRENGTH * (dist - ideal_distance)
        fx = dx / dist * force
        fy = dy / dist * force
        forces[source][0] += fx
        forces[source][1] += fy
        forces[target][0] -= fx
        forces[target][1] -= fy

    return [(fx, fy) for fx, fy in forces]


def apply_displacements(
    positions: list[Point],
    displacements: list[Point],
    temperature: float,
) -> list[Point]:
    """Move every node by its displacement, capped in length at `temperature`."""
    moved: list[Point] = []
    for (x, y), (dx, dy) in zip(positions, displacements):
        magnitude = math.sqrt(dx * dx + dy * dy)
        if magnitude > 0:
            scale = min(magnitude, temperature) / magnitude
            x += dx * scale
            y += dy * scale
        moved.append((x, y))
    return moved


def center_positions(positions: list[Point]) -> list[Point]:
    """Translate points so their centroid is the origin."""
    if not positions:
        return positions
    cx = sum(x for x, _ in positions) / len(positions)
    cy = sum(y for _, y in positions) / len(positions)
    return [(x - cx, y - cy) for x, y in positions]


def force_layout(
    schema: Schema,
    options: LayoutOptions,
    iterations: int = FORCE_ITERATIONS,
) -> LayoutResult:
    """
    Arrange tables with a deterministic force simulation.

    Args:
        schema: Tables and relations to arrange
        options: Fully merged layout options
        iterations: Number of simulation steps

    Returns:
        LayoutResult centered on the origin
    """
    started = time.perf_counter()
    tables = schema.tables

    if not tables:
        return empty_result(LayoutAlgorithm.FORCE_DIRECTED, options, started)

    size = options.node_size
    ideal_distance = options.spacing.node_spacing + max(size.width, size.height)

    # First occurrence wins for duplicate IDs; dangling relations get no spring
    index_by_id: dict[str, int] = {}
    for i, table in enumerate(tables):
        index_by_id.setdefault(table.id, i)

    springs = [
        (index_by_id[r.source_table], index_by_id[r.target_table])
        for r in schema.relations
        if r.source_table in index_by_id and r.target_table in index_by_id
    ]

    positions = circle_positions(len(tables), initial_radius(len(tables)))
    temperature = INITIAL_TEMPERATURE

    for _ in range(iterations):
        displacements = compute_displacements(positions, springs, ideal_distance)
        positions = apply_displacements(positions, displacements, temperature)
        temperature *= COOLING_FACTOR

    positions = center_positions(positions)

    nodes = [
        PositionedNode(id=table.id, position=Position(x=x, y=y), size=size)
        for table, (x, y) in zip(tables, positions)
    ]

    return build_result(
        LayoutAlgorithm.FORCE_DIRECTED, options, nodes, schema.relations, started
    )
