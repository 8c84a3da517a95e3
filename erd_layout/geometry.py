"""
Geometry helpers shared by every layout algorithm.

- Edge materialization: one PositionedEdge per Relation
- Bounding box over positioned nodes
- Assembly of the final LayoutResult (including the empty result)
- Even placement of points on a circle
"""

import logging
import math
import time
from typing import Optional

from .models import (
    BoundingBox,
    LayoutAlgorithm,
    LayoutMetadata,
    LayoutOptions,
    LayoutResult,
    PositionedEdge,
    PositionedNode,
    Relation,
)

logger = logging.getLogger(__name__)


def create_positioned_edges(relations: list[Relation]) -> list[PositionedEdge]:
    """
    Build one edge per relation, independent of the algorithm.

    Handles are derived from the column names so renderers can attach the
    edge to the right row of each table.
    """
    return [
        PositionedEdge(
            id=relation.id,
            source=relation.source_table,
            target=relation.target_table,
            source_handle=f"{relation.source_column}-source",
            target_handle=f"{relation.target_column}-target",
        )
        for relation in relations
    ]


def calculate_bounds(nodes: list[PositionedNode]) -> BoundingBox:
    """
    Compute the minimal box covering every node rectangle.

    Args:
        nodes: Positioned nodes

    Returns:
        BoundingBox; the zero box at the origin when there are no nodes
    """
    if not nodes:
        return BoundingBox()

    min_x = min(n.position.x for n in nodes)
    min_y = min(n.position.y for n in nodes)
    max_x = max(n.right for n in nodes)
    max_y = max(n.bottom for n in nodes)

    return BoundingBox(x=min_x, y=min_y, width=max_x - min_x, height=max_y - min_y)


def elapsed_ms(started: float) -> float:
    """Milliseconds since a `time.perf_counter()` reading."""
    return (time.perf_counter() - started) * 1000


def build_result(
    algorithm: LayoutAlgorithm,
    options: LayoutOptions,
    nodes: list[PositionedNode],
    relations: list[Relation],
    started: float,
    layer_count: Optional[int] = None,
) -> LayoutResult:
    """Wrap positioned nodes into a LayoutResult with edges, bounds, and metadata."""
    edges = create_positioned_edges(relations)
    bounds = calculate_bounds(nodes)
    duration = elapsed_ms(started)

    logger.debug(
        f"{algorithm.value} layout: {len(nodes)} nodes, {len(edges)} edges "
        f"in {duration:.2f}ms"
    )

    return LayoutResult(
        nodes=nodes,
        edges=edges,
        bounds=bounds,
        metadata=LayoutMetadata(
            algorithm=algorithm,
            direction=options.direction,
            node_count=len(nodes),
            edge_count=len(edges),
            layer_count=layer_count,
            execution_time_ms=duration,
        ),
    )


def empty_result(
    algorithm: LayoutAlgorithm,
    options: LayoutOptions,
    started: float,
    layer_count: Optional[int] = None,
) -> LayoutResult:
    """The result for a schema without tables: no nodes, no edges, zero box."""
    return LayoutResult(
        bounds=BoundingBox(),
        metadata=LayoutMetadata(
            algorithm=algorithm,
            direction=options.direction,
            node_count=0,
            edge_count=0,
            layer_count=layer_count,
            execution_time_ms=elapsed_ms(started),
        ),
    )


def circle_positions(
    count: int,
    radius: float,
    start_angle: float = 0.0,
) -> list[tuple[float, float]]:
    """
    Spread `count` points evenly on a circle centered at the origin.

    The i-th point sits at angle `start_angle + 2*pi*i/count`; with y pointing
    down the points advance clockwise on screen.
    """
    points: list[tuple[float, float]] = []
    for i in range(count):
        angle = start_angle + 2 * math.pi * i / count
        points.append((radius * math.cos(angle), radius * math.sin(angle)))
    return points
