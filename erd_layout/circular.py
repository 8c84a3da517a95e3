"""
Circular layout - tables arranged evenly on a circle.

The circle is sized so each table gets roughly `node width + node_spacing`
of arc, starting at the top and proceeding clockwise in input order.
"""

import math
import time

from .config import MIN_CIRCLE_RADIUS
from .geometry import build_result, circle_positions, empty_result
from .models import (
    LayoutAlgorithm,
    LayoutOptions,
    LayoutResult,
    Position,
    PositionedNode,
    Schema,
)


def circle_radius(table_count: int, options: LayoutOptions) -> float:
    """Radius giving each table `width + node_spacing` of circumference, at least 200."""
    circumference = table_count * (options.node_size.width + options.spacing.node_spacing)
    return max(MIN_CIRCLE_RADIUS, circumference / (2 * math.pi))


def circular_layout(schema: Schema, options: LayoutOptions) -> LayoutResult:
    """
    Arrange tables on a circle.

    Args:
        schema: Tables and relations to arrange
        options: Fully merged layout options (direction is recorded only)

    Returns:
        LayoutResult with `rank` set to each table's position on the circle
    """
    started = time.perf_counter()
    tables = schema.tables

    if not tables:
        return empty_result(LayoutAlgorithm.CIRCULAR, options, started)

    radius = circle_radius(len(tables), options)
    points = circle_positions(len(tables), radius, start_angle=-math.pi / 2)

    nodes = [
        PositionedNode(
            id=table.id,
            position=Position(x=x, y=y),
            size=options.node_size,
            rank=i,
        )
        for i, (table, (x, y)) in enumerate(zip(tables, points))
    ]

    return build_result(LayoutAlgorithm.CIRCULAR, options, nodes, schema.relations, started)
