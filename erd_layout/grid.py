"""
Grid layout ordered by connectivity.

Tables are sorted by how many relations touch them (most connected first,
input order on ties) and placed row-major into a roughly square grid.
"""

import logging
import math
import time

from .analysis import calculate_table_connections
from .geometry import build_result, empty_result
from .models import (
    LayoutAlgorithm,
    LayoutOptions,
    LayoutResult,
    Position,
    PositionedNode,
    Schema,
)

logger = logging.getLogger(__name__)


def grid_layout(schema: Schema, options: LayoutOptions) -> LayoutResult:
    """
    Arrange tables in a grid pattern.

    Cells are `node width + node_spacing` wide and
    `node height + layer_spacing` tall. Horizontal directions swap rows and
    columns; reversed directions grow rows toward negative coordinates.

    Args:
        schema: Tables and relations to arrange
        options: Fully merged layout options

    Returns:
        LayoutResult with `rank` set to each table's grid index
    """
    started = time.perf_counter()
    tables = schema.tables

    if not tables:
        return empty_result(LayoutAlgorithm.GRID, options, started)

    connections = calculate_table_connections(schema)

    # sorted() is stable, so ties keep input order
    ordered = sorted(tables, key=lambda t: connections[t.id].total, reverse=True)

    columns = math.ceil(math.sqrt(len(tables)))
    size = options.node_size
    cell_width = size.width + options.spacing.node_spacing
    cell_height = size.height + options.spacing.layer_spacing
    direction = options.direction

    nodes: list[PositionedNode] = []
    for i, table in enumerate(ordered):
        row = i // columns
        col = i % columns

        if direction.is_horizontal:
            x = row * cell_width
            y = col * cell_height
            if direction.is_reversed:
                x = 0.0 - x
        else:
            x = col * cell_width
            y = row * cell_height
            if direction.is_reversed:
                y = 0.0 - y

        nodes.append(PositionedNode(
            id=table.id,
            position=Position(x=x, y=y),
            size=size,
            rank=i,
        ))

    logger.debug(f"Grid of {columns} columns for {len(tables)} tables")

    return build_result(LayoutAlgorithm.GRID, options, nodes, schema.relations, started)
