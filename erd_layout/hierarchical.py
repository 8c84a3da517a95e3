"""
Hierarchical layout based on foreign-key dependencies.

Tables that reference nothing (root tables) go in layer 0. Every other
table goes one layer past the last of the tables it references, so
referenced tables always sit closer to the root than the tables that
point at them. Cycles are broken by forcing one table into the next layer.
"""

import logging
import time

from .geometry import build_result, empty_result
from .models import (
    LayoutAlgorithm,
    LayoutOptions,
    LayoutResult,
    Position,
    PositionedNode,
    Schema,
    Table,
)

logger = logging.getLogger(__name__)


def build_dependency_maps(
    schema: Schema,
) -> tuple[dict[str, set[str]], dict[str, set[str]]]:
    """
    Build the dependency graph of a schema.

    Relations whose endpoints are not tables of the schema are skipped, and
    so are self-references (a table never waits for itself).

    Args:
        schema: The schema to analyze

    Returns:
        (depends_on, depended_on_by): table_id -> IDs of tables it references,
        and table_id -> IDs of tables that reference it
    """
    depends_on: dict[str, set[str]] = {t.id: set() for t in schema.tables}
    depended_on_by: dict[str, set[str]] = {t.id: set() for t in schema.tables}

    for relation in schema.relations:
        source, target = relation.source_table, relation.target_table
        if source not in depends_on or target not in depends_on:
            continue
        if source == target:
            continue
        depends_on[source].add(target)
        depended_on_by[target].add(source)

    return depends_on, depended_on_by


def assign_layers(
    tables: list[Table],
    depends_on: dict[str, set[str]],
) -> list[list[Table]]:
    """
    Split tables into layers with a Kahn-style topological sweep.

    A table joins the next layer once every table it depends on has been
    assigned. When a sweep assigns nothing (a dependency cycle), the first
    unassigned table in input order is forced into the layer so the loop
    always makes progress.

    Args:
        tables: Tables in input order
        depends_on: table_id -> IDs of referenced tables

    Returns:
        Ordered list of layers, each in input order
    """
    layers: list[list[Table]] = []
    assigned_ids: set[str] = set()
    assigned: set[int] = set()  # indexes, so duplicate IDs still terminate

    def place(layer: list[tuple[int, Table]]) -> None:
        for index, table in layer:
            assigned.add(index)
            assigned_ids.add(table.id)
        layers.append([table for _, table in layer])

    roots = [(i, t) for i, t in enumerate(tables) if not depends_on.get(t.id)]
    if not roots and tables:
        logger.debug(f"No root tables, seeding layer 0 with {tables[0].id!r}")
        roots = [(0, tables[0])]
    place(roots)

    while len(assigned) < len(tables):
        next_layer = [
            (i, t) for i, t in enumerate(tables)
            if i not in assigned and depends_on.get(t.id, set()) <= assigned_ids
        ]

        if not next_layer:
            # Cycle: force the first unassigned table
            forced = next((i, t) for i, t in enumerate(tables) if i not in assigned)
            logger.debug(f"Dependency cycle, forcing {forced[1].id!r} into layer {len(layers)}")
            next_layer = [forced]

        place(next_layer)

    return layers


def position_layers(
    layers: list[list[Table]],
    options: LayoutOptions,
) -> list[PositionedNode]:
    """
    Turn layers into positioned nodes.

    Layers advance along the main axis by `node size + layer_spacing`.
    Within a layer nodes advance along the cross axis by
    `node size + node_spacing`, and every layer is centered on the widest one.
    """
    size = options.node_size
    spacing = options.spacing
    direction = options.direction

    if direction.is_horizontal:
        main_size, cross_size = size.width, size.height
    else:
        main_size, cross_size = size.height, size.width

    main_pitch = main_size + spacing.layer_spacing
    cross_pitch = cross_size + spacing.node_spacing

    def extent(layer: list[Table]) -> float:
        return len(layer) * cross_pitch - spacing.node_spacing

    max_extent = max(extent(layer) for layer in layers)

    nodes: list[PositionedNode] = []
    for layer_index, layer in enumerate(layers):
        offset = (max_extent - extent(layer)) / 2
        main = layer_index * main_pitch
        if direction.is_reversed:
            main = 0.0 - main  # keeps layer 0 at +0.0

        for rank, table in enumerate(layer):
            cross = offset + rank * cross_pitch
            if direction.is_horizontal:
                x, y = main, cross
            else:
                x, y = cross, main

            nodes.append(PositionedNode(
                id=table.id,
                position=Position(x=x, y=y),
                size=size,
                layer=layer_index,
                rank=rank,
            ))

    return nodes


def hierarchical_layout(schema: Schema, options: LayoutOptions) -> LayoutResult:
    """
    Arrange tables in dependency layers.

    Args:
        schema: Tables and relations to arrange
        options: Fully merged layout options

    Returns:
        LayoutResult with `layer`/`rank` set on every node and
        `metadata.layer_count` filled in
    """
    started = time.perf_counter()

    if not schema.tables:
        return empty_result(LayoutAlgorithm.HIERARCHICAL, options, started, layer_count=0)

    depends_on, _ = build_dependency_maps(schema)
    layers = assign_layers(schema.tables, depends_on)
    nodes = position_layers(layers, options)

    return build_result(
        LayoutAlgorithm.HIERARCHICAL,
        options,
        nodes,
        schema.relations,
        started,
        layer_count=len(layers),
    )
