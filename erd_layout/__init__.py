"""
ERD Layout - Diagram layout engine for entity-relationship diagrams.

Converts a relational schema (tables + foreign-key relations) into 2D
geometry: node positions and sizes, edge endpoints, and a bounding box.
The engine is pure computation: no I/O, no persisted state.
"""

from .models import (
    # Enums
    LayoutAlgorithm,
    LayoutDirection,
    ForeignKeyAction,
    # Schema input
    Column,
    Table,
    Relation,
    Schema,
    # Options
    Spacing,
    Size,
    LayoutOptions,
    DEFAULT_LAYOUT_OPTIONS,
    # Output
    Position,
    PositionedNode,
    PositionedEdge,
    BoundingBox,
    LayoutMetadata,
    LayoutResult,
)

from .geometry import create_positioned_edges, calculate_bounds
from .hierarchical import hierarchical_layout
from .force import force_layout
from .grid import grid_layout
from .circular import circular_layout
from .engine import LayoutEngine, create_layout_engine, merge_options
from .validation import validate_schema, validation_summary, ValidationIssue, IssueSeverity
from .analysis import calculate_table_connections, summarize_schema, find_connected_components

__all__ = [
    # Enums
    "LayoutAlgorithm",
    "LayoutDirection",
    "ForeignKeyAction",
    # Schema input
    "Column",
    "Table",
    "Relation",
    "Schema",
    # Options
    "Spacing",
    "Size",
    "LayoutOptions",
    "DEFAULT_LAYOUT_OPTIONS",
    # Output
    "Position",
    "PositionedNode",
    "PositionedEdge",
    "BoundingBox",
    "LayoutMetadata",
    "LayoutResult",
    # Geometry
    "create_positioned_edges",
    "calculate_bounds",
    # Algorithms
    "hierarchical_layout",
    "force_layout",
    "grid_layout",
    "circular_layout",
    # Engine
    "LayoutEngine",
    "create_layout_engine",
    "merge_options",
    # Validation
    "validate_schema",
    "validation_summary",
    "ValidationIssue",
    "IssueSeverity",
    # Analysis
    "calculate_table_connections",
    "summarize_schema",
    "find_connected_components",
]
