"""
Core data models for ERD layout.

These models define the canonical shapes exchanged with the layout engine:
- Schema input: tables, their columns, and foreign-key relations
- Layout options: algorithm/direction selectors, spacing, node size
- Layout output: positioned nodes and edges, bounding box, run metadata

Field Naming Convention:
- Python attributes are snake_case (`source_table`, `node_spacing`)
- Every field also accepts and emits its camelCase name (`sourceTable`,
  `nodeSpacing`), which is what schema producers and renderers exchange
"""

import logging
from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, Field, field_validator

from .config import (
    DEFAULT_EDGE_SPACING,
    DEFAULT_LAYER_SPACING,
    DEFAULT_NODE_HEIGHT,
    DEFAULT_NODE_SPACING,
    DEFAULT_NODE_WIDTH,
)

logger = logging.getLogger(__name__)


class LayoutAlgorithm(str, Enum):
    """Available layout algorithms."""
    HIERARCHICAL = "hierarchical"
    FORCE_DIRECTED = "force_directed"
    GRID = "grid"
    CIRCULAR = "circular"


class LayoutDirection(str, Enum):
    """Main-axis direction for layered and grid layouts."""
    TOP_DOWN = "top_down"
    LEFT_RIGHT = "left_right"
    BOTTOM_UP = "bottom_up"
    RIGHT_LEFT = "right_left"

    @property
    def is_horizontal(self) -> bool:
        """Whether the main axis runs along x."""
        return self in (LayoutDirection.LEFT_RIGHT, LayoutDirection.RIGHT_LEFT)

    @property
    def is_reversed(self) -> bool:
        """Whether main-axis coordinates are negated."""
        return self in (LayoutDirection.BOTTOM_UP, LayoutDirection.RIGHT_LEFT)


class ForeignKeyAction(str, Enum):
    """Referential actions for ON DELETE / ON UPDATE."""
    CASCADE = "CASCADE"
    SET_NULL = "SET_NULL"
    RESTRICT = "RESTRICT"
    NO_ACTION = "NO_ACTION"


# --- Schema Input ---

class Column(BaseModel):
    """A column of a table."""
    model_config = {"populate_by_name": True}

    id: str
    name: str
    type: str = ""
    is_primary_key: bool = Field(default=False, alias="isPrimaryKey")
    is_foreign_key: bool = Field(default=False, alias="isForeignKey")
    is_nullable: bool = Field(default=True, alias="isNullable")


class Table(BaseModel):
    """A table in the schema (a node in the diagram)."""
    model_config = {"populate_by_name": True}

    id: str
    name: str
    columns: list[Column] = Field(default_factory=list)

    def get_column(self, name: str) -> Optional[Column]:
        """Get a column by name (O(n))."""
        for column in self.columns:
            if column.name == name:
                return column
        return None


class Relation(BaseModel):
    """
    A foreign key: `source_table.source_column` references
    `target_table.target_column`.
    """
    model_config = {"populate_by_name": True}

    id: str
    source_table: str = Field(alias="sourceTable")
    source_column: str = Field(alias="sourceColumn")
    target_table: str = Field(alias="targetTable")
    target_column: str = Field(alias="targetColumn")
    constraint_name: Optional[str] = Field(default=None, alias="constraintName")
    on_delete: Optional[ForeignKeyAction] = Field(default=None, alias="onDelete")
    on_update: Optional[ForeignKeyAction] = Field(default=None, alias="onUpdate")

    @property
    def is_self_reference(self) -> bool:
        return self.source_table == self.target_table


class Schema(BaseModel):
    """
    The complete relational graph handed to the layout engine.
    Read-only from the engine's point of view.
    """
    model_config = {"populate_by_name": True}

    tables: list[Table] = Field(default_factory=list)
    relations: list[Relation] = Field(default_factory=list)

    @classmethod
    def from_json_dict(cls, data: dict) -> "Schema":
        """Create a Schema from a JSON dict (camelCase or snake_case keys)."""
        return cls.model_validate({
            "tables": data.get("tables", []),
            "relations": data.get("relations", []),
        })

    def get_table(self, table_id: str) -> Optional[Table]:
        """Get a table by ID (O(n))."""
        for table in self.tables:
            if table.id == table_id:
                return table
        return None


# --- Layout Options ---

class Spacing(BaseModel):
    """Gaps between nodes, layers, and edges."""
    model_config = {"populate_by_name": True, "frozen": True}

    node_spacing: float = Field(default=DEFAULT_NODE_SPACING, alias="nodeSpacing")
    layer_spacing: float = Field(default=DEFAULT_LAYER_SPACING, alias="layerSpacing")
    edge_spacing: float = Field(default=DEFAULT_EDGE_SPACING, alias="edgeSpacing")


class Size(BaseModel):
    """Width and height of a node."""
    model_config = {"frozen": True}

    width: float = DEFAULT_NODE_WIDTH
    height: float = DEFAULT_NODE_HEIGHT


class LayoutOptions(BaseModel):
    """
    Configuration for a single layout run.

    Unknown selector strings fall back to the defaults (hierarchical,
    top_down) with a warning instead of failing validation.
    """
    model_config = {"populate_by_name": True, "frozen": True}

    algorithm: LayoutAlgorithm = LayoutAlgorithm.HIERARCHICAL
    direction: LayoutDirection = LayoutDirection.TOP_DOWN
    spacing: Spacing = Field(default_factory=Spacing)
    node_size: Size = Field(default_factory=Size, alias="nodeSize")

    @field_validator("algorithm", mode="before")
    @classmethod
    def fallback_algorithm(cls, value: Any) -> Any:
        if value is None:
            return LayoutAlgorithm.HIERARCHICAL
        if isinstance(value, str) and value not in {a.value for a in LayoutAlgorithm}:
            logger.warning(f"Unknown layout algorithm {value!r}, using hierarchical")
            return LayoutAlgorithm.HIERARCHICAL
        return value

    @field_validator("direction", mode="before")
    @classmethod
    def fallback_direction(cls, value: Any) -> Any:
        if value is None:
            return LayoutDirection.TOP_DOWN
        if isinstance(value, str) and value not in {d.value for d in LayoutDirection}:
            logger.warning(f"Unknown layout direction {value!r}, using top_down")
            return LayoutDirection.TOP_DOWN
        return value


DEFAULT_LAYOUT_OPTIONS = LayoutOptions()


# --- Layout Output ---

class Position(BaseModel):
    """Top-left corner of a node."""
    model_config = {"frozen": True}

    x: float
    y: float


class PositionedNode(BaseModel):
    """The geometric realization of a table."""
    model_config = {"frozen": True}

    id: str
    position: Position
    size: Size
    layer: Optional[int] = None
    rank: Optional[int] = None

    @property
    def right(self) -> float:
        return self.position.x + self.size.width

    @property
    def bottom(self) -> float:
        return self.position.y + self.size.height

    def center(self) -> tuple[float, float]:
        """Get the center point of the node."""
        return (
            self.position.x + self.size.width / 2,
            self.position.y + self.size.height / 2,
        )


class PositionedEdge(BaseModel):
    """The geometric realization of a relation."""
    model_config = {"populate_by_name": True, "frozen": True}

    id: str
    source: str
    target: str
    source_handle: Optional[str] = Field(default=None, alias="sourceHandle")
    target_handle: Optional[str] = Field(default=None, alias="targetHandle")


class BoundingBox(BaseModel):
    """Axis-aligned box around a set of nodes."""
    model_config = {"frozen": True}

    x: float = 0
    y: float = 0
    width: float = 0
    height: float = 0

    def contains(self, node: PositionedNode, tolerance: float = 1e-6) -> bool:
        """Check whether a node's rectangle lies inside the box."""
        return (
            node.position.x >= self.x - tolerance
            and node.position.y >= self.y - tolerance
            and node.right <= self.x + self.width + tolerance
            and node.bottom <= self.y + self.height + tolerance
        )


class LayoutMetadata(BaseModel):
    """Facts about a layout run."""
    model_config = {"populate_by_name": True, "frozen": True}

    algorithm: LayoutAlgorithm
    direction: LayoutDirection
    node_count: int = Field(alias="nodeCount")
    edge_count: int = Field(alias="edgeCount")
    layer_count: Optional[int] = Field(default=None, alias="layerCount")
    execution_time_ms: float = Field(alias="executionTimeMs")


class LayoutResult(BaseModel):
    """
    Output of a layout run.
    This is what renderers and exporters consume.
    """
    model_config = {"frozen": True}

    nodes: list[PositionedNode] = Field(default_factory=list)
    edges: list[PositionedEdge] = Field(default_factory=list)
    bounds: BoundingBox = Field(default_factory=BoundingBox)
    metadata: LayoutMetadata

    def to_json_dict(self) -> dict:
        """Convert to a camelCase JSON-serializable dict."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)

    def get_node(self, node_id: str) -> Optional[PositionedNode]:
        """Get a positioned node by ID (O(n))."""
        for node in self.nodes:
            if node.id == node_id:
                return node
        return None
