"""
Schema analysis - Connection counting and summarization utilities.

The grid layout orders tables by the connection counts computed here;
the summary is a convenience for callers describing a schema.
"""

from collections import defaultdict
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:
    from .models import Schema


@dataclass
class ConnectedComponent:
    """A group of tables linked by relations (direction ignored)."""
    table_ids: list[str] = field(default_factory=list)
    relation_count: int = 0

    @property
    def size(self) -> int:
        return len(self.table_ids)


@dataclass
class TableConnectionInfo:
    """Connection information for a single table."""
    table_id: str
    name: str
    incoming: int = 0   # Relations referencing this table
    outgoing: int = 0   # Foreign keys held by this table

    @property
    def total(self) -> int:
        return self.incoming + self.outgoing


@dataclass
class SchemaSummary:
    """Complete summary of a schema's structure."""
    table_count: int
    column_count: int
    relation_count: int
    connected_components: int
    most_connected_table: Optional[TableConnectionInfo]
    orphan_count: int

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization."""
        most_connected = None
        if self.most_connected_table:
            most_connected = {
                "id": self.most_connected_table.table_id,
                "name": self.most_connected_table.name,
                "connectionCount": self.most_connected_table.total,
            }
        return {
            "tableCount": self.table_count,
            "columnCount": self.column_count,
            "relationCount": self.relation_count,
            "connectedComponents": self.connected_components,
            "mostConnectedTable": most_connected,
            "orphanCount": self.orphan_count,
        }


def calculate_table_connections(schema: "Schema") -> dict[str, TableConnectionInfo]:
    """
    Calculate connection counts for all tables.

    A self-referencing relation counts once as outgoing and once as incoming.
    Relations pointing at unknown tables only count on the known side.

    Args:
        schema: The schema to analyze

    Returns:
        Dictionary mapping table_id to TableConnectionInfo
    """
    connections: dict[str, TableConnectionInfo] = {}
    for table in schema.tables:
        if table.id not in connections:
            connections[table.id] = TableConnectionInfo(table_id=table.id, name=table.name)

    for relation in schema.relations:
        if relation.source_table in connections:
            connections[relation.source_table].outgoing += 1
        if relation.target_table in connections:
            connections[relation.target_table].incoming += 1

    return connections


def find_connected_components(schema: "Schema") -> list[ConnectedComponent]:
    """
    Find all connected components in the schema using BFS.

    Args:
        schema: The schema to analyze

    Returns:
        List of ConnectedComponent objects, in order of first table
    """
    if not schema.tables:
        return []

    table_ids = list(dict.fromkeys(t.id for t in schema.tables))

    # Undirected adjacency
    adjacency: dict[str, set[str]] = {tid: set() for tid in table_ids}
    relation_counts: dict[str, int] = defaultdict(int)

    for relation in schema.relations:
        source, target = relation.source_table, relation.target_table
        if source in adjacency and target in adjacency:
            adjacency[source].add(target)
            adjacency[target].add(source)
            relation_counts[source] += 1

    visited: set[str] = set()
    components: list[ConnectedComponent] = []

    for start in table_ids:
        if start in visited:
            continue

        component_tables: list[str] = []
        component_relations = 0
        queue = [start]
        visited.add(start)

        while queue:
            current = queue.pop(0)
            component_tables.append(current)
            component_relations += relation_counts[current]

            for neighbor in sorted(adjacency[current]):
                if neighbor not in visited:
                    visited.add(neighbor)
                    queue.append(neighbor)

        components.append(ConnectedComponent(
            table_ids=component_tables,
            relation_count=component_relations
        ))

    return components


def summarize_schema(schema: "Schema") -> SchemaSummary:
    """
    Generate a summary of a schema.

    Args:
        schema: The schema to summarize

    Returns:
        SchemaSummary object with all analysis results
    """
    connections = calculate_table_connections(schema)

    # max() keeps the first table on ties
    most_connected = max(connections.values(), key=lambda c: c.total, default=None)
    if most_connected is not None and most_connected.total == 0:
        most_connected = None

    return SchemaSummary(
        table_count=len(schema.tables),
        column_count=sum(len(t.columns) for t in schema.tables),
        relation_count=len(schema.relations),
        connected_components=len(find_connected_components(schema)),
        most_connected_table=most_connected,
        orphan_count=sum(1 for c in connections.values() if c.total == 0),
    )
