"""
Schema validation - Check schemas for structural issues before layout.

Layout never fails on these issues: dangling relations are skipped and
duplicate IDs resolve to the first table. Validation makes those cases
visible to the caller instead of silently absorbing them.
"""

from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .models import Schema


class IssueSeverity(str, Enum):
    """Severity levels for validation issues."""
    ERROR = "error"      # Layout output will be ambiguous
    WARNING = "warning"  # Part of the input is ignored by layout
    INFO = "info"        # Informational, usually intentional


@dataclass
class ValidationIssue:
    """A single validation issue found in a schema."""
    severity: IssueSeverity
    message: str
    table_id: str | None = None
    relation_id: str | None = None
    code: str = ""  # Machine-readable kind, e.g. "dangling_relation"

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization."""
        result = {
            "type": self.severity.value,
            "message": self.message,
            "code": self.code
        }
        if self.table_id:
            result["table_id"] = self.table_id
        if self.relation_id:
            result["relation_id"] = self.relation_id
        return result


def validate_schema(schema: "Schema") -> list[ValidationIssue]:
    """
    Validate a schema and return a list of issues.

    Checks for:
    - Empty schema - INFO
    - Duplicate table IDs - ERROR
    - Relations referencing non-existent tables (dangling) - WARNING
    - Duplicate relation IDs - WARNING
    - Self-referencing relations - INFO

    Args:
        schema: The schema to validate

    Returns:
        List of ValidationIssue objects
    """
    issues: list[ValidationIssue] = []

    if not schema.tables:
        issues.append(ValidationIssue(
            severity=IssueSeverity.INFO,
            message="Schema has no tables",
            code="empty_schema"
        ))
        if not schema.relations:
            return issues

    # Duplicate table IDs
    table_ids: set[str] = set()
    for table in schema.tables:
        if table.id in table_ids:
            issues.append(ValidationIssue(
                severity=IssueSeverity.ERROR,
                message=f"Duplicate table ID: {table.id} (layout uses the first occurrence)",
                table_id=table.id,
                code="duplicate_table"
            ))
        table_ids.add(table.id)

    # Dangling relations
    for relation in schema.relations:
        if relation.source_table not in table_ids:
            issues.append(ValidationIssue(
                severity=IssueSeverity.WARNING,
                message=f"Relation references non-existent source table: {relation.source_table}",
                relation_id=relation.id,
                code="dangling_relation"
            ))
        if relation.target_table not in table_ids:
            issues.append(ValidationIssue(
                severity=IssueSeverity.WARNING,
                message=f"Relation references non-existent target table: {relation.target_table}",
                relation_id=relation.id,
                code="dangling_relation"
            ))

    # Duplicate relation IDs
    seen_relations: set[str] = set()
    for relation in schema.relations:
        if relation.id in seen_relations:
            issues.append(ValidationIssue(
                severity=IssueSeverity.WARNING,
                message=f"Duplicate relation ID: {relation.id}",
                relation_id=relation.id,
                code="duplicate_relation"
            ))
        seen_relations.add(relation.id)

    # Self-references
    for relation in schema.relations:
        if relation.is_self_reference:
            issues.append(ValidationIssue(
                severity=IssueSeverity.INFO,
                message="Self-referencing relation (table points to itself)",
                relation_id=relation.id,
                table_id=relation.source_table,
                code="self_reference"
            ))

    return issues


def validation_summary(issues: list[ValidationIssue]) -> dict:
    """
    Create a summary of validation issues.

    Args:
        issues: List of validation issues

    Returns:
        Dictionary with counts by severity
    """
    return {
        "total": len(issues),
        "errors": len([i for i in issues if i.severity == IssueSeverity.ERROR]),
        "warnings": len([i for i in issues if i.severity == IssueSeverity.WARNING]),
        "info": len([i for i in issues if i.severity == IssueSeverity.INFO]),
        "valid": len([i for i in issues if i.severity == IssueSeverity.ERROR]) == 0
    }
