"""
Layout Engine - Single entry point for all layout algorithms.

The engine holds an immutable set of default options captured at
construction. Each call merges the caller's partial options over those
defaults (spacing and node size merge per sub-field) and dispatches on
`options.algorithm` through the ALGORITHMS registry.

Usage:
    engine = LayoutEngine({"spacing": {"nodeSpacing": 80}})
    result = engine.apply_layout(schema, {"algorithm": "grid"})
"""

import logging
from typing import Any, Callable, Optional, Union

from pydantic import BaseModel

from .circular import circular_layout
from .force import force_layout
from .grid import grid_layout
from .hierarchical import hierarchical_layout
from .models import (
    DEFAULT_LAYOUT_OPTIONS,
    LayoutAlgorithm,
    LayoutOptions,
    LayoutResult,
    Schema,
    Size,
    Spacing,
)
from .validation import validate_schema

logger = logging.getLogger(__name__)

LayoutFunction = Callable[[Schema, LayoutOptions], LayoutResult]
PartialOptions = Union[LayoutOptions, dict[str, Any], None]

# Every LayoutAlgorithm member must be registered here
ALGORITHMS: dict[LayoutAlgorithm, LayoutFunction] = {
    LayoutAlgorithm.HIERARCHICAL: hierarchical_layout,
    LayoutAlgorithm.FORCE_DIRECTED: force_layout,
    LayoutAlgorithm.GRID: grid_layout,
    LayoutAlgorithm.CIRCULAR: circular_layout,
}

_NESTED_OPTIONS: dict[str, type[BaseModel]] = {
    "spacing": Spacing,
    "node_size": Size,
}


def get_layout_function(algorithm: LayoutAlgorithm) -> LayoutFunction:
    """
    Get the layout function for an algorithm.

    Raises:
        ValueError: If the algorithm has no registered function
    """
    if algorithm not in ALGORITHMS:
        raise ValueError(
            f"Unknown layout algorithm: {algorithm}. Available: {[a.value for a in ALGORITHMS]}"
        )
    return ALGORITHMS[algorithm]


def _by_field_name(model: type[BaseModel], data: dict[str, Any]) -> dict[str, Any]:
    """Rename camelCase alias keys to field names; drop None values."""
    aliases = {f.alias: name for name, f in model.model_fields.items() if f.alias}
    return {aliases.get(k, k): v for k, v in data.items() if v is not None}


def _overrides(model: type[BaseModel], value: Any) -> dict[str, Any]:
    if isinstance(value, BaseModel):
        # Only fields the caller actually set count as overrides
        return value.model_dump(exclude_unset=True)
    return _by_field_name(model, dict(value))


def merge_options(base: LayoutOptions, overrides: PartialOptions = None) -> LayoutOptions:
    """
    Merge partial options over a complete set of options.

    Args:
        base: Complete options supplying every unspecified value
        overrides: Partial options as a dict (camelCase or snake_case keys)
            or a LayoutOptions whose explicitly set fields win

    Returns:
        New, complete LayoutOptions
    """
    if overrides is None:
        return base

    merged = base.model_dump()
    for key, value in _overrides(LayoutOptions, overrides).items():
        nested = _NESTED_OPTIONS.get(key)
        if nested is not None:
            merged[key] = {**merged[key], **_overrides(nested, value)}
        else:
            merged[key] = value

    return LayoutOptions.model_validate(merged)


class LayoutEngine:
    """
    Facade over the layout algorithms.

    Safe to share between threads: the captured defaults are frozen and
    every call builds its own result.
    """

    def __init__(self, defaults: PartialOptions = None):
        self._defaults = merge_options(DEFAULT_LAYOUT_OPTIONS, defaults)

    @property
    def defaults(self) -> LayoutOptions:
        return self._defaults

    def merge_options(self, options: PartialOptions = None) -> LayoutOptions:
        """Merge per-call options over this engine's defaults."""
        return merge_options(self._defaults, options)

    def apply_layout(
        self,
        schema: Union[Schema, dict],
        options: PartialOptions = None,
    ) -> LayoutResult:
        """
        Apply the layout algorithm named by `options.algorithm`.

        Args:
            schema: Schema (or its JSON dict) to arrange
            options: Partial options merged over the engine defaults

        Returns:
            LayoutResult snapshot
        """
        merged = self.merge_options(options)
        return self._run(merged.algorithm, schema, merged)

    def apply_hierarchical_layout(self, schema: Union[Schema, dict], options: PartialOptions = None) -> LayoutResult:
        """Root tables on top, dependent tables in subsequent layers."""
        return self._run(LayoutAlgorithm.HIERARCHICAL, schema, self.merge_options(options))

    def apply_force_directed_layout(self, schema: Union[Schema, dict], options: PartialOptions = None) -> LayoutResult:
        """Organic arrangement where connected tables cluster together."""
        return self._run(LayoutAlgorithm.FORCE_DIRECTED, schema, self.merge_options(options))

    def apply_grid_layout(self, schema: Union[Schema, dict], options: PartialOptions = None) -> LayoutResult:
        """Grid arrangement, most connected tables first."""
        return self._run(LayoutAlgorithm.GRID, schema, self.merge_options(options))

    def apply_circular_layout(self, schema: Union[Schema, dict], options: PartialOptions = None) -> LayoutResult:
        """Tables evenly spaced on a circle."""
        return self._run(LayoutAlgorithm.CIRCULAR, schema, self.merge_options(options))

    def optimize_layout(self, layout: LayoutResult) -> LayoutResult:
        """
        Hook for improving an existing layout, e.g. reducing edge crossings.

        Currently returns the layout unchanged. A real implementation would
        reorder nodes within layers (barycenter or median heuristics) and
        iterate while crossings decrease.

        Args:
            layout: A result produced by this engine

        Returns:
            The same LayoutResult
        """
        return layout

    def _run(
        self,
        algorithm: LayoutAlgorithm,
        schema: Union[Schema, dict],
        options: LayoutOptions,
    ) -> LayoutResult:
        if isinstance(schema, dict):
            schema = Schema.from_json_dict(schema)

        # Dangling relations are skipped by every algorithm; surface them here
        for issue in validate_schema(schema):
            if issue.code == "dangling_relation":
                logger.warning(f"{issue.message} (relation {issue.relation_id} ignored by layout)")

        logger.debug(
            f"Running {algorithm.value} layout on {len(schema.tables)} tables, "
            f"{len(schema.relations)} relations"
        )
        return get_layout_function(algorithm)(schema, options)


def create_layout_engine(options: PartialOptions = None) -> LayoutEngine:
    """Create a new layout engine with optional default options."""
    return LayoutEngine(options)
