"""
Definition merge engine.

Flattens allOf/anyOf composition into a single raw schema mapping.
Folding is right-biased: later fragments override scalar values,
nested mappings merge key by key, and lists concatenate.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from typing import Any

from ..schema_ast.nodes import REF_KEY, SchemaNode, SchemaRef

logger = logging.getLogger(__name__)


def merge_definitions(
    definitions: Iterable[Mapping[str, Any] | SchemaNode],
    schemas: Mapping[str, Any] | None = None,
) -> dict[str, Any]:
    """
    Merge schema fragments into one normalized mapping.

    Args:
        definitions: Raw fragments or parsed nodes, in override order
        schemas: Arena of named component schemas, used to expand
            reference fragments

    Returns:
        The merged mapping. It never carries a reference marker, so it
        is never itself treated as a reference.
    """
    merged: dict[str, Any] = {}
    for definition in definitions:
        merged = _merge_maps(merged, _expand(definition, schemas))
    merged.pop(REF_KEY, None)
    return merged


def _expand(definition: Mapping[str, Any] | SchemaNode, schemas: Mapping[str, Any] | None) -> Mapping[str, Any]:
    """Replace a composite or reference fragment by its flat expansion."""
    raw = definition.raw if isinstance(definition, SchemaNode) else definition

    if "allOf" in raw:
        return merge_definitions(raw["allOf"], schemas)

    if "anyOf" in raw:
        expanded = merge_definitions(raw["anyOf"], schemas)
        expanded.pop("required", None)
        return expanded

    marker = raw.get(REF_KEY)
    if isinstance(marker, SchemaRef):
        own = {key: value for key, value in raw.items() if key != REF_KEY}
        if schemas and marker.name in schemas:
            return merge_definitions([schemas[marker.name], own], schemas)
        logger.warning("Cannot expand reference to unknown schema %r, merging its sibling keys only", marker.name)

    return raw


def _merge_maps(left: Mapping[str, Any], right: Mapping[str, Any]) -> dict[str, Any]:
    result = dict(left)
    for key, value in right.items():
        result[key] = _merge_values(result[key], value) if key in result else value
    return result


def _merge_values(old: Any, new: Any) -> Any:
    if isinstance(old, Mapping) and isinstance(new, Mapping):
        return _merge_maps(old, new)
    if isinstance(old, (list, tuple)) and isinstance(new, (list, tuple)):
        return [*old, *new]
    return new
