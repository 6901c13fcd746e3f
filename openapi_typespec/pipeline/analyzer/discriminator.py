"""
Discriminator tag resolution for tagged oneOf unions.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from ..schema_ast.nodes import DiscriminatorSpec, RefNode, SchemaNode, SchemaRef
from ..schema_ast.parser import SchemaParser
from .merge import merge_definitions

_parser = SchemaParser()


def discriminator_tag(
    option: Mapping[str, Any] | SchemaNode,
    discriminator: DiscriminatorSpec,
    schemas: Mapping[str, Any] | None = None,
) -> str | None:
    """
    Compute the tag value identifying a oneOf option.

    A referenced option takes the key of the first mapping entry pointing
    at it, or its schema name when no entry does. An inline option takes
    the single value it declares for the discriminator property (a
    one-element `enum` or a `const`), or None when it declares none.

    Args:
        option: The oneOf option
        discriminator: The discriminator of the enclosing oneOf
        schemas: Arena of component schemas, used to merge inline options

    Returns:
        The tag, or None for an inline option without a declared value
    """
    node = _parser.parse(option)

    if isinstance(node, RefNode):
        search_path = SchemaRef(kind=node.kind, name=node.name).path
        for tag, target in discriminator.mapping.items():
            if mapping_path(target) == search_path:
                return tag
        return node.name

    return _declared_tag(node, discriminator.property_name, schemas)


def mapping_path(target: str) -> list[str] | None:
    """Split a mapping value ("#/components/schemas/Cat" or "Cat") into path segments."""
    if target.startswith("#/"):
        return target[2:].split("/")
    if "/" not in target and "#" not in target:
        return ["components", "schemas", target]
    return None


def _declared_tag(node: SchemaNode, property_name: str, schemas: Mapping[str, Any] | None) -> str | None:
    merged = merge_definitions([node], schemas)
    prop = (merged.get("properties") or {}).get(property_name)
    if not isinstance(prop, Mapping):
        return None
    if "const" in prop:
        return str(prop["const"])
    values = prop.get("enum")
    if isinstance(values, list) and len(values) == 1:
        return str(values[0])
    return None
