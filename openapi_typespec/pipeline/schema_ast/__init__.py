"""
Schema AST module.

Contains the AST node definitions, the parser, and the document loader.
"""

from __future__ import annotations

from .loader import component_schemas, load_document, mark_references
from .nodes import (
    COMPONENTS_SCHEMAS,
    REF_KEY,
    AllOfNode,
    AnyOfNode,
    ArrayNode,
    DiscriminatorSpec,
    ObjectNode,
    OneOfNode,
    OpaqueArrayNode,
    OpaqueObjectNode,
    PrimitiveNode,
    RefNode,
    SchemaNode,
    SchemaRef,
    StringEnumNode,
)
from .parser import SchemaParser

__all__ = [
    "COMPONENTS_SCHEMAS",
    "REF_KEY",
    "SchemaRef",
    "DiscriminatorSpec",
    "SchemaNode",
    "RefNode",
    "PrimitiveNode",
    "StringEnumNode",
    "ObjectNode",
    "OpaqueObjectNode",
    "ArrayNode",
    "OpaqueArrayNode",
    "OneOfNode",
    "AllOfNode",
    "AnyOfNode",
    "SchemaParser",
    "load_document",
    "mark_references",
    "component_schemas",
]
