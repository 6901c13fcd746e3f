"""
Analyzer module.

Contains the merge engine, the discriminator resolver, and the
type resolver producing type expressions.
"""

from __future__ import annotations

from .context import ReferenceContext, ViewMode
from .discriminator import discriminator_tag
from .merge import merge_definitions
from .resolver import TypeResolver, resolve_property, resolve_type, tagged_option
from .type_nodes import (
    EnumLiteral,
    ListType,
    NamedReference,
    NullableType,
    OpaqueListType,
    OpaqueMapType,
    PrimitiveKind,
    PrimitiveType,
    StructField,
    StructuralObject,
    TypeExpression,
    UnionType,
)

__all__ = [
    "ViewMode",
    "ReferenceContext",
    "merge_definitions",
    "discriminator_tag",
    "TypeResolver",
    "resolve_type",
    "resolve_property",
    "tagged_option",
    "TypeExpression",
    "PrimitiveKind",
    "PrimitiveType",
    "NullableType",
    "ListType",
    "OpaqueListType",
    "OpaqueMapType",
    "StructField",
    "StructuralObject",
    "UnionType",
    "EnumLiteral",
    "NamedReference",
]
