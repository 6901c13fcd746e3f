"""
Type expression nodes.

The output algebra of the type resolver. Expressions are immutable
values with no rendering concerns; backends translate them into
target-language type syntax.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class PrimitiveKind(Enum):
    """Scalar kinds of the type algebra."""

    STRING = "string"  # textual string
    BINARY = "binary"  # byte sequence (format byte/binary)
    BOOLEAN = "boolean"
    FLOAT = "float"
    INTEGER = "integer"


@dataclass(frozen=True)
class TypeExpression:
    """Base class for all type expressions."""


@dataclass(frozen=True)
class PrimitiveType(TypeExpression):
    kind: PrimitiveKind = PrimitiveKind.STRING


@dataclass(frozen=True)
class NullableType(TypeExpression):
    inner: TypeExpression | None = None


@dataclass(frozen=True)
class ListType(TypeExpression):
    item: TypeExpression | None = None


@dataclass(frozen=True)
class OpaqueListType(TypeExpression):
    """A list with unconstrained items."""


@dataclass(frozen=True)
class OpaqueMapType(TypeExpression):
    """A free-form map."""


@dataclass(frozen=True)
class StructField:
    """A named field of a structural object."""

    name: str = ""
    optional: bool = False
    type: TypeExpression | None = None


@dataclass(frozen=True)
class StructuralObject(TypeExpression):
    fields: tuple[StructField, ...] = ()


@dataclass(frozen=True)
class UnionType(TypeExpression):
    alternatives: tuple[TypeExpression, ...] = ()


@dataclass(frozen=True)
class EnumLiteral(TypeExpression):
    """A closed set of string literals taken from a schema's `enum`."""

    values: tuple[str, ...] = ()


@dataclass(frozen=True)
class NamedReference(TypeExpression):
    """A named generated type; `module` is None for a local self-reference."""

    module: str | None = None
    name: str = ""


def union_of(alternatives: list[TypeExpression]) -> TypeExpression:
    """Build a union, collapsing a single alternative to itself."""
    if len(alternatives) == 1:
        return alternatives[0]
    return UnionType(alternatives=tuple(alternatives))
