"""
AST node definitions for OpenAPI component schemas.

These nodes classify one schema fragment at a time. Child fragments
(properties, items, composition parts) are parsed eagerly, references
are kept as names and never inlined.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

# Key under which the upstream reference resolver stores its marker
REF_KEY = "__ref__"

COMPONENTS_SCHEMAS = "components.schemas"


@dataclass(frozen=True)
class SchemaRef:
    """A pre-resolved pointer to a named schema."""

    kind: str = COMPONENTS_SCHEMAS
    name: str = ""

    @property
    def path(self) -> list[str]:
        """Path segments of the pointer, e.g. ["components", "schemas", "Pet"]."""
        return [*self.kind.split("."), self.name]


@dataclass(frozen=True)
class DiscriminatorSpec:
    """The `discriminator` object of a oneOf."""

    property_name: str = ""
    mapping: dict[str, str] = field(default_factory=dict)


@dataclass(frozen=True)
class SchemaNode:
    """Base class for all AST nodes."""

    nullable: bool = False
    description: str | None = None
    read_only: bool = False
    write_only: bool = False

    # Raw fragment this node was parsed from (input of the merge engine)
    raw: dict[str, Any] = field(default_factory=dict, compare=False, repr=False)


@dataclass(frozen=True)
class RefNode(SchemaNode):
    """A reference to a named component schema."""

    kind: str = COMPONENTS_SCHEMAS
    name: str = ""


@dataclass(frozen=True)
class PrimitiveNode(SchemaNode):
    """A scalar type. `type_name` may be unrecognized, the resolver reports it."""

    type_name: Any = ""
    format: str | None = None


@dataclass(frozen=True)
class StringEnumNode(SchemaNode):
    """A string restricted to an enumeration."""

    values: tuple[str, ...] = ()
    format: str | None = None


@dataclass(frozen=True)
class ObjectNode(SchemaNode):
    """An object with declared properties."""

    properties: dict[str, SchemaNode] = field(default_factory=dict)
    required: frozenset[str] = frozenset()


@dataclass(frozen=True)
class OpaqueObjectNode(SchemaNode):
    """An object without declared properties (free-form map)."""


@dataclass(frozen=True)
class ArrayNode(SchemaNode):
    """An array with an item schema."""

    items: SchemaNode | None = None


@dataclass(frozen=True)
class OpaqueArrayNode(SchemaNode):
    """An array without an item schema."""


@dataclass(frozen=True)
class OneOfNode(SchemaNode):
    """Exclusive alternatives, optionally tagged by a discriminator."""

    options: tuple[SchemaNode, ...] = ()
    discriminator: DiscriminatorSpec | None = None


@dataclass(frozen=True)
class AllOfNode(SchemaNode):
    """Fragments that all apply (merged before resolution)."""

    parts: tuple[SchemaNode, ...] = ()


@dataclass(frozen=True)
class AnyOfNode(SchemaNode):
    """Fragments of which any subset applies (merged, `required` dropped)."""

    parts: tuple[SchemaNode, ...] = ()
