"""
IR (Intermediate Representation) handed to the backends.

One ModuleIR per view mode, holding the resolved type expression of
every compiled schema in emission order.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from .context import ViewMode
from .type_nodes import TypeExpression


@dataclass
class TypeDef:
    """A compiled schema."""

    name: str = ""  # Schema name in components.schemas
    expression: TypeExpression | None = None

    # Descriptions of the schema and of its allOf parts
    descriptions: list[str] = field(default_factory=list)


@dataclass
class ModuleIR:
    """The types generated into one module."""

    module: str = ""
    mode: ViewMode = ViewMode.READ
    definitions: list[TypeDef] = field(default_factory=list)

    # Generation comment
    generation_comment: str = ""
