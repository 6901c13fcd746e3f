"""
Type resolver that turns schema nodes into type expressions.

Phase 2 of the pipeline. Resolution is a pure recursive transform:
the same node, mode, context and origin always produce the same
expression. References are never followed, so the recursion only
descends into the fragment being resolved.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import replace
from typing import Any

from ..errors import UnknownTypeError
from ..schema_ast.nodes import (
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
    StringEnumNode,
)
from ..schema_ast.parser import SchemaParser
from .context import ReferenceContext, ViewMode
from .discriminator import discriminator_tag
from .merge import merge_definitions
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
    union_of,
)

logger = logging.getLogger(__name__)

BINARY_FORMATS = ("byte", "binary")
FLOAT_FORMATS = ("float", "double")

Schema = Mapping[str, Any] | SchemaNode


class TypeResolver:
    """Resolves schema nodes into type expressions for one view mode."""

    def __init__(self):
        self.parser = SchemaParser()

    def resolve(self, node: Schema, mode: ViewMode, context: ReferenceContext, origin: str | None) -> TypeExpression:
        """
        Resolve a schema fragment into a type expression.

        Args:
            node: Raw schema fragment or parsed node
            mode: READ or WRITE projection
            context: Module lookups and schema arena
            origin: Name of the schema being compiled (self-references
                resolve to a local, unqualified reference)

        Returns:
            The type expression

        Raises:
            UnknownTypeError: If a fragment declares an unrecognized type
        """
        node = self.parser.parse(node)
        mode = ViewMode(mode)
        logger.debug("Resolving %s (%s) for %s", type(node).__name__, mode.value, origin)

        if node.nullable:
            return NullableType(self.resolve(replace(node, nullable=False), mode, context, origin))

        if isinstance(node, RefNode):
            if node.name == origin:
                return NamedReference(module=None, name=node.name)
            return NamedReference(module=context.module_of(node.name, mode), name=node.name)

        if isinstance(node, StringEnumNode):
            if mode == ViewMode.WRITE:
                return EnumLiteral(values=node.values)
            return PrimitiveType(PrimitiveKind.STRING)

        if isinstance(node, PrimitiveNode):
            return self._resolve_primitive(node, context)

        if isinstance(node, ObjectNode):
            return self._resolve_object(node, mode, context, origin)

        if isinstance(node, OpaqueObjectNode):
            return OpaqueMapType()

        if isinstance(node, ArrayNode):
            return ListType(self.resolve(node.items, mode, context, origin))

        if isinstance(node, OpaqueArrayNode):
            return OpaqueListType()

        if isinstance(node, OneOfNode):
            if node.discriminator is not None:
                return self._resolve_tagged_union(node, node.discriminator, mode, context, origin)
            return union_of([self.resolve(option, mode, context, origin) for option in node.options])

        if isinstance(node, AllOfNode):
            merged = merge_definitions(node.parts, context.schemas)
            return self.resolve(merged, mode, context, origin)

        if isinstance(node, AnyOfNode):
            merged = merge_definitions(node.parts, context.schemas)
            merged.pop("required", None)
            return self.resolve(merged, mode, context, origin)

        raise UnknownTypeError(definition=dict(node.raw), type=type(node).__name__, context=context)

    def resolve_property(
        self,
        node: Schema,
        name: str,
        mode: ViewMode,
        is_required: bool,
        context: ReferenceContext,
        origin: str | None,
    ) -> StructField | None:
        """
        Resolve one property of an object.

        Returns:
            The field, or None when the property is hidden in this mode
            (readOnly in WRITE, writeOnly in READ)
        """
        node = self.parser.parse(node)

        if isinstance(node, AllOfNode):
            # Sibling annotations (readOnly, nullable, ...) apply to the merged definition
            siblings = {key: value for key, value in node.raw.items() if key != "allOf"}
            node = self.parser.parse(merge_definitions([*node.parts, siblings], context.schemas))

        if node.read_only and mode == ViewMode.WRITE:
            return None
        if node.write_only and mode == ViewMode.READ:
            return None

        return StructField(
            name=name,
            optional=not is_required,
            type=self.resolve(node, mode, context, origin),
        )

    def _resolve_primitive(self, node: PrimitiveNode, context: ReferenceContext) -> TypeExpression:
        type_name = node.type_name

        if type_name == "string":
            if node.format in BINARY_FORMATS:
                return PrimitiveType(PrimitiveKind.BINARY)
            return PrimitiveType(PrimitiveKind.STRING)

        if type_name == "boolean":
            return PrimitiveType(PrimitiveKind.BOOLEAN)

        if type_name == "number":
            if node.format in FLOAT_FORMATS:
                return PrimitiveType(PrimitiveKind.FLOAT)
            return UnionType((PrimitiveType(PrimitiveKind.FLOAT), PrimitiveType(PrimitiveKind.INTEGER)))

        if type_name == "integer":
            return PrimitiveType(PrimitiveKind.INTEGER)

        raise UnknownTypeError(definition=dict(node.raw), type=type_name, context=context)

    def _resolve_object(self, node: ObjectNode, mode: ViewMode, context: ReferenceContext, origin: str | None) -> StructuralObject:
        fields = []
        for name, prop in node.properties.items():
            field = self.resolve_property(prop, name, mode, name in node.required, context, origin)
            if field is not None:
                fields.append(field)
        return StructuralObject(fields=tuple(fields))

    def _resolve_tagged_union(
        self,
        node: OneOfNode,
        discriminator: DiscriminatorSpec,
        mode: ViewMode,
        context: ReferenceContext,
        origin: str | None,
    ) -> TypeExpression:
        """Resolve each option refined by its discriminator tag."""
        alternatives = []
        for option in node.options:
            tag = discriminator_tag(option, discriminator, context.schemas)
            if tag is None:
                logger.warning(
                    "oneOf option in %s declares no value for discriminator %r, leaving it untagged",
                    origin,
                    discriminator.property_name,
                )
                alternatives.append(self.resolve(option, mode, context, origin))
                continue

            tagged = tagged_option(option, discriminator.property_name, tag, context.schemas)
            alternatives.append(self.resolve(tagged, mode, context, origin))

        return union_of(alternatives)


def tagged_option(
    option: Schema,
    property_name: str,
    tag: str,
    schemas: Mapping[str, Any] | None = None,
) -> dict[str, Any]:
    """
    Merge a oneOf option with an object requiring `property_name == tag`.

    The discriminator property of the result is exactly the single-value
    enum, whatever the option declared for it.
    """
    tag_property = {"type": "string", "enum": [tag]}
    merged = merge_definitions(
        [
            option,
            {
                "type": "object",
                "properties": {property_name: tag_property},
                "required": [property_name],
            },
        ],
        schemas,
    )
    merged["properties"] = {**merged["properties"], property_name: tag_property}
    return merged


_default_resolver = TypeResolver()


def resolve_type(node: Schema, mode: ViewMode, context: ReferenceContext, origin: str | None = None) -> TypeExpression:
    """Resolve a schema fragment with the default resolver."""
    return _default_resolver.resolve(node, mode, context, origin)


def resolve_property(
    node: Schema,
    name: str,
    mode: ViewMode,
    is_required: bool,
    context: ReferenceContext,
    origin: str | None = None,
) -> StructField | None:
    """Resolve an object property with the default resolver."""
    return _default_resolver.resolve_property(node, name, mode, is_required, context, origin)
