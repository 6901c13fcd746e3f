"""
Schema parser that classifies raw schema mappings into AST nodes.

Phase 1 of the pipeline. The classification order follows the
resolution precedence of the type resolver, so that a fragment carrying
several discriminating keys (e.g. `type` and `oneOf`) is classified the
same way it would be resolved.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from .nodes import (
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


class SchemaParser:
    """Parses raw schema mappings into SchemaNodes."""

    SCALAR_TYPES = {"string", "boolean", "number", "integer"}

    def parse(self, schema: Mapping[str, Any] | SchemaNode) -> SchemaNode:
        """
        Parse a schema fragment.

        Args:
            schema: Raw schema mapping, or an already parsed node

        Returns:
            The SchemaNode subclass matching the fragment's shape
        """
        if isinstance(schema, SchemaNode):
            return schema
        return self._parse_schema_node(schema)

    def _parse_schema_node(self, schema: Mapping[str, Any]) -> SchemaNode:
        common = self._extract_common(schema)

        marker = schema.get(REF_KEY)
        if isinstance(marker, SchemaRef):
            return RefNode(kind=marker.kind, name=marker.name, **common)

        if "type" in schema:
            type_value = schema["type"]
            if isinstance(type_value, list):
                return self._parse_type_list(schema, type_value, common)
            if isinstance(type_value, str):
                if type_value in self.SCALAR_TYPES:
                    return self._parse_scalar_node(schema, type_value, common)
                if type_value == "object":
                    return self._parse_object_node(schema, common)
                if type_value == "array":
                    return self._parse_array_node(schema, common)

        if "oneOf" in schema:
            return self._parse_one_of_node(schema, common)

        if "allOf" in schema:
            return AllOfNode(parts=self._parse_sequence(schema["allOf"]), **common)

        if "anyOf" in schema:
            return AnyOfNode(parts=self._parse_sequence(schema["anyOf"]), **common)

        if "type" in schema:
            # Unrecognized kind, reported by the resolver with its context
            return PrimitiveNode(type_name=schema["type"], format=schema.get("format"), **common)

        # No type: treated as an object
        return self._parse_object_node(schema, common)

    def _extract_common(self, schema: Mapping[str, Any]) -> dict[str, Any]:
        """Extract the annotations every node may carry."""
        return {
            "nullable": schema.get("nullable") is True,
            "description": schema.get("description"),
            "read_only": schema.get("readOnly") is True,
            "write_only": schema.get("writeOnly") is True,
            "raw": dict(schema),
        }

    def _parse_scalar_node(self, schema: Mapping[str, Any], type_name: str, common: dict[str, Any]) -> SchemaNode:
        fmt = schema.get("format")
        if type_name == "string" and "enum" in schema and fmt not in ("byte", "binary"):
            # null is carried by `nullable`, never by a literal
            values = tuple(str(value) for value in schema["enum"] if value is not None)
            return StringEnumNode(values=values, format=fmt, **common)
        return PrimitiveNode(type_name=type_name, format=fmt, **common)

    def _parse_type_list(self, schema: Mapping[str, Any], types: list[Any], common: dict[str, Any]) -> SchemaNode:
        """Parse a list of types (e.g. ["string", "null"])."""
        if "null" in types:
            common["nullable"] = True
        variants = [t for t in types if t != "null"]

        if not variants:
            # No kind left to declare, reported by the resolver
            return PrimitiveNode(type_name=tuple(types), format=schema.get("format"), **common)

        if len(variants) == 1:
            return self._parse_schema_node({**schema, "type": variants[0], "nullable": common["nullable"]})

        options = tuple(self._parse_schema_node({"type": t}) for t in variants)
        return OneOfNode(options=options, **common)

    def _parse_object_node(self, schema: Mapping[str, Any], common: dict[str, Any]) -> SchemaNode:
        if "properties" not in schema:
            return OpaqueObjectNode(**common)

        properties = {name: self._parse_schema_node(prop) for name, prop in (schema["properties"] or {}).items()}
        return ObjectNode(
            properties=properties,
            required=frozenset(schema.get("required") or ()),
            **common,
        )

    def _parse_array_node(self, schema: Mapping[str, Any], common: dict[str, Any]) -> SchemaNode:
        if "items" not in schema:
            return OpaqueArrayNode(**common)
        return ArrayNode(items=self._parse_schema_node(schema["items"]), **common)

    def _parse_one_of_node(self, schema: Mapping[str, Any], common: dict[str, Any]) -> OneOfNode:
        discriminator = None
        raw_discriminator = schema.get("discriminator")
        if isinstance(raw_discriminator, Mapping) and "propertyName" in raw_discriminator:
            discriminator = DiscriminatorSpec(
                property_name=raw_discriminator["propertyName"],
                mapping=dict(raw_discriminator.get("mapping") or {}),
            )

        return OneOfNode(
            options=self._parse_sequence(schema["oneOf"]),
            discriminator=discriminator,
            **common,
        )

    def _parse_sequence(self, schemas: list[Mapping[str, Any]]) -> tuple[SchemaNode, ...]:
        return tuple(self._parse_schema_node(s) for s in schemas)
