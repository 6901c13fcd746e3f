"""
Tests for document loading and reference marking.
"""

from __future__ import annotations

import json
import logging

import pytest

from openapi_typespec.pipeline import DocumentError, load_document
from openapi_typespec.pipeline.schema_ast import REF_KEY, SchemaRef, component_schemas, mark_references
from openapi_typespec.pipeline.schema_ast.loader import parse_component_pointer

DOCUMENT = {
    "openapi": "3.0.3",
    "components": {
        "schemas": {
            "Pet": {"type": "object", "properties": {"owner": {"$ref": "#/components/schemas/Owner"}}},
            "Owner": {"type": "object"},
        }
    },
}


class TestMarkReferences:
    def test_component_pointer_is_marked(self):
        marked = mark_references({"$ref": "#/components/schemas/Pet"})
        assert marked == {REF_KEY: SchemaRef(name="Pet")}

    def test_sibling_keys_are_kept(self):
        marked = mark_references({"$ref": "#/components/schemas/Pet", "nullable": True})
        assert marked == {REF_KEY: SchemaRef(name="Pet"), "nullable": True}

    def test_nested_pointers_are_marked(self):
        marked = mark_references({"oneOf": [{"$ref": "#/components/schemas/A"}, {"type": "string"}]})
        assert marked["oneOf"][0] == {REF_KEY: SchemaRef(name="A")}
        assert marked["oneOf"][1] == {"type": "string"}

    def test_unsupported_pointer_is_left_alone(self, caplog):
        value = {"$ref": "other.yaml#/Pet"}
        with caplog.at_level(logging.WARNING):
            assert mark_references(value) == value
        assert "other.yaml#/Pet" in caplog.text

    def test_input_is_not_mutated(self):
        value = {"items": {"$ref": "#/components/schemas/Pet"}}
        mark_references(value)
        assert value == {"items": {"$ref": "#/components/schemas/Pet"}}


@pytest.mark.parametrize(
    "pointer, expected",
    [
        ("#/components/schemas/Pet", SchemaRef(name="Pet")),
        ("#/components/schemas/a~1b~0c", SchemaRef(name="a/b~c")),
        ("#/components/schemas/", None),
        ("#/components/schemas/Pet/properties/id", None),
        ("#/components/responses/Pet", None),
    ],
)
def test_parse_component_pointer(pointer, expected):
    assert parse_component_pointer(pointer) == expected


class TestLoadDocument:
    def test_json(self, tmp_path):
        path = tmp_path / "api.json"
        path.write_text(json.dumps(DOCUMENT))

        document = load_document(path)

        owner = document["components"]["schemas"]["Pet"]["properties"]["owner"]
        assert owner == {REF_KEY: SchemaRef(name="Owner")}

    def test_yaml(self, tmp_path):
        path = tmp_path / "api.yaml"
        path.write_text(
            "components:\n"
            "  schemas:\n"
            "    Pet:\n"
            "      type: object\n"
            "      properties:\n"
            "        owner:\n"
            "          $ref: '#/components/schemas/Owner'\n"
            "    Owner:\n"
            "      type: object\n"
        )

        document = load_document(path)

        assert list(component_schemas(document)) == ["Pet", "Owner"]
        assert document["components"]["schemas"]["Pet"]["properties"]["owner"] == {REF_KEY: SchemaRef(name="Owner")}

    def test_not_a_mapping(self, tmp_path):
        path = tmp_path / "api.json"
        path.write_text("[1, 2]")
        with pytest.raises(DocumentError):
            load_document(path)


class TestComponentSchemas:
    def test_returns_arena(self):
        assert component_schemas(DOCUMENT) is DOCUMENT["components"]["schemas"]

    def test_missing_schemas(self):
        with pytest.raises(DocumentError):
            component_schemas({"openapi": "3.0.3", "paths": {}})
