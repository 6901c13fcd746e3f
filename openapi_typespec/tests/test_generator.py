"""
Tests for TypespecGenerator on a complete document.
"""

from __future__ import annotations

from pathlib import Path

import pytest

from openapi_typespec.pipeline import (
    CompilerConfig,
    TypespecGenerator,
    UnknownTypeError,
    ViewMode,
    load_document,
)
from openapi_typespec.pipeline.analyzer import NamedReference, StructuralObject
from openapi_typespec.pipeline.generator import collect_descriptions

PETSTORE = Path(__file__).parent / "test_data" / "petstore.yaml"


@pytest.fixture
def document():
    return load_document(PETSTORE)


@pytest.fixture
def generator(document):
    return TypespecGenerator(document)


class TestCompile:
    def test_schema_names_follow_document_order(self, generator):
        assert generator.schema_names() == ["Pet", "Tag", "Owner", "NewPet", "Animal", "Cat", "Dog", "Price", "Metadata"]

    def test_order_and_ignore(self, document):
        config = CompilerConfig(order_schemas=["Price", "Missing", "Tag"], ignore_schemas=["Metadata", "Tag"])
        generator = TypespecGenerator(document, config)
        assert generator.schema_names() == ["Price", "Pet", "Owner", "NewPet", "Animal", "Cat", "Dog"]

    def test_compile_read(self, generator):
        types = generator.compile(ViewMode.READ)
        pet = types["Pet"]
        assert isinstance(pet, StructuralObject)
        assert [field.name for field in pet.fields] == ["id", "name", "status", "tags", "owner", "parent"]
        assert pet.fields[-1].type == NamedReference(None, "Pet")

    def test_compile_write(self, generator):
        pet = generator.compile(ViewMode.WRITE)["Pet"]
        assert [field.name for field in pet.fields] == ["name", "status", "tags", "owner", "parent"]

    def test_unknown_type_names_the_schema(self):
        document = {"components": {"schemas": {"Money": {"type": "object", "properties": {"amount": {"type": "money"}}}}}}
        generator = TypespecGenerator(document)
        with pytest.raises(UnknownTypeError) as exc_info:
            generator.compile(ViewMode.WRITE)
        assert exc_info.value.type == "money"
        assert exc_info.value.__notes__ == ["while compiling schema 'Money' (write mode)"]


class TestGenerate:
    def test_read_module(self, generator):
        code = generator.generate(ViewMode.READ, "Generated by openapi_typespec petstore.yaml out")

        assert code.startswith("# Generated by openapi_typespec petstore.yaml out\n\nfrom __future__ import annotations\n")
        assert "from typing import Any, NotRequired, TypedDict\n" in code
        assert (
            "class Pet(TypedDict):\n"
            '    """A pet for sale."""\n'
            "\n"
            "    id: int\n"
            "    name: str\n"
            "    status: NotRequired[str]\n"
            "    tags: NotRequired[list[Tag]]\n"
            "    owner: NotRequired[Owner | None]\n"
            "    parent: NotRequired[Pet]\n"
        ) in code
        assert "class OwnerAddress(TypedDict):\n    city: NotRequired[str]\n" in code
        assert "class Owner(TypedDict):\n    email: str\n    address: NotRequired[OwnerAddress]\n" in code
        assert "    photo: NotRequired[bytes]\n" in code
        assert "class AnimalVariant1(TypedDict):\n    kind: str\n    meow: NotRequired[bool]\n" in code
        assert "class AnimalVariant2(TypedDict):\n    kind: str\n    bark: NotRequired[bool]\n" in code
        assert "type Animal = AnimalVariant1 | AnimalVariant2\n" in code
        assert "type Price = float | int\n" in code
        assert "type Metadata = dict[str, Any]\n" in code

    def test_write_module(self, generator):
        code = generator.generate(ViewMode.WRITE)

        assert "from typing import Any, Literal, NotRequired, TypedDict\n" in code
        assert (
            "class Pet(TypedDict):\n"
            '    """A pet for sale."""\n'
            "\n"
            "    name: str\n"
            '    status: NotRequired[Literal["available", "pending", "sold"]]\n'
        ) in code
        assert "class Owner(TypedDict):\n    email: str\n    password: NotRequired[str]\n" in code
        assert '    kind: Literal["cat"]\n' in code
        assert '    kind: Literal["Dog"]\n' in code

    def test_read_module_executes(self, generator):
        namespace = {"__name__": "read"}
        exec(compile(generator.generate(ViewMode.READ), "read.py", "exec"), namespace)
        assert {"Pet", "Owner", "OwnerAddress", "NewPet", "Animal", "AnimalVariant1", "Price"} <= set(namespace)

    def test_generation_comment_can_be_disabled(self, document):
        generator = TypespecGenerator(document, CompilerConfig(add_generation_comment=False))
        code = generator.generate(ViewMode.READ, "Generated by openapi_typespec")
        assert code.startswith("from __future__ import annotations\n")

    def test_module_names_give_file_names(self, document):
        config = CompilerConfig(read_module="api.read_models", write_module="api.write_models")
        generator = TypespecGenerator(document, config)
        ir = generator.build_ir(ViewMode.WRITE)
        assert ir.module == "api.write_models"
        assert generator.output_file_name(ViewMode.READ) == "read_models.py"
        assert generator.output_file_name(ViewMode.WRITE) == "write_models.py"

    def test_formatter_is_applied(self, document, monkeypatch):
        calls = []

        class UpperFormatter:
            def format(self, code, config):
                calls.append(config.tool)
                return code.upper()

        monkeypatch.setattr("openapi_typespec.pipeline.generator.get_formatter", lambda tool: UpperFormatter())
        config = CompilerConfig.from_dict({"formatter": {"enabled": True, "tool": "ruff"}})

        code = TypespecGenerator(document, config).generate(ViewMode.READ)

        assert calls == ["ruff"]
        assert "CLASS PET(TYPEDDICT):" in code


def test_collect_descriptions():
    definition = {
        "description": "Outer.",
        "allOf": [{"description": "Inner."}, {"type": "object"}, {"description": "  "}],
    }
    assert collect_descriptions(definition) == ["Outer.", "Inner."]
    assert collect_descriptions({"type": "string"}) == []
