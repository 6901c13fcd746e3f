"""
Python type emission backend.

Renders a module of TypedDicts and `type` aliases from IR. Anonymous
structural objects are hoisted into auxiliary TypedDicts named after
the path that leads to them (e.g. `PetOwner` for the `owner` field of
`Pet`).
"""

from __future__ import annotations

import json
import keyword

from ...utils import snake_to_pascal_case
from ..errors import GeneratedCodeError
from ..analyzer.ir_nodes import ModuleIR, TypeDef
from ..analyzer.type_nodes import (
    EnumLiteral,
    ListType,
    NamedReference,
    NullableType,
    OpaqueListType,
    OpaqueMapType,
    PrimitiveKind,
    PrimitiveType,
    StructuralObject,
    TypeExpression,
    UnionType,
)
from .base import TypeBackend


class PythonBackend(TypeBackend):
    """Python type emission backend."""

    TEMPLATE_LANG = "python"
    FILE_EXTENSION = "py"

    PRIMITIVE_MAP = {
        PrimitiveKind.STRING: "str",
        PrimitiveKind.BINARY: "bytes",
        PrimitiveKind.BOOLEAN: "bool",
        PrimitiveKind.FLOAT: "float",
        PrimitiveKind.INTEGER: "int",
    }

    def __init__(self, include_descriptions: bool = True):
        super().__init__()
        self.include_descriptions = include_descriptions
        self.typed_dict_template = self.jinja_env.get_template("typed_dict.py.jinja2")
        self.functional_typed_dict_template = self.jinja_env.get_template("functional_typed_dict.py.jinja2")
        self.alias_template = self.jinja_env.get_template("alias.py.jinja2")
        self._reset("")

    def _reset(self, module: str) -> None:
        self.module = module
        self.typing_imports: set[str] = set()
        self.module_imports: set[str] = set()
        self.used_names: set[str] = set()
        self.declarations: list[str] = []

    def generate(self, ir: ModuleIR) -> str:
        """Generate a Python module from IR."""
        self._reset(ir.module)
        declared: dict[str, str] = {}
        for definition in ir.definitions:
            name = self.type_name(definition.name)
            if name in declared:
                raise GeneratedCodeError(f"Schemas {declared[name]!r} and {definition.name!r} both generate the type {name!r}")
            declared[name] = definition.name
        self.used_names = set(declared)

        for definition in ir.definitions:
            self._declare(definition)

        prefix = self.prefix_template.render(
            generation_comment=ir.generation_comment,
            import_lines=self._import_lines(),
        )

        if not self.declarations:
            return prefix.rstrip("\n") + "\n"
        return prefix.rstrip("\n") + "\n\n\n" + "\n\n\n".join(self.declarations) + "\n"

    def type_name(self, schema_name: str) -> str:
        name = super().type_name(schema_name)
        if name[:1].isdigit():
            name = f"_{name}"
        return name

    def translate_type(self, expression: TypeExpression, hint: str) -> str:
        """Translate a type expression into a Python annotation."""
        if isinstance(expression, PrimitiveType):
            return self.PRIMITIVE_MAP[expression.kind]

        if isinstance(expression, NullableType):
            return f"{self.translate_type(expression.inner, hint)} | None"

        if isinstance(expression, ListType):
            return f"list[{self.translate_type(expression.item, f'{hint}Item')}]"

        if isinstance(expression, OpaqueListType):
            self.typing_imports.add("Any")
            return "list[Any]"

        if isinstance(expression, OpaqueMapType):
            self.typing_imports.add("Any")
            return "dict[str, Any]"

        if isinstance(expression, UnionType):
            if not expression.alternatives:
                self.typing_imports.add("Never")
                return "Never"
            return " | ".join(self.translate_type(alternative, f"{hint}Variant{i}") for i, alternative in enumerate(expression.alternatives, 1))

        if isinstance(expression, EnumLiteral):
            if not expression.values:
                self.typing_imports.add("Never")
                return "Never"
            self.typing_imports.add("Literal")
            return f"Literal[{', '.join(json.dumps(value) for value in expression.values)}]"

        if isinstance(expression, NamedReference):
            name = self.type_name(expression.name)
            if expression.module is None or expression.module == self.module:
                return name
            self.module_imports.add(expression.module)
            return f"{expression.module}.{name}"

        if isinstance(expression, StructuralObject):
            name = self._unique_name(hint)
            self._declare_struct(name, expression, [])
            return name

        raise TypeError(f"Unsupported type expression {expression!r}")

    def _declare(self, definition: TypeDef) -> None:
        name = self.type_name(definition.name)
        lines = self.description_lines(definition.descriptions) if self.include_descriptions else []

        if isinstance(definition.expression, StructuralObject):
            self._declare_struct(name, definition.expression, lines)
            return

        annotation = self.translate_type(definition.expression, name)
        self.declarations.append(self.alias_template.render(name=name, annotation=annotation, comments=lines).rstrip("\n"))

    def _declare_struct(self, name: str, struct: StructuralObject, lines: list[str]) -> None:
        """Declare a TypedDict; nested structs are declared before it."""
        self.typing_imports.add("TypedDict")

        fields = []
        for field in struct.fields:
            annotation = self.translate_type(field.type, name + (snake_to_pascal_case(field.name) or "Field"))
            if field.optional:
                self.typing_imports.add("NotRequired")
                annotation = f"NotRequired[{annotation}]"
            fields.append({"name": field.name, "annotation": annotation})

        if all(field["name"].isidentifier() and not keyword.iskeyword(field["name"]) for field in fields):
            rendered = self.typed_dict_template.render(name=name, docstring=self._docstring(lines), fields=fields)
        else:
            # Field names that are not identifiers need the functional syntax
            rendered = self.functional_typed_dict_template.render(
                name=name,
                comments=lines,
                fields=[{"key": json.dumps(field["name"]), "annotation": json.dumps(field["annotation"])} for field in fields],
            )
        self.declarations.append(rendered.rstrip("\n"))

    def _unique_name(self, hint: str) -> str:
        candidate = hint if hint not in self.used_names else f"{hint}Object"
        counter = 2
        while candidate in self.used_names:
            candidate = f"{hint}Object{counter}"
            counter += 1
        self.used_names.add(candidate)
        return candidate

    def _import_lines(self) -> list[str]:
        lines = []
        if self.typing_imports:
            lines.append(f"from typing import {', '.join(sorted(self.typing_imports))}")
        if self.module_imports:
            if lines:
                lines.append("")
            lines.extend(f"import {module}" for module in sorted(self.module_imports))
        return lines

    @staticmethod
    def _docstring(lines: list[str]) -> str | None:
        if not lines:
            return None
        escaped = [line.replace("\\", "\\\\").replace('"', '\\"') for line in lines]
        if len(escaped) == 1:
            return escaped[0]
        return "\n".join([escaped[0], *(f"    {line}" if line else "" for line in escaped[1:]), "    "])
