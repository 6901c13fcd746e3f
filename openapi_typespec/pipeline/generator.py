"""
Pipeline generator: compiles the component schemas of an OpenAPI
document into one read module and one write module.

1. Resolve every schema into a type expression, per view mode
2. Collect the expressions (and descriptions) into a ModuleIR
3. Render the IR with a backend
4. Optionally format the rendered code
"""

from __future__ import annotations

import logging
from typing import Any

from .analyzer.context import ReferenceContext, ViewMode
from .analyzer.ir_nodes import ModuleIR, TypeDef
from .analyzer.resolver import TypeResolver
from .analyzer.type_nodes import TypeExpression
from .backends import PythonBackend, TypeBackend
from .config import CompilerConfig
from .errors import TypespecError
from .formatters import get_formatter
from .schema_ast.loader import component_schemas

logger = logging.getLogger(__name__)


class TypespecGenerator:
    """Compiles component schemas into read and write type modules."""

    def __init__(
        self,
        document: dict[str, Any],
        config: CompilerConfig | None = None,
        backend: TypeBackend | None = None,
    ):
        """
        Initialize the generator.

        Args:
            document: OpenAPI document whose references are already marked
            config: Compilation configuration
            backend: Emission backend (Python by default)
        """
        self.config = config or CompilerConfig()
        self.schemas = component_schemas(document)
        self.context = ReferenceContext.uniform(self.config.read_module, self.config.write_module, self.schemas)
        self.resolver = TypeResolver()
        self.backend = backend or PythonBackend(include_descriptions=self.config.include_descriptions)

    def schema_names(self) -> list[str]:
        """Names of the schemas to compile, in emission order."""
        ordered = [name for name in self.config.order_schemas if name in self.schemas]
        ordered += [name for name in self.schemas if name not in ordered]
        return [name for name in ordered if name not in self.config.ignore_schemas]

    def module_for(self, mode: ViewMode) -> str:
        return self.config.read_module if mode == ViewMode.READ else self.config.write_module

    def compile_schema(self, name: str, mode: ViewMode) -> TypeExpression:
        """
        Resolve one component schema.

        Raises:
            UnknownTypeError: If the schema uses an unrecognized type;
                the schema name and mode are attached as a note
        """
        mode = ViewMode(mode)
        logger.debug("Compiling schema %s (%s)", name, mode.value)
        try:
            return self.resolver.resolve(self.schemas[name], mode, self.context, origin=name)
        except TypespecError as e:
            e.add_note(f"while compiling schema {name!r} ({mode.value} mode)")
            raise

    def compile(self, mode: ViewMode) -> dict[str, TypeExpression]:
        """Resolve every schema for one view mode."""
        return {name: self.compile_schema(name, mode) for name in self.schema_names()}

    def build_ir(self, mode: ViewMode, generation_comment: str = "") -> ModuleIR:
        mode = ViewMode(mode)
        ir = ModuleIR(
            module=self.module_for(mode),
            mode=mode,
            generation_comment=generation_comment if self.config.add_generation_comment else "",
        )
        for name, expression in self.compile(mode).items():
            ir.definitions.append(
                TypeDef(
                    name=name,
                    expression=expression,
                    descriptions=collect_descriptions(self.schemas[name]),
                )
            )
        return ir

    def generate(self, mode: ViewMode, generation_comment: str = "") -> str:
        """Render the module of one view mode."""
        code = self.backend.generate(self.build_ir(mode, generation_comment))
        if self.config.formatter.enabled:
            code = get_formatter(self.config.formatter.tool).format(code, self.config.formatter)
        return code

    def output_file_name(self, mode: ViewMode) -> str:
        return self.backend.module_file_name(self.module_for(mode))


def collect_descriptions(definition: dict[str, Any]) -> list[str]:
    """Descriptions of a schema and of its direct allOf parts, in order."""
    descriptions = []
    for fragment in [definition, *(definition.get("allOf") or [])]:
        description = fragment.get("description")
        if isinstance(description, str) and description.strip():
            descriptions.append(description)
    return descriptions
