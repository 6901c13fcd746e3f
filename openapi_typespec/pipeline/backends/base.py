"""
Base class for type emission backends.

Defines the interface that all language-specific backends must implement.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from pathlib import Path

import jinja2

from ...utils import snake_to_pascal_case
from ..analyzer.ir_nodes import ModuleIR
from ..analyzer.type_nodes import TypeExpression


class TypeBackend(ABC):
    """Abstract base class for type emission backends."""

    # Template directory name
    TEMPLATE_LANG: str = ""

    # File extension
    FILE_EXTENSION: str = ""

    def __init__(self):
        self._setup_templates()

    def _setup_templates(self) -> None:
        """Set up Jinja2 templates."""
        template_dir = Path(__file__).parent.parent.parent / "templates" / self.TEMPLATE_LANG
        self.jinja_env = jinja2.Environment(
            loader=jinja2.FileSystemLoader(str(template_dir)),
            lstrip_blocks=True,
            trim_blocks=True,
        )
        self.prefix_template = self.jinja_env.get_template(f"prefix.{self.FILE_EXTENSION}.jinja2")

    @abstractmethod
    def generate(self, ir: ModuleIR) -> str:
        """
        Render a module from IR.

        Args:
            ir: The types of one view mode

        Returns:
            Generated source code
        """

    @abstractmethod
    def translate_type(self, expression: TypeExpression, hint: str) -> str:
        """
        Translate a type expression to a language-specific type string.

        Args:
            expression: The type expression
            hint: Name to derive auxiliary declarations from

        Returns:
            Language-specific type string
        """

    def type_name(self, schema_name: str) -> str:
        """Name of the generated type for a schema."""
        return snake_to_pascal_case(schema_name) or schema_name

    def module_file_name(self, module: str) -> str:
        """File name a module is written to (last dotted segment)."""
        return f"{module.rsplit('.', 1)[-1]}.{self.FILE_EXTENSION}"

    @staticmethod
    def description_lines(descriptions: list[str]) -> list[str]:
        """Split descriptions into stripped lines, paragraphs separated by blank lines."""
        lines: list[str] = []
        for description in descriptions:
            if lines:
                lines.append("")
            lines.extend(line.rstrip() for line in description.strip().splitlines())
        return lines
