"""
Configuration for the typespec pipeline.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum


class OutputMode(str, Enum):
    """Output mode for file generation.

    Controls behavior when the output file already exists.
    """

    ERROR_IF_EXISTS = "error"  # Default: raise error if file exists
    FORCE = "force"  # Overwrite


@dataclass
class OutputConfig:
    """Configuration for output file handling.

    Attributes:
        mode: How to handle existing output files
        validate_before_write: Whether to parse generated code before writing
        atomic_write: Whether to write through a temporary file
    """

    mode: OutputMode = OutputMode.ERROR_IF_EXISTS
    validate_before_write: bool = True
    atomic_write: bool = True


@dataclass
class FormatterConfig:
    """Configuration for post-processing formatters."""

    enabled: bool = False

    # "black" or "ruff"
    tool: str = "black"

    line_length: int = 100

    # Python version target (e.g., "py312", "py313")
    target_version: str = "py312"


@dataclass
class CompilerConfig:
    """Configuration options for type compilation."""

    # Modules the read and write types are generated into
    read_module: str = "schemas.read"
    write_module: str = "schemas.write"

    # Schemas to skip
    ignore_schemas: list[str] = field(default_factory=list)

    # Order in which to emit schemas (empty = document order)
    order_schemas: list[str] = field(default_factory=list)

    # Add generation comment at top of file
    add_generation_comment: bool = True

    # Emit docstrings from schema descriptions
    include_descriptions: bool = True

    formatter: FormatterConfig = field(default_factory=FormatterConfig)

    output: OutputConfig = field(default_factory=OutputConfig)

    @staticmethod
    def from_dict(d: dict) -> CompilerConfig:
        """Create a config from a dictionary."""
        config = CompilerConfig()
        for k, v in d.items():
            if k == "formatter" and isinstance(v, dict):
                config.formatter = FormatterConfig(**v)
            elif k == "output" and isinstance(v, dict):
                config.output = OutputConfig(
                    mode=OutputMode(v.get("mode", OutputMode.ERROR_IF_EXISTS)),
                    validate_before_write=v.get("validate_before_write", True),
                    atomic_write=v.get("atomic_write", True),
                )
            elif hasattr(config, k):
                setattr(config, k, v)
        return config

    def to_dict(self) -> dict:
        """Convert config to a dictionary."""
        return {
            "read_module": self.read_module,
            "write_module": self.write_module,
            "ignore_schemas": self.ignore_schemas,
            "order_schemas": self.order_schemas,
            "add_generation_comment": self.add_generation_comment,
            "include_descriptions": self.include_descriptions,
            "formatter": {
                "enabled": self.formatter.enabled,
                "tool": self.formatter.tool,
                "line_length": self.formatter.line_length,
                "target_version": self.formatter.target_version,
            },
            "output": {
                "mode": self.output.mode.value,
                "validate_before_write": self.output.validate_before_write,
                "atomic_write": self.output.atomic_write,
            },
        }
