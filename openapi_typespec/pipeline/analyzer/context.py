"""
View modes and the reference context shared by a compilation pass.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class ViewMode(str, Enum):
    """Which projection of a schema is produced."""

    READ = "read"  # server-to-client payloads, writeOnly properties dropped
    WRITE = "write"  # client-to-server payloads, readOnly properties dropped


@dataclass(frozen=True)
class ReferenceContext:
    """Read-only lookups consulted whenever a reference is resolved.

    Attributes:
        read_modules: Schema name -> module holding its read type
        write_modules: Schema name -> module holding its write type
        schemas: Arena of raw component schemas, used to expand
            references inside merged compositions
    """

    read_modules: dict[str, str] = field(default_factory=dict)
    write_modules: dict[str, str] = field(default_factory=dict)
    schemas: dict[str, Any] = field(default_factory=dict, compare=False, repr=False)

    @classmethod
    def uniform(cls, read_module: str, write_module: str, schemas: dict[str, Any]) -> ReferenceContext:
        """Build a context where all schemas share one read and one write module."""
        return cls(
            read_modules={name: read_module for name in schemas},
            write_modules={name: write_module for name in schemas},
            schemas=dict(schemas),
        )

    def read_module_of(self, name: str) -> str:
        return self.read_modules[name]

    def write_module_of(self, name: str) -> str:
        return self.write_modules[name]

    def module_of(self, name: str, mode: ViewMode) -> str:
        """Module of `name`'s generated type for the given mode."""
        if mode == ViewMode.READ:
            return self.read_module_of(name)
        return self.write_module_of(name)
