"""OpenAPI Typespec Compiler

Compiles the component schemas of an OpenAPI document into read and
write type declarations, honoring required/nullable fields, enums,
readOnly/writeOnly visibility and oneOf/allOf/anyOf composition.
"""

__version__ = "0.1.0"

from .pipeline import (
    AtomicWriter,
    CompilerConfig,
    FormatterConfig,
    OutputConfig,
    OutputMode,
    ReferenceContext,
    TypespecError,
    TypespecGenerator,
    UnknownTypeError,
    ViewMode,
    load_document,
    resolve_type,
)

__all__ = [
    "TypespecGenerator",
    "CompilerConfig",
    "FormatterConfig",
    "OutputConfig",
    "OutputMode",
    "ReferenceContext",
    "ViewMode",
    "resolve_type",
    "load_document",
    "AtomicWriter",
    "TypespecError",
    "UnknownTypeError",
]
