"""
Pipeline - OpenAPI component schemas to read/write type modules.

1. Phase 1 (Schema AST): Load the document, mark references, classify fragments
2. Phase 2 (Analyzer): Merge compositions and resolve type expressions
3. Phase 3 (Backend): Render type expressions as source code
4. Phase 4 (Formatter): Optional post-processing (black or ruff)
5. Phase 5 (Writer): Validate and atomically write each module
"""

from __future__ import annotations

from .analyzer import ReferenceContext, ViewMode, merge_definitions, resolve_type
from .config import CompilerConfig, FormatterConfig, OutputConfig, OutputMode
from .errors import DocumentError, GeneratedCodeError, TypespecError, UnknownTypeError
from .generator import TypespecGenerator
from .schema_ast import load_document
from .writer import AtomicWriter

__all__ = [
    "TypespecGenerator",
    "CompilerConfig",
    "FormatterConfig",
    "OutputConfig",
    "OutputMode",
    "ReferenceContext",
    "ViewMode",
    "merge_definitions",
    "resolve_type",
    "load_document",
    "AtomicWriter",
    "TypespecError",
    "UnknownTypeError",
    "DocumentError",
    "GeneratedCodeError",
]
