"""
Exceptions raised by the typespec pipeline.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from .analyzer.context import ReferenceContext


class TypespecError(Exception):
    """Base class for all errors raised by openapi_typespec."""


class UnknownTypeError(TypespecError):
    """Raised when a schema declares a `type` the resolver does not know.

    Resolution of the whole schema is aborted; the caller reports the
    error against the schema it was compiling.

    Attributes:
        definition: The offending raw schema fragment
        type: The declared kind string
        context: The reference context active during resolution
    """

    def __init__(self, definition: dict[str, Any], type: Any, context: ReferenceContext):
        self.definition = definition
        self.type = type
        self.context = context
        super().__init__(f"Unknown schema type {type!r} in {definition!r}")


class DocumentError(TypespecError):
    """Raised when an input document does not contain component schemas."""


class GeneratedCodeError(TypespecError):
    """Raised when rendered code is not valid for its target language."""
