"""
Document loading and reference marking.

Reads an OpenAPI document and replaces local component pointers
(`{"$ref": "#/components/schemas/Pet"}`) by reference markers. Pointers
are never followed or inlined: the referenced schemas stay in the
`components.schemas` arena and are looked up by name.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

import yaml

from ..errors import DocumentError
from .nodes import REF_KEY, SchemaRef

logger = logging.getLogger(__name__)

COMPONENT_SCHEMA_PREFIX = "#/components/schemas/"


def load_document(path: str | Path) -> dict[str, Any]:
    """
    Load a JSON or YAML OpenAPI document and mark its references.

    Args:
        path: Path to the document (.json, .yaml or .yml)

    Returns:
        The document with component pointers replaced by markers
    """
    path = Path(path)
    with open(path, encoding="utf-8") as f:
        if path.suffix in (".yaml", ".yml"):
            document = yaml.safe_load(f)
        else:
            document = json.load(f)

    if not isinstance(document, dict):
        raise DocumentError(f"{path} does not contain an OpenAPI document")

    logger.debug("Loaded document %s", path)
    return mark_references(document)


def mark_references(value: Any) -> Any:
    """Return a copy of `value` with component pointers replaced by markers."""
    if isinstance(value, dict):
        ref = value.get("$ref")
        if isinstance(ref, str):
            marker = parse_component_pointer(ref)
            if marker is not None:
                marked = {k: mark_references(v) for k, v in value.items() if k != "$ref"}
                marked[REF_KEY] = marker
                return marked
            logger.warning("Leaving unsupported $ref %r unresolved", ref)
        return {k: mark_references(v) for k, v in value.items()}

    if isinstance(value, list):
        return [mark_references(item) for item in value]

    return value


def parse_component_pointer(pointer: str) -> SchemaRef | None:
    """Parse `#/components/schemas/<name>` into a marker, None for anything else."""
    if not pointer.startswith(COMPONENT_SCHEMA_PREFIX):
        return None
    name = pointer[len(COMPONENT_SCHEMA_PREFIX) :]
    if not name or "/" in name:
        return None
    # JSON pointer escapes
    return SchemaRef(name=name.replace("~1", "/").replace("~0", "~"))


def component_schemas(document: dict[str, Any]) -> dict[str, Any]:
    """Return the `components.schemas` arena of a document."""
    schemas = (document.get("components") or {}).get("schemas")
    if not isinstance(schemas, dict):
        raise DocumentError("Document has no components.schemas mapping")
    return schemas
