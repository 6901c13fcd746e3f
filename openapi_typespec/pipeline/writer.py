"""
Atomic file writer for generated modules.
"""

from __future__ import annotations

import ast
import logging
import tempfile
from pathlib import Path

from .config import OutputConfig, OutputMode
from .errors import GeneratedCodeError

logger = logging.getLogger(__name__)


class AtomicWriter:
    """Writes generated modules, validating them first.

    With atomic writes enabled the content goes to a temporary file in
    the target directory, which then replaces the target, so an
    interrupted write never leaves a truncated module behind.
    """

    def __init__(self, config: OutputConfig | None = None):
        self.config = config or OutputConfig()

    def write(self, path: Path, content: str) -> None:
        """
        Write a generated Python module.

        Raises:
            FileExistsError: If the file exists and the mode is ERROR_IF_EXISTS
            GeneratedCodeError: If the content is not valid Python
        """
        path = Path(path)
        if path.exists() and self.config.mode == OutputMode.ERROR_IF_EXISTS:
            raise FileExistsError(f"Output file already exists: {path}. Use force mode to overwrite.")

        if self.config.validate_before_write:
            validate_python(content)

        path.parent.mkdir(parents=True, exist_ok=True)
        if not self.config.atomic_write:
            path.write_text(content, encoding="utf-8")
        else:
            self._write_atomic(path, content)
        logger.info("Wrote %s", path)

    def _write_atomic(self, path: Path, content: str) -> None:
        temp_fd, temp_name = tempfile.mkstemp(dir=path.parent, prefix=f".{path.name}.", suffix=".tmp", text=True)
        temp_path = Path(temp_name)
        try:
            with open(temp_fd, "w", encoding="utf-8") as f:
                f.write(content)
            temp_path.replace(path)
        except Exception:
            temp_path.unlink(missing_ok=True)
            raise


def validate_python(code: str) -> None:
    """Raise GeneratedCodeError if `code` does not parse."""
    try:
        ast.parse(code)
    except SyntaxError as e:
        raise GeneratedCodeError(f"Generated Python code is not valid: {e}") from e
