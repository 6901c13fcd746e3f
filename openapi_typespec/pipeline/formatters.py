"""
Post-processing formatters for generated modules.

Formatting is optional: when the selected tool is not installed, the
code is returned unchanged.
"""

from __future__ import annotations

import logging
import shutil
import subprocess
from abc import ABC, abstractmethod

from .config import FormatterConfig

logger = logging.getLogger(__name__)


class Formatter(ABC):
    """Abstract base class for code formatters."""

    @abstractmethod
    def is_available(self) -> bool:
        """Check if the formatter can be used."""

    @abstractmethod
    def format(self, code: str, config: FormatterConfig) -> str:
        """
        Format the given code.

        Args:
            code: The source code to format
            config: Formatter configuration

        Returns:
            Formatted code, or the input when formatting failed
        """


class BlackFormatter(Formatter):
    """Formatter using black's Python API."""

    def is_available(self) -> bool:
        try:
            import black  # noqa: F401
        except ImportError:
            return False
        return True

    def format(self, code: str, config: FormatterConfig) -> str:
        if not self.is_available():
            logger.warning("black is not installed, leaving generated code unformatted")
            return code

        import black

        target_versions = set()
        target = getattr(black.TargetVersion, config.target_version.upper(), None)
        if target is not None:
            target_versions.add(target)

        mode = black.Mode(target_versions=target_versions, line_length=config.line_length)
        try:
            return black.format_str(code, mode=mode)
        except black.InvalidInput as e:
            logger.warning("black could not format generated code: %s", e)
            return code


class RuffFormatter(Formatter):
    """Formatter running `ruff format` on stdin."""

    def is_available(self) -> bool:
        return shutil.which("ruff") is not None

    def format(self, code: str, config: FormatterConfig) -> str:
        if not self.is_available():
            logger.warning("ruff is not installed, leaving generated code unformatted")
            return code

        cmd = [
            "ruff",
            "format",
            "--stdin-filename",
            "generated.py",
            "--line-length",
            str(config.line_length),
            "--target-version",
            config.target_version,
        ]
        try:
            result = subprocess.run(cmd, input=code, capture_output=True, text=True, timeout=30)
        except subprocess.SubprocessError as e:
            logger.warning("ruff could not format generated code: %s", e)
            return code

        if result.returncode != 0:
            logger.warning("ruff could not format generated code: %s", result.stderr.strip())
            return code
        return result.stdout


FORMATTERS: dict[str, type[Formatter]] = {
    "black": BlackFormatter,
    "ruff": RuffFormatter,
}


def get_formatter(tool: str) -> Formatter:
    """Return the formatter registered under `tool`."""
    try:
        return FORMATTERS[tool]()
    except KeyError:
        raise ValueError(f"Unknown formatter {tool!r}, expected one of {sorted(FORMATTERS)}") from None
