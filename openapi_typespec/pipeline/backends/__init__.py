"""
Type emission backends.
"""

from __future__ import annotations

from .base import TypeBackend
from .python_backend import PythonBackend

__all__ = [
    "TypeBackend",
    "PythonBackend",
]
