"""
Tests for AtomicWriter.
"""

from __future__ import annotations

import pytest

from openapi_typespec.pipeline import AtomicWriter, GeneratedCodeError, OutputConfig, OutputMode
from openapi_typespec.pipeline.writer import validate_python

CODE = "from __future__ import annotations\n\ntype Price = float | int\n"


class TestAtomicWriter:
    def test_write_creates_parent_directories(self, tmp_path):
        path = tmp_path / "schemas" / "read.py"

        AtomicWriter().write(path, CODE)

        assert path.read_text() == CODE
        assert [p.name for p in path.parent.iterdir()] == ["read.py"]

    def test_existing_file_is_an_error_by_default(self, tmp_path):
        path = tmp_path / "read.py"
        path.write_text("# hand written\n")

        with pytest.raises(FileExistsError):
            AtomicWriter().write(path, CODE)

        assert path.read_text() == "# hand written\n"

    def test_force_overwrites(self, tmp_path):
        path = tmp_path / "read.py"
        path.write_text("# old\n")

        AtomicWriter(OutputConfig(mode=OutputMode.FORCE)).write(path, CODE)

        assert path.read_text() == CODE

    def test_invalid_code_is_not_written(self, tmp_path):
        path = tmp_path / "read.py"

        with pytest.raises(GeneratedCodeError):
            AtomicWriter().write(path, "class Broken(TypedDict)\n")

        assert not path.exists()

    def test_validation_can_be_disabled(self, tmp_path):
        path = tmp_path / "read.py"
        AtomicWriter(OutputConfig(validate_before_write=False)).write(path, "not python (\n")
        assert path.read_text() == "not python (\n"

    def test_non_atomic_write(self, tmp_path):
        path = tmp_path / "read.py"
        AtomicWriter(OutputConfig(atomic_write=False)).write(path, CODE)
        assert path.read_text() == CODE


def test_validate_python():
    validate_python(CODE)
    with pytest.raises(GeneratedCodeError, match="not valid"):
        validate_python("def (")
