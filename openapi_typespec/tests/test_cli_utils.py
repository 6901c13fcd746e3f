#!/usr/bin/env python3

import logging

import click
import pytest
from click.testing import CliRunner

from openapi_typespec.cli_utils import configure_logging, reconstruct_command_line
from openapi_typespec.openapi_typespec import openapi_typespec
from openapi_typespec.utils import snake_to_pascal_case


class TestCliUtils:
    """Test cases for CLI utilities"""

    def test_reconstruct_command_line_without_context(self):
        """Without an active Click context only the command name is returned"""
        assert reconstruct_command_line(openapi_typespec) == "openapi_typespec"

    def test_reconstruct_command_line_with_context(self, tmp_path):
        @click.command(name="demo")
        @click.option("--mode", default="both")
        @click.option("--force", is_flag=True, default=False)
        @click.option("--module", default=None)
        @click.argument("path")
        def demo(mode, force, module, path):
            click.echo(reconstruct_command_line(demo))

        path = str(tmp_path / "api.yaml")
        result = CliRunner().invoke(demo, ["--mode", "read", "--force", path])

        assert result.exit_code == 0, result.output
        assert result.output.strip() == "demo api.yaml --mode read --force"

    def test_default_options_are_omitted(self):
        @click.command(name="demo")
        @click.option("--mode", default="both")
        @click.argument("name")
        def demo(mode, name):
            click.echo(reconstruct_command_line(demo))

        result = CliRunner().invoke(demo, ["--mode", "both", "pets"])
        assert result.output.strip() == "demo pets"


class TestConfigureLogging:
    @pytest.fixture(autouse=True)
    def restore_root_logger(self):
        root = logging.getLogger()
        handlers, level = root.handlers[:], root.level
        yield
        root.handlers[:] = handlers
        root.setLevel(level)

    def test_default_level(self, monkeypatch):
        monkeypatch.delenv("OPENAPI_TYPESPEC_DEBUG", raising=False)
        configure_logging()
        assert logging.getLogger().level == logging.WARNING

    def test_debug_flag(self):
        configure_logging(debug=True)
        assert logging.getLogger().level == logging.DEBUG

    def test_debug_env_var(self, monkeypatch):
        monkeypatch.setenv("OPENAPI_TYPESPEC_DEBUG", "true")
        configure_logging()
        assert logging.getLogger().level == logging.DEBUG

    def test_single_handler(self):
        configure_logging()
        configure_logging()
        assert len(logging.getLogger().handlers) == 1


@pytest.mark.parametrize(
    "text, expected",
    [
        ("pet_owner", "PetOwner"),
        ("petOwner", "PetOwner"),
        ("Pet-Response.v2", "PetResponseV2"),
        ("@type", "Type"),
        ("", ""),
    ],
)
def test_snake_to_pascal_case(text, expected):
    assert snake_to_pascal_case(text) == expected
