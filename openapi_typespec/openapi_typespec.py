import json
from pathlib import Path

import click

from .cli_utils import configure_logging, reconstruct_command_line
from .pipeline import (
    AtomicWriter,
    CompilerConfig,
    OutputMode,
    TypespecError,
    TypespecGenerator,
    ViewMode,
    load_document,
)


@click.command(name="openapi_typespec")
@click.option("--config", "-c", default=None, type=click.Path(exists=True, dir_okay=False, resolve_path=True))
@click.option("--mode", "-m", default="both", type=click.Choice(["read", "write", "both"]))
@click.option("--read-module", default=None, type=str, help="Module the read types are generated into")
@click.option("--write-module", default=None, type=str, help="Module the write types are generated into")
@click.option("--force", is_flag=True, default=False, help="Overwrite existing output files")
@click.option("--format", "format_code", is_flag=True, default=False, help="Format the generated code")
@click.option("--formatter", default=None, type=click.Choice(["black", "ruff"]))
@click.option("--debug", is_flag=True, default=False, help="Enable debug logging")
@click.argument("path", type=click.Path(exists=True, dir_okay=False, resolve_path=True))
@click.argument("output_dir", type=click.Path(file_okay=False, resolve_path=True))
def openapi_typespec(config, mode, read_module, write_module, force, format_code, formatter, debug, path, output_dir):
    """Compile the component schemas of an OpenAPI document into type modules."""
    configure_logging(debug)

    if config is not None:
        with open(config) as f:
            config = CompilerConfig.from_dict(json.load(f))
    else:
        config = CompilerConfig()

    # CLI flags override the config file
    if read_module:
        config.read_module = read_module
    if write_module:
        config.write_module = write_module
    if force:
        config.output.mode = OutputMode.FORCE
    if format_code:
        config.formatter.enabled = True
    if formatter:
        config.formatter.tool = formatter

    modes = [ViewMode.READ, ViewMode.WRITE] if mode == "both" else [ViewMode(mode)]
    generation_comment = f"Generated by {reconstruct_command_line(openapi_typespec)}"

    try:
        generator = TypespecGenerator(load_document(path), config)
        # Render every module before writing any of them
        outputs = {Path(output_dir) / generator.output_file_name(m): generator.generate(m, generation_comment) for m in modes}
        if len(outputs) != len(modes):
            raise click.ClickException("The read and write modules would be written to the same file")

        writer = AtomicWriter(config.output)
        for output_path, code in outputs.items():
            writer.write(output_path, code)
            click.echo(f"Wrote {output_path}")
    except (TypespecError, FileExistsError) as e:
        raise click.ClickException("\n".join([str(e), *getattr(e, "__notes__", [])])) from e
