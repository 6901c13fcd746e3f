"""
CLI utilities: logging setup and command line reconstruction.
"""

import logging
import os
from pathlib import Path

import click

DEBUG_ENV_VAR = "OPENAPI_TYPESPEC_DEBUG"


def configure_logging(debug: bool = False) -> None:
    """Configure the root logger.

    Args:
        debug: Whether to enable debug logging. Also enabled when
            OPENAPI_TYPESPEC_DEBUG is set to 1, true or yes.
    """
    if not debug:
        debug = os.environ.get(DEBUG_ENV_VAR, "").lower() in ("1", "true", "yes")

    log_level = logging.DEBUG if debug else logging.WARNING

    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)

    # Remove any existing handlers to avoid duplicate messages
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    handler = logging.StreamHandler()
    handler.setLevel(log_level)
    handler.setFormatter(logging.Formatter("%(levelname)s:%(name)s:%(message)s"))
    root_logger.addHandler(handler)


def reconstruct_command_line(click_command: click.Command) -> str:
    """
    Reconstruct the command line of the running Click command.

    Paths are shortened to their file names and options left at their
    default are omitted, so the result is stable across machines.

    Args:
        click_command: Click command object for introspection

    Returns:
        Reconstructed command line string
    """
    name = click_command.name or "openapi_typespec"
    try:
        params = click.get_current_context().params
    except RuntimeError:
        # No active context
        return name

    arguments = []
    options = []
    for param in click_command.params:
        value = params.get(param.name)
        if value is None or value is False or value == ():
            continue

        if isinstance(param, click.Argument):
            arguments.append(_format_value(value))
        elif isinstance(param, click.Option) and value != param.default:
            flag = param.opts[0]
            if param.is_flag:
                options.append(flag)
            else:
                options.extend([flag, _format_value(value)])

    return " ".join([name, *arguments, *options])


def _format_value(value) -> str:
    if isinstance(value, (str, Path)) and os.sep in str(value):
        return Path(str(value)).name
    return str(value)
