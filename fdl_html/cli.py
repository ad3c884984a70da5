"""
Converts every FDL file below the working directory into an HTML page and
writes an index linking all of them.
"""

from __future__ import annotations

import logging
from pathlib import Path

import click

from .builder import build_documentation
from .config import ConfigError, build_config
from .constants import DEFAULT_FILE_EXTENSION, DEFAULT_OUTPUT_DIR
from .exceptions import BuildError
from .filesystem import get_max_file_size, get_max_line_length, resolve_output_dir

__all__ = ["cli"]

logger = logging.getLogger(__name__)


@click.command(
    context_settings={"ignore_unknown_options": True, "allow_extra_args": True},
)
@click.version_option(package_name="fdl-html")
@click.option(
    "--file-extension",
    "-fe",
    "file_extension",
    help=f"Suffix of the source files to convert  [default: {DEFAULT_FILE_EXTENSION}]",
)
@click.option(
    "--directory",
    "-dir",
    "directory",
    help=f"Output directory below the working directory  [default: /{DEFAULT_OUTPUT_DIR}]",
)
@click.option("--verbose", "-v", is_flag=True, help="Log progress to stderr.")
@click.pass_context
def cli(
    ctx: click.Context,
    file_extension: str | None = None,
    directory: str | None = None,
    verbose: bool = False,
):
    """
    Entry point for converting FDL sources into linked HTML pages.

    Args:
        ctx: Click context; holds any unrecognized arguments, which are ignored.
        file_extension: Override for the source file suffix.
        directory: Override for the output directory.
        verbose: Enable INFO level logging.

    Returns:
        None.

    Raises:
        click.BadParameter: If the configuration or the output directory is
            invalid.
        click.ClickException: If a limit override is invalid or the run fails
            on a filesystem or read error.

    Examples:
        fdl-html --file-extension=.fdl --directory=/documentation
    """
    if verbose:
        logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")
    if ctx.args:
        logger.debug("Ignoring unrecognized arguments: %s", " ".join(ctx.args))

    base_dir = Path.cwd().resolve()
    try:
        config = build_config(base_dir, file_extension=file_extension, output_dir=directory)
    except ConfigError as error:
        raise click.BadParameter(str(error)) from error

    try:
        resolve_output_dir(config.output_dir, base_dir)
    except ValueError as error:
        raise click.BadParameter(str(error), param_hint="'--directory'") from error

    try:
        max_file_size = get_max_file_size(default=config.max_file_size)
        max_line_length = get_max_line_length(default=config.max_line_length)
    except ValueError as error:
        raise click.ClickException(str(error)) from error

    try:
        result = build_documentation(
            base_dir,
            config,
            max_file_size=max_file_size,
            max_line_length=max_line_length,
        )
    except BuildError as error:
        raise click.ClickException(str(error)) from error

    click.echo(f"Wrote {len(result.pages)} file(s) to {result.output_dir}")


if __name__ == "__main__":
    cli()
