"""Conversion of a whole source tree into linked HTML pages."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from pathlib import Path

from .config import ConfigError, FdlConfig, validate_config
from .constants import INDEX_FILENAME
from .exceptions import BuildError, ParseFileError
from .filesystem import (
    collect_file_stat,
    collect_source_files,
    enforce_file_size,
    output_name_for,
    prepare_output_dir,
    resolve_output_dir,
    write_output,
)
from .generator import generate_index, render_document
from .models import BuildResult
from .parser import LineTransformer, parse_file

logger = logging.getLogger(__name__)


def build_documentation(
    root: Path,
    config: FdlConfig | None = None,
    transformers: Sequence[LineTransformer] = (),
    max_file_size: int | None = None,
    max_line_length: int | None = None,
) -> BuildResult:
    """Convert every source file below `root` and write the index.

    The output directory is emptied first. Files are processed one at a time
    in discovery order; the first failure aborts the run.

    Args:
        root: Working directory to search and to place the output under.
        config: Build configuration; defaults to a new `FdlConfig`.
        transformers: Fragment transformers applied after the core parser.
        max_file_size: Optional override for `config.max_file_size`.
        max_line_length: Optional override for `config.max_line_length`.

    Returns:
        BuildResult: Output directory, written pages and their sources.

    Raises:
        BuildError: If the configuration is invalid, the output directory
            cannot be prepared, a source cannot be read or parsed, or a
            page cannot be written.

    Examples:
        result = build_documentation(Path.cwd())
        print(result.pages)
    """
    config = config or FdlConfig()
    try:
        validate_config(config)
    except ConfigError as error:
        raise BuildError(str(error)) from error
    size_limit = config.max_file_size if max_file_size is None else max_file_size

    root = root.resolve()
    try:
        output_dir = resolve_output_dir(config.output_dir, root)
    except ValueError as error:
        raise BuildError(str(error)) from error

    try:
        prepare_output_dir(output_dir)
        sources = collect_source_files(root, config.file_extension, exclude=output_dir)
    except IOError as error:
        raise BuildError(str(error)) from error

    result = BuildResult(output_dir=output_dir)
    for source in sources:
        page = output_name_for(source)
        try:
            enforce_file_size(collect_file_stat(source), size_limit, source)
            parsed = parse_file(source, max_line_length, config, transformers)
        except (IOError, ParseFileError) as error:
            raise BuildError(str(error), source=source) from error

        open_blocks = parsed.state.open_blocks()
        if open_blocks:
            logger.warning("%s ended with unclosed blocks: %s", source, ", ".join(open_blocks))

        try:
            write_output(output_dir, page, render_document(parsed))
        except IOError as error:
            raise BuildError(str(error), source=source) from error

        logger.info("Converted %s -> %s", source, output_dir / page)
        result.pages.append(page)
        result.sources.append(source)

    try:
        write_output(output_dir, INDEX_FILENAME, generate_index(result.pages))
    except IOError as error:
        raise BuildError(str(error)) from error
    logger.info("Wrote %s with %d entries", output_dir / INDEX_FILENAME, len(result.pages))

    return result
