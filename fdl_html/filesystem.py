"""Filesystem helpers for fdl-html."""

from __future__ import annotations

import logging
import os
import shutil
import stat
import tempfile
from pathlib import Path
from typing import TextIO

from .constants import DEFAULT_MAX_FILE_SIZE, DEFAULT_MAX_LINE_LENGTH, OUTPUT_EXTENSION

MAX_FILE_SIZE_ENV_VAR = "FDL_HTML_MAX_FILE_SIZE"
MAX_LINE_LENGTH_ENV_VAR = "FDL_HTML_MAX_LINE_LENGTH"

logger = logging.getLogger(__name__)


def get_max_file_size(default: int = DEFAULT_MAX_FILE_SIZE) -> int:
    """Resolve the maximum allowed file size.

    Args:
        default: Fallback value in bytes when the environment variable is unset.

    Returns:
        int: Maximum allowed file size in bytes.

    Raises:
        ValueError: If the environment value is not a positive integer.

    Examples:
        os.environ["FDL_HTML_MAX_FILE_SIZE"] = "204800"
        limit = get_max_file_size(default=102400)
    """
    return _positive_env_int(MAX_FILE_SIZE_ENV_VAR, default)


def get_max_line_length(default: int = DEFAULT_MAX_LINE_LENGTH) -> int:
    """Resolve the maximum allowed line length.

    Args:
        default: Fallback value in characters when the environment variable is
            unset.

    Returns:
        int: Maximum allowed line length in characters.

    Raises:
        ValueError: If the environment value is not a positive integer.
    """
    return _positive_env_int(MAX_LINE_LENGTH_ENV_VAR, default)


def _positive_env_int(name: str, default: int) -> int:
    env_value = os.environ.get(name)
    if env_value is None:
        return default

    try:
        value = int(env_value)
    except ValueError as error:
        error_message = f"Invalid value for {name}: {env_value} (expected positive integer)"
        raise ValueError(error_message) from error

    if value <= 0:
        error_message = f"{name} must be a positive integer, got {value}."
        raise ValueError(error_message)

    return value


def output_name_for(source: Path) -> str:
    """Derive the output filename of a source file.

    Everything before the first ``.`` of the basename is kept.

    Examples:
        output_name_for(Path("docs/guide.fdl"))  # "guide.html"
        output_name_for(Path("api.v2.fdl"))  # "api.html"
    """
    return source.name.split(".", 1)[0] + OUTPUT_EXTENSION


def resolve_output_dir(raw_dir: str, base_dir: Path) -> Path:
    """Resolve the output directory below the working directory.

    A leading separator does not make the path absolute: ``/documentation``
    names ``<base_dir>/documentation``.

    Args:
        raw_dir: Directory from configuration or the command line.
        base_dir: Working directory the run is rooted at.

    Returns:
        Path: Absolute output directory.

    Raises:
        ValueError: If the directory is empty or resolves outside `base_dir`.

    Examples:
        resolve_output_dir("/documentation", Path("/srv/project"))
    """
    relative = raw_dir.strip().lstrip("/\\")
    if not relative:
        raise ValueError(f"Invalid output directory: {raw_dir!r}")

    base_dir = base_dir.resolve()
    resolved = (base_dir / relative).resolve()
    if resolved == base_dir:
        raise ValueError(f"Output directory {raw_dir!r} would replace the working directory.")

    try:
        resolved.relative_to(base_dir)
    except ValueError as error:
        error_message = f"{resolved} is outside of the working directory {base_dir}."
        raise ValueError(error_message) from error

    return resolved


def collect_source_files(
    root: Path, extension: str, exclude: Path | None = None
) -> list[Path]:
    """Find source files below `root`.

    Entries of each directory are visited in lexical order, files and
    subdirectories interleaved. Symlinks are neither followed nor collected.

    Args:
        root: Directory to walk.
        extension: Case-sensitive filename suffix to select.
        exclude: Directory whose subtree is skipped, typically the output
            directory.

    Returns:
        list[Path]: Absolute paths in discovery order.

    Raises:
        IOError: If `root` or one of its subdirectories cannot be read.
    """
    root = root.resolve()
    excluded = exclude.resolve() if exclude is not None else None

    def _walk(directory: Path):
        try:
            with os.scandir(directory) as iterator:
                entries = sorted(iterator, key=lambda entry: entry.name)
        except OSError as error:
            raise IOError(f"Error reading directory {directory}: {error}") from error

        for entry in entries:
            path = directory / entry.name
            if entry.is_dir(follow_symlinks=False):
                if path != excluded:
                    yield from _walk(path)
            elif entry.is_file(follow_symlinks=False) and entry.name.endswith(extension):
                yield path

    sources = list(_walk(root))
    logger.debug("Discovered %d source file(s) under %s", len(sources), root)
    return sources


def prepare_output_dir(path: Path) -> None:
    """Create `path` as an empty directory, removing whatever was there.

    Raises:
        IOError: If the existing entry cannot be removed or the directory
            cannot be created.
    """
    try:
        if path.is_symlink() or path.is_file():
            path.unlink()
            logger.info("Removed %s, the directory is created", path)
        elif path.exists():
            shutil.rmtree(path)
            logger.info("The directory %s is cleaned and created again", path)
        else:
            logger.info("The directory %s doesn't exist, it is created", path)
        path.mkdir(parents=True)
    except OSError as error:
        error_message = f"Error preparing output directory {path}: {error}"
        raise IOError(error_message) from error


def collect_file_stat(filepath: Path) -> os.stat_result:
    """Return stat information for a file while disallowing symlinks.

    Args:
        filepath: Path to the file.

    Returns:
        os.stat_result: File metadata gathered without following symlinks.

    Raises:
        IOError: If the path is inaccessible, a symlink, or not a regular file.
    """
    try:
        stat_result = os.stat(filepath, follow_symlinks=False)
    except OSError as error:
        error_message = f"Error accessing {filepath}: {error}"
        raise IOError(error_message) from error

    if stat.S_ISLNK(stat_result.st_mode):
        error_message = f"Symlinks are not supported: {filepath}."
        raise IOError(error_message)

    if not stat.S_ISREG(stat_result.st_mode):
        error_message = f"{filepath} is not a regular file."
        raise IOError(error_message)

    return stat_result


def enforce_file_size(stat_result: os.stat_result, max_size: int, filepath: Path):
    """Guard against files that exceed the configured maximum size.

    Raises:
        IOError: If `stat_result.st_size` exceeds `max_size`.
    """
    if stat_result.st_size > max_size:
        error_message = f"{filepath} exceeds the maximum allowed size of {max_size} bytes."
        raise IOError(error_message)


def safe_read(filepath: Path) -> TextIO:
    """Open a file for reading with consistent error handling.

    Line endings are returned untranslated so the parser decides how lines
    are split. Bytes that are not valid UTF-8 decode to lone surrogates and
    are restored unchanged by `write_output`.

    Args:
        filepath: Path to the file.

    Returns:
        TextIO: File handle opened for reading in UTF-8 with
            ``surrogateescape`` error handling.

    Raises:
        IOError: If the path is missing, inaccessible, or not a file.

    Examples:
        with safe_read(Path("guide.fdl")) as handle:
            content = handle.read()
    """
    try:
        return open(filepath, "r", encoding="UTF-8", errors="surrogateescape", newline="")
    except (
        FileNotFoundError,
        PermissionError,
        IsADirectoryError,
        NotADirectoryError,
    ) as error:
        error_message = f"Error accessing {filepath}: {error}"
        raise IOError(error_message) from error


def write_output(output_dir: Path, filename: str, html: str) -> Path:
    """Write a generated page atomically into `output_dir`.

    The page is written to a temporary file in the same directory, synced,
    and moved into place, so a reader never sees a half-written page.

    Args:
        output_dir: Directory receiving the page; it must exist.
        filename: Name of the page inside `output_dir`.
        html: Page content.

    Returns:
        Path: Path of the written page.

    Raises:
        IOError: If the page cannot be written.

    Examples:
        write_output(Path("documentation"), "guide.html", "<h1>Guide</h1>")
    """
    target = output_dir / filename
    temp_path: Path | None = None
    try:
        with tempfile.NamedTemporaryFile(
            mode="w",
            encoding="UTF-8",
            errors="surrogateescape",
            delete=False,
            dir=output_dir,
            suffix=".tmp",
        ) as tmp_file:
            temp_path = Path(tmp_file.name)
            tmp_file.write(html)
            tmp_file.flush()
            os.fsync(tmp_file.fileno())
        os.chmod(temp_path, 0o644)
        os.replace(temp_path, target)
        temp_path = None
    except OSError as error:
        error_message = f"Can't write output file {target}: {error}"
        raise IOError(error_message) from error
    finally:
        if temp_path is not None:
            temp_path.unlink(missing_ok=True)

    return target
