"""Configuration loading and management."""

from __future__ import annotations

from dataclasses import dataclass, replace
from pathlib import Path
import tomllib


@dataclass
class FdlConfig:
    """Configuration for converting FDL sources into HTML pages.

    Attributes:
        file_extension: Case-sensitive suffix selecting the source files.
        output_dir: Output directory, relative to the working directory.
        max_file_size: Maximum file size in bytes that will be processed.
        max_line_length: Maximum line length allowed while reading a source.

    Examples:
        FdlConfig(file_extension=".doc.fdl", output_dir="site")
    """

    # Discovery and output
    file_extension: str = ".fdl"
    output_dir: str = "documentation"

    # Limits
    max_file_size: int = 10 * 1024 * 1024
    max_line_length: int = 64 * 1024


class ConfigError(ValueError):
    """Exception raised when configuration values are invalid.

    Attributes:
        args: Arguments provided to the underlying `ValueError`.

    Examples:
        raise ConfigError("`file_extension` must not be empty")
    """


def load_config(search_path: Path) -> FdlConfig:
    """Load configuration from the nearest config file.

    Walks parent directories from `search_path` to the filesystem root, reading
    the ``[tool.fdl-html]`` table from `pyproject.toml` and the ``[fdl-html]``
    or ``[tool.fdl-html]`` table from `.fdl-html.toml` when present. Returns
    default values when no configuration is found. TOML files that cannot be
    read or decoded are skipped.

    Args:
        search_path: Directory used as the starting point for configuration lookup.

    Returns:
        FdlConfig: Loaded configuration with defaults applied when necessary.

    Raises:
        ConfigError: If the table is present but is not a mapping or contains
            unsupported keys.

    Examples:
        load_config(Path("docs"))
    """
    current = search_path.resolve()

    while True:
        pyproject_config = _load_from_file(
            current / "pyproject.toml", table_paths=[("tool", "fdl-html")]
        )
        if pyproject_config is not None:
            return pyproject_config

        dotfile_config = _load_from_file(
            current / ".fdl-html.toml",
            table_paths=[("fdl-html",), ("tool", "fdl-html")],
        )
        if dotfile_config is not None:
            return dotfile_config

        parent = current.parent
        if parent == current:
            break
        current = parent

    return FdlConfig()


_MISSING = object()


def _load_from_file(config_file: Path, table_paths: list[tuple[str, ...]]) -> FdlConfig | None:
    if not config_file.exists():
        return None

    try:
        with open(config_file, "rb") as stream:
            data = tomllib.load(stream)
    except (OSError, tomllib.TOMLDecodeError):
        return None

    for table_path in table_paths:
        raw_config = _extract_table(data, table_path)
        if raw_config is _MISSING:
            continue
        return _build_config_from_raw(raw_config, config_file, table_path)

    return None


def _extract_table(data: object, table_path: tuple[str, ...]) -> object:
    current = data
    for key in table_path:
        if not isinstance(current, dict) or key not in current:
            return _MISSING
        current = current[key]
    return current


def _build_config_from_raw(
    raw_config: object, config_file: Path, table_path: tuple[str, ...]
) -> FdlConfig:
    table_display = ".".join(table_path)

    if not isinstance(raw_config, dict):
        raise ConfigError(f"Invalid `[{table_display}]` settings in {config_file}")

    # TOML keys may be written with dashes, like the CLI options.
    normalized = {key.replace("-", "_"): value for key, value in raw_config.items()}

    try:
        return FdlConfig(**normalized)
    except TypeError as error:
        raise ConfigError(f"Invalid `[{table_display}]` settings in {config_file}") from error


def validate_config(config: FdlConfig) -> None:
    """Validate an `FdlConfig` instance.

    Args:
        config: Configuration to validate.

    Returns:
        None.

    Raises:
        ConfigError: If text fields are empty or not strings, or numeric
            limits are not positive integers.

    Examples:
        validate_config(FdlConfig(file_extension=".fdl"))
    """
    for key in ("file_extension", "output_dir"):
        value = getattr(config, key)
        if not isinstance(value, str):
            raise ConfigError(f"`{key}` must be a string")
        if not value.strip():
            raise ConfigError(f"`{key}` must not be empty")

    if not config.output_dir.strip("/\\"):
        raise ConfigError("`output_dir` must name a directory below the working directory")

    limits = {
        "max_file_size": config.max_file_size,
        "max_line_length": config.max_line_length,
    }
    _ensure_integers(limits)
    _ensure_positive(limits)


def apply_overrides(config: FdlConfig, **overrides: object) -> FdlConfig:
    """Apply override values to an `FdlConfig`.

    Args:
        config: Base configuration to update.
        overrides: Override values keyed by configuration field name; values set to
            None are ignored.

    Returns:
        FdlConfig: New configuration with the provided overrides applied. The
        original configuration is returned when no changes are supplied.

    Raises:
        TypeError: If an override name is not defined on `FdlConfig`.

    Examples:
        updated = apply_overrides(config, output_dir="site")
    """
    changes = {key: value for key, value in overrides.items() if value is not None}
    if not changes:
        return config
    return replace(config, **changes)


def build_config(search_path: Path, **overrides: object) -> FdlConfig:
    """Load, override, and validate configuration.

    Args:
        search_path: Directory where configuration files are resolved.
        overrides: Override values keyed by configuration attributes; None values
            are ignored.

    Returns:
        FdlConfig: Validated configuration ready for a build.

    Raises:
        ConfigError: If configuration loading or validation fails.

    Examples:
        config = build_config(Path.cwd(), file_extension=".fdl")
    """
    config = load_config(search_path)
    config = apply_overrides(config, **overrides)
    validate_config(config)
    return config


def _ensure_positive(values: dict[str, int]) -> None:
    for key, value in values.items():
        if value <= 0:
            raise ConfigError(f"`{key}` must be a positive integer")


def _ensure_integers(values: dict[str, object]) -> None:
    for key, value in values.items():
        if isinstance(value, bool) or not isinstance(value, int):
            raise ConfigError(f"`{key}` must be an integer")
