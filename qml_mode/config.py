"""Configuration loading and management."""

from __future__ import annotations

from dataclasses import dataclass, replace
from pathlib import Path
import tomllib


@dataclass
class ModeConfig:
    """Configuration for the QML editing mode.

    Attributes:
        tab_width: Number of columns in one indentation level. Tabs in leading
            whitespace also advance to the next multiple of this width.
        indent_tabs_mode: Whether applied indentation uses tabs (padded with
            spaces) instead of spaces only.
        file_extensions: Filename suffixes that activate the mode.
        comment_start: String inserted to start a line comment.
        comment_end: String inserted to end a line comment.
        max_file_size: Maximum file size in bytes that will be processed.

    Examples:
        ModeConfig(tab_width=4, indent_tabs_mode=True)
    """

    # Indentation
    tab_width: int = 2
    indent_tabs_mode: bool = False

    # File association
    file_extensions: tuple[str, ...] = (".qml",)

    # Comments
    comment_start: str = "// "
    comment_end: str = ""

    # Limits
    max_file_size: int = 10 * 1024 * 1024


class ConfigError(ValueError):
    """Exception raised when configuration values are invalid.

    Examples:
        raise ConfigError("`tab_width` must be a positive integer")
    """


def load_config(search_path: Path) -> ModeConfig:
    """Load configuration from the nearest config file.

    Walks parent directories from `search_path` to the filesystem root, reading
    the ``[tool.qml-mode]`` table from `pyproject.toml` and the ``[qml-mode]``
    or ``[tool.qml-mode]`` table from `.qml-mode.toml` when present. Returns
    default values when no configuration is found. TOML files that cannot be
    read or decoded are skipped.

    Args:
        search_path: Directory used as the starting point for configuration lookup.

    Returns:
        ModeConfig: Loaded configuration with defaults applied when necessary.

    Raises:
        ConfigError: If the table is present but not a mapping or contains
            unsupported keys.

    Examples:
        load_config(Path("ui"))
    """
    current = search_path.resolve()

    while True:
        pyproject_config = _load_from_file(
            current / "pyproject.toml", table_paths=[("tool", "qml-mode")]
        )
        if pyproject_config is not None:
            return normalize_config(pyproject_config)

        dotfile_config = _load_from_file(
            current / ".qml-mode.toml",
            table_paths=[("qml-mode",), ("tool", "qml-mode")],
        )
        if dotfile_config is not None:
            return normalize_config(dotfile_config)

        parent = current.parent
        if parent == current:
            break
        current = parent

    return ModeConfig()


_MISSING = object()


def _load_from_file(config_file: Path, table_paths: list[tuple[str, ...]]) -> ModeConfig | None:
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
) -> ModeConfig:
    table_display = ".".join(table_path)

    if raw_config is None:
        return ModeConfig()

    if not isinstance(raw_config, dict):
        raise ConfigError(f"Invalid `[{table_display}]` settings in {config_file}")

    if not raw_config:
        return ModeConfig()

    try:
        return ModeConfig(**raw_config)
    except TypeError as error:
        raise ConfigError(f"Invalid `[{table_display}]` settings in {config_file}") from error


def normalize_config(config: ModeConfig) -> ModeConfig:
    """Canonicalize file extensions into a lowercase, dotted tuple."""
    extensions = config.file_extensions
    if isinstance(extensions, str):
        extensions = (extensions,)
    if isinstance(extensions, (list, tuple)):
        normalized = []
        for extension in extensions:
            if not isinstance(extension, str):
                raise ConfigError("`file_extensions` must contain only strings")
            extension = extension.strip().lower()
            if extension and not extension.startswith("."):
                extension = f".{extension}"
            normalized.append(extension)
        extensions = tuple(normalized)

    return replace(config, file_extensions=extensions)


def validate_config(config: ModeConfig) -> None:
    """Validate a `ModeConfig` instance.

    Args:
        config: Configuration to validate.

    Returns:
        None.

    Raises:
        ConfigError: If the tab width or size limit is not a positive integer,
            the extension list is empty, or a flag is not a boolean.

    Examples:
        validate_config(ModeConfig(tab_width=4))
    """
    config = normalize_config(config)

    _ensure_integers({"tab_width": config.tab_width, "max_file_size": config.max_file_size})
    _ensure_positive({"tab_width": config.tab_width, "max_file_size": config.max_file_size})

    if not isinstance(config.indent_tabs_mode, bool):
        raise ConfigError("`indent_tabs_mode` must be a boolean")

    if not isinstance(config.file_extensions, tuple) or not config.file_extensions:
        raise ConfigError("`file_extensions` must list at least one extension")
    if any(extension in ("", ".") for extension in config.file_extensions):
        raise ConfigError("`file_extensions` must not contain empty extensions")

    if not isinstance(config.comment_start, str) or not config.comment_start.strip():
        raise ConfigError("`comment_start` must not be empty")
    if not isinstance(config.comment_end, str):
        raise ConfigError("`comment_end` must be a string")


def apply_overrides(config: ModeConfig, **overrides: object) -> ModeConfig:
    """Apply override values to a `ModeConfig`.

    Args:
        config: Base configuration to update.
        overrides: Override values keyed by configuration field name; values set to
            None are ignored.

    Returns:
        ModeConfig: New configuration with the provided overrides applied. The
        original configuration is returned when no changes are supplied.

    Raises:
        TypeError: If an override name is not defined on `ModeConfig`.

    Examples:
        updated = apply_overrides(config, tab_width=4, indent_tabs_mode=None)
    """
    changes = {key: value for key, value in overrides.items() if value is not None}
    if not changes:
        return config
    return replace(config, **changes)


def build_config(search_path: Path, **overrides: object) -> ModeConfig:
    """Load, override, and validate configuration.

    Args:
        search_path: Directory where configuration files are resolved.
        overrides: Override values keyed by configuration attributes; None values
            are ignored.

    Returns:
        ModeConfig: Validated configuration ready for use.

    Raises:
        ConfigError: If configuration loading or validation fails.

    Examples:
        config = build_config(Path.cwd(), tab_width=4)
    """
    config = load_config(search_path)
    config = apply_overrides(config, **overrides)
    config = normalize_config(config)
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
