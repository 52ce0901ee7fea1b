"""Viewer settings: TOML lookup, validation, and command line overrides."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from pathlib import Path
import tomllib

from pygments.styles import get_style_by_name
from pygments.util import ClassNotFound

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass
class ViewerConfig:
    """Configuration for serving a documentation tree.

    Attributes:
        docs_root: Directory holding the Markdown tree. Relative paths are
            resolved against the directory the configuration was loaded from.
        markdown_extension: Extension of files that are listed and served.
        excluded_names: Entry names that are never listed.
        host: Interface the development server binds to.
        port: Port the development server listens on.
        max_file_size: Maximum file size in bytes that will be rendered.
        pygments_style: Pygments style used for code blocks in light mode.
        dark_pygments_style: Pygments style used for code blocks in dark mode.
        log_level: Name of the logging level for the ``docs_viewer`` logger.

    Examples:
        ViewerConfig(docs_root="handbook", port=8000)
    """

    # Content
    docs_root: str = "docs"
    markdown_extension: str = ".md"
    excluded_names: tuple[str, ...] = field(default=("node_modules",))

    # Server
    host: str = "127.0.0.1"
    port: int = 5000

    # Rendering
    pygments_style: str = "default"
    dark_pygments_style: str = "monokai"

    # Limits
    max_file_size: int = 10 * 1024 * 1024

    log_level: str = "INFO"


class ConfigError(ValueError):
    """Raised when viewer settings cannot be loaded or are out of range.

    Examples:
        raise ConfigError("`port` must be between 1 and 65535")
    """


def load_config(search_path: Path) -> ViewerConfig:
    """Load viewer settings from the closest project or dotfile table.

    Walks parent directories from `search_path` to the filesystem root, reading
    the ``[tool.docs-viewer]`` table from `pyproject.toml` and the
    ``[docs-viewer]`` or ``[tool.docs-viewer]`` table from `.docs-viewer.toml`
    when present. A relative `docs_root` is anchored at the directory holding
    the file it came from. Returns default values when no configuration is
    found; TOML files that cannot be read or decoded are skipped.

    Args:
        search_path: Directory used as the starting point for configuration lookup.

    Returns:
        ViewerConfig: Loaded configuration with defaults applied when necessary.

    Raises:
        ConfigError: If a table is present but is not a mapping or contains
            unsupported keys.

    Examples:
        load_config(Path("handbook"))
    """
    current = search_path.resolve()

    while True:
        pyproject_config = _load_from_file(
            current / "pyproject.toml", table_paths=[("tool", "docs-viewer")]
        )
        if pyproject_config is not None:
            return _anchor_docs_root(pyproject_config, current)

        dotfile_config = _load_from_file(
            current / ".docs-viewer.toml",
            table_paths=[("docs-viewer",), ("tool", "docs-viewer")],
        )
        if dotfile_config is not None:
            return _anchor_docs_root(dotfile_config, current)

        parent = current.parent
        if parent == current:
            break
        current = parent

    return _anchor_docs_root(ViewerConfig(), search_path.resolve())


_MISSING = object()


def _load_from_file(config_file: Path, table_paths: list[tuple[str, ...]]) -> ViewerConfig | None:
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
) -> ViewerConfig:
    table_display = ".".join(table_path)

    if raw_config is None:
        return ViewerConfig()

    if not isinstance(raw_config, dict):
        raise ConfigError(f"Invalid `[{table_display}]` settings in {config_file}")

    if not raw_config:
        return ViewerConfig()

    values = dict(raw_config)
    if isinstance(values.get("excluded_names"), list):
        values["excluded_names"] = tuple(values["excluded_names"])

    try:
        return ViewerConfig(**values)
    except TypeError as error:
        raise ConfigError(f"Invalid `[{table_display}]` settings in {config_file}") from error


def _anchor_docs_root(config: ViewerConfig, base_dir: Path) -> ViewerConfig:
    if not isinstance(config.docs_root, str) or Path(config.docs_root).is_absolute():
        return config
    return replace(config, docs_root=str(base_dir / config.docs_root))


def validate_config(config: ViewerConfig) -> None:
    """Validate a `ViewerConfig` instance.

    Args:
        config: Configuration to validate.

    Returns:
        None.

    Raises:
        ConfigError: If paths or names are empty, the extension does not start
            with a dot, the port is out of range, the size limit is not a
            positive integer, a Pygments style is unknown, or the log level is
            unknown.

    Examples:
        validate_config(ViewerConfig(port=8080))
    """
    _ensure_integers({"port": config.port, "max_file_size": config.max_file_size})

    for key in ("docs_root", "host", "pygments_style", "dark_pygments_style"):
        value = getattr(config, key)
        if not isinstance(value, str) or not value:
            raise ConfigError(f"`{key}` must not be empty")

    if not isinstance(config.markdown_extension, str) or not config.markdown_extension.startswith("."):
        raise ConfigError("`markdown_extension` must start with a dot")
    if not isinstance(config.excluded_names, (list, tuple)) or not all(
        isinstance(name, str) and name for name in config.excluded_names
    ):
        raise ConfigError("`excluded_names` must be a list of non-empty strings")

    for key in ("pygments_style", "dark_pygments_style"):
        _ensure_pygments_style(key, getattr(config, key))

    if not 1 <= config.port <= 65535:
        raise ConfigError("`port` must be between 1 and 65535")
    _ensure_positive({"max_file_size": config.max_file_size})

    if not isinstance(config.log_level, str) or config.log_level.upper() not in LOG_LEVELS:
        raise ConfigError(f"`log_level` must be one of: {', '.join(LOG_LEVELS)}")


def apply_overrides(config: ViewerConfig, **overrides: object) -> ViewerConfig:
    """Apply override values to a `ViewerConfig`.

    Args:
        config: Base configuration to update.
        overrides: Override values keyed by configuration field name; values set to
            None are ignored.

    Returns:
        ViewerConfig: New configuration with the provided overrides applied. The
        given configuration is returned unchanged when no changes are supplied.

    Raises:
        TypeError: If an override name is not defined on `ViewerConfig`.

    Examples:
        updated = apply_overrides(config, port=8080, host=None)
    """
    changes = {key: value for key, value in overrides.items() if value is not None}
    if not changes:
        return config
    return replace(config, **changes)


def build_config(search_path: Path, **overrides: object) -> ViewerConfig:
    """Resolve the settings a command runs with.

    Args:
        search_path: Directory where configuration files are resolved.
        overrides: Override values keyed by configuration attributes; None values
            are ignored.

    Returns:
        ViewerConfig: Validated configuration ready for serving.

    Raises:
        ConfigError: If a settings table is malformed or a value is invalid.

    Examples:
        config = build_config(Path.cwd(), docs_root="handbook", port=8000)
    """
    config = load_config(search_path)
    config = apply_overrides(config, **overrides)
    validate_config(config)
    return config


def _ensure_positive(values: dict[str, int]) -> None:
    for key, value in values.items():
        if value <= 0:
            raise ConfigError(f"`{key}` must be a positive integer")


def _ensure_pygments_style(key: str, name: str) -> None:
    try:
        get_style_by_name(name)
    except ClassNotFound as error:
        raise ConfigError(f"`{key}` is not a known Pygments style: {name}") from error


def _ensure_integers(values: dict[str, object]) -> None:
    for key, value in values.items():
        if isinstance(value, bool) or not isinstance(value, int):
            raise ConfigError(f"`{key}` must be an integer")
