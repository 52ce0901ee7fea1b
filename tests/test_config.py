from __future__ import annotations

import textwrap
from pathlib import Path

import pytest

from docs_viewer.config import (
    ConfigError,
    ViewerConfig,
    apply_overrides,
    build_config,
    load_config,
    validate_config,
)


def _write_pyproject(base: Path, body: str) -> Path:
    path = base / "pyproject.toml"
    path.write_text(textwrap.dedent(body).lstrip(), encoding="utf-8")
    return path


def _write_dotfile(base: Path, body: str) -> Path:
    path = base / ".docs-viewer.toml"
    path.write_text(textwrap.dedent(body).lstrip(), encoding="utf-8")
    return path


def test_loads_config_from_pyproject(tmp_path: Path):
    _write_pyproject(
        tmp_path,
        """
        [tool.docs-viewer]
        docs_root = "handbook"
        markdown_extension = ".markdown"
        excluded_names = ["node_modules", "drafts"]
        host = "0.0.0.0"
        port = 8000
        pygments_style = "friendly"
        dark_pygments_style = "dracula"
        max_file_size = 2048
        log_level = "DEBUG"
        """,
    )

    config = load_config(tmp_path)

    assert config == ViewerConfig(
        docs_root=str(tmp_path.resolve() / "handbook"),
        markdown_extension=".markdown",
        excluded_names=("node_modules", "drafts"),
        host="0.0.0.0",
        port=8000,
        pygments_style="friendly",
        dark_pygments_style="dracula",
        max_file_size=2048,
        log_level="DEBUG",
    )


def test_loads_config_from_dotfile(tmp_path: Path):
    _write_dotfile(
        tmp_path,
        """
        [docs-viewer]
        port = 9000
        """,
    )
    nested = tmp_path / "child"
    nested.mkdir()

    config = load_config(nested)

    assert config.port == 9000
    assert config.docs_root == str(tmp_path.resolve() / "docs")


def test_dotfile_accepts_tool_table(tmp_path: Path):
    _write_dotfile(
        tmp_path,
        """
        [tool.docs-viewer]
        host = "localhost"
        """,
    )

    assert load_config(tmp_path).host == "localhost"


def test_load_config_walks_up_directories(tmp_path: Path):
    _write_pyproject(
        tmp_path,
        """
        [tool.docs-viewer]
        docs_root = "site/docs"
        """,
    )
    nested = tmp_path / "a" / "b" / "c"
    nested.mkdir(parents=True)

    config = load_config(nested)

    assert config.docs_root == str(tmp_path.resolve() / "site" / "docs")


def test_pyproject_without_table_keeps_searching(tmp_path: Path):
    _write_dotfile(
        tmp_path,
        """
        [docs-viewer]
        port = 7000
        """,
    )
    nested = tmp_path / "project"
    nested.mkdir()
    _write_pyproject(
        nested,
        """
        [tool.other]
        value = 1
        """,
    )

    assert load_config(nested).port == 7000


def test_empty_config_table_stops_inheritance(tmp_path: Path):
    _write_pyproject(
        tmp_path,
        """
        [tool.docs-viewer]
        port = 7000
        """,
    )
    nested = tmp_path / "inner"
    nested.mkdir()
    _write_dotfile(nested, "[docs-viewer]\n")

    config = load_config(nested)

    assert config.port == ViewerConfig().port
    assert config.docs_root == str(nested.resolve() / "docs")


def test_absolute_docs_root_is_kept(tmp_path: Path):
    target = tmp_path / "elsewhere"
    _write_pyproject(
        tmp_path,
        f"""
        [tool.docs-viewer]
        docs_root = "{target.as_posix()}"
        """,
    )

    assert load_config(tmp_path).docs_root == target.as_posix()


def test_invalid_toml_is_skipped(tmp_path: Path):
    (tmp_path / "pyproject.toml").write_text("[tool.docs-viewer\nport = ", encoding="utf-8")

    config = load_config(tmp_path)

    assert config.port == ViewerConfig().port


def test_unknown_key_raises_config_error(tmp_path: Path):
    _write_pyproject(
        tmp_path,
        """
        [tool.docs-viewer]
        colour = "blue"
        """,
    )

    with pytest.raises(ConfigError, match=r"Invalid `\[tool.docs-viewer\]` settings"):
        load_config(tmp_path)


def test_non_table_value_raises_config_error(tmp_path: Path):
    _write_dotfile(tmp_path, 'docs-viewer = "yes"\n')

    with pytest.raises(ConfigError):
        load_config(tmp_path)


def test_defaults_when_no_config(tmp_path: Path):
    config = load_config(tmp_path)

    assert config.host == "127.0.0.1"
    assert config.port == 5000
    assert config.markdown_extension == ".md"
    assert config.excluded_names == ("node_modules",)


def test_validate_config_accepts_defaults():
    validate_config(ViewerConfig())


@pytest.mark.parametrize(
    ("changes", "message"),
    [
        ({"port": 0}, "`port` must be between 1 and 65535"),
        ({"port": 70000}, "`port` must be between 1 and 65535"),
        ({"port": "80"}, "`port` must be an integer"),
        ({"port": True}, "`port` must be an integer"),
        ({"max_file_size": 0}, "`max_file_size` must be a positive integer"),
        ({"docs_root": ""}, "`docs_root` must not be empty"),
        ({"host": ""}, "`host` must not be empty"),
        ({"markdown_extension": "md"}, "`markdown_extension` must start with a dot"),
        ({"excluded_names": ("",)}, "`excluded_names` must be a list of non-empty strings"),
        ({"log_level": "LOUD"}, "`log_level` must be one of"),
    ],
)
def test_validate_config_rejects_invalid_values(changes, message):
    with pytest.raises(ConfigError, match=message):
        validate_config(ViewerConfig(**changes))


def test_validate_config_accepts_lowercase_log_level():
    validate_config(ViewerConfig(log_level="debug"))


def test_apply_overrides_ignores_none():
    config = ViewerConfig()

    assert apply_overrides(config, port=None, host=None) is config


def test_apply_overrides_replaces_values():
    config = apply_overrides(ViewerConfig(), port=8080, docs_root="/srv/docs")

    assert config.port == 8080
    assert config.docs_root == "/srv/docs"


def test_apply_overrides_rejects_unknown_names():
    with pytest.raises(TypeError):
        apply_overrides(ViewerConfig(), colour="blue")


def test_build_config_applies_overrides_and_validates(tmp_path: Path):
    _write_pyproject(
        tmp_path,
        """
        [tool.docs-viewer]
        port = 8000
        """,
    )

    assert build_config(tmp_path, port=9001).port == 9001

    with pytest.raises(ConfigError):
        build_config(tmp_path, port=-1)


@pytest.mark.parametrize("key", ["pygments_style", "dark_pygments_style"])
def test_validate_config_rejects_unknown_pygments_style(key):
    with pytest.raises(ConfigError, match=f"`{key}` is not a known Pygments style: nope"):
        validate_config(ViewerConfig(**{key: "nope"}))


def test_validate_config_accepts_known_pygments_styles():
    validate_config(ViewerConfig(pygments_style="friendly", dark_pygments_style="native"))


@pytest.mark.parametrize("value", ["node_modules", None, 3])
def test_validate_config_requires_excluded_names_sequence(value):
    with pytest.raises(ConfigError, match="`excluded_names` must be a list of non-empty strings"):
        validate_config(ViewerConfig(excluded_names=value))


def test_string_excluded_names_in_toml_is_rejected(tmp_path: Path):
    _write_pyproject(
        tmp_path,
        """
        [tool.docs-viewer]
        excluded_names = "node_modules"
        """,
    )

    with pytest.raises(ConfigError, match="`excluded_names`"):
        build_config(tmp_path)
