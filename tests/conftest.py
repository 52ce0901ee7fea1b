from __future__ import annotations

import textwrap
from pathlib import Path

import pytest
from click.testing import CliRunner

from docs_viewer.app import create_app
from docs_viewer.config import ViewerConfig


@pytest.fixture()
def cli_runner() -> CliRunner:
    """Provides a reusable Click CLI runner."""
    return CliRunner()


def write_markdown(base: Path, relative_path: str, content: str) -> Path:
    path = base / relative_path
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(textwrap.dedent(content).lstrip(), encoding="utf-8")
    return path


@pytest.fixture()
def docs_root(tmp_path: Path) -> Path:
    """Small documentation tree with folders, files, and entries to hide."""
    root = tmp_path / "docs"
    write_markdown(
        root,
        "README.md",
        """
        # Welcome

        Start with the **guides**.

        ## Layout
        - guides
        - reference
        """,
    )
    write_markdown(
        root,
        "guides/setup.md",
        """
        # Setup

        ```bash
        pip install docs-viewer
        ```

        ## Configure
        Edit `pyproject.toml`.
        """,
    )
    write_markdown(root, "guides/advanced/tuning.md", "# Tuning\n")
    write_markdown(root, "reference/api.md", "# API\n")
    write_markdown(root, "notes.txt", "not markdown\n")
    write_markdown(root, ".hidden.md", "# Hidden\n")
    write_markdown(root, "node_modules/pkg/readme.md", "# Vendored\n")
    return root


@pytest.fixture()
def app(docs_root: Path):
    application = create_app(ViewerConfig(docs_root=str(docs_root)))
    application.config["TESTING"] = True
    return application


@pytest.fixture()
def client(app):
    return app.test_client()
