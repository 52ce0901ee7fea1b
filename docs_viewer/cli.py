"""
Command line interface: serve a documentation tree or render a single file.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path

import click

from .config import LOG_LEVELS, ConfigError, ViewerConfig, build_config
from .exceptions import FileAccessError
from .filesystem import get_max_file_size, read_markdown_file
from .headings import extract_headings
from .models import node_to_dict
from .render import render_page

__all__ = ["cli"]

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def configure_logging(level: str) -> None:
    logging.basicConfig(level=level.upper(), format=LOG_FORMAT)


def _load_config(search_path: Path, **overrides: object) -> ViewerConfig:
    try:
        return build_config(search_path, **overrides)
    except ConfigError as error:
        raise click.BadParameter(str(error)) from error


def _read_document(filepath: str, config: ViewerConfig) -> str:
    path = Path(filepath).resolve()
    try:
        max_file_size = get_max_file_size(default=config.max_file_size)
    except ValueError as error:
        raise click.ClickException(str(error)) from error

    try:
        file_content = read_markdown_file(
            path.parent,
            path.name,
            extension=config.markdown_extension,
            max_file_size=max_file_size,
        )
    except FileAccessError as error:
        raise click.ClickException(str(error)) from error
    return file_content.content


@click.group()
@click.version_option(package_name="docs-viewer")
def cli():
    """Browse a directory of Markdown files in the browser."""


@cli.command()
@click.argument("docs_root", required=False, type=click.Path(file_okay=False))
@click.option("--host", help="Interface to bind")
@click.option("--port", type=int, help="Port to listen on")
@click.option("--log-level", type=click.Choice(LOG_LEVELS, case_sensitive=False), help="Logging level")
@click.option("--debug", is_flag=True, help="Enable the Flask debugger and reloader")
def serve(
    docs_root: str | None = None,
    host: str | None = None,
    port: int | None = None,
    log_level: str | None = None,
    debug: bool = False,
):
    """
    Serve DOCS_ROOT (default: the configured `docs_root`) over HTTP.

    Args:
        docs_root: Directory holding the Markdown tree.
        host: Override for the bind interface.
        port: Override for the port.
        log_level: Override for the logging level.
        debug: Run Flask in debug mode.

    Raises:
        click.BadParameter: If the configuration is invalid.

    Examples:
        docs-viewer serve handbook --port 8000
    """
    from .app import create_app

    config = _load_config(
        Path.cwd(),
        docs_root=str(Path(docs_root).resolve()) if docs_root else None,
        host=host,
        port=port,
        log_level=log_level.upper() if log_level else None,
    )
    configure_logging(config.log_level)

    try:
        app = create_app(config)
    except ConfigError as error:
        raise click.ClickException(str(error)) from error
    logging.getLogger(__name__).info("Serving %s on http://%s:%d", config.docs_root, config.host, config.port)
    app.run(host=config.host, port=config.port, debug=debug)


@cli.command()
@click.argument("filepath", type=click.Path(exists=True, dir_okay=False))
@click.option(
    "--format",
    "output_format",
    type=click.Choice(["html", "blocks"]),
    default="html",
    show_default=True,
    help="Emit rendered HTML or the scanned block nodes as JSON",
)
@click.option("--style", help="Pygments style for code blocks")
def render(filepath: str, output_format: str, style: str | None = None):
    """
    Render FILEPATH and print the result.

    Examples:
        docs-viewer render README.md --format blocks
    """
    config = _load_config(Path(filepath).resolve().parent, pygments_style=style)
    page = render_page(_read_document(filepath, config), style=config.pygments_style)

    if output_format == "blocks":
        click.echo(json.dumps([node_to_dict(block) for block in page.blocks], indent=2))
    else:
        click.echo(page.html)


@cli.command()
@click.argument("filepath", type=click.Path(exists=True, dir_okay=False))
def outline(filepath: str):
    """
    Print the "on this page" outline of FILEPATH.

    Examples:
        docs-viewer outline README.md
    """
    config = _load_config(Path(filepath).resolve().parent)
    headings = extract_headings(_read_document(filepath, config))
    if not headings:
        click.echo("No headings")
        return

    for heading in headings:
        indent = "  " * (heading.level - 1)
        click.echo(f"{indent}- [{heading.text}](#{heading.id})")


if __name__ == "__main__":
    cli()
