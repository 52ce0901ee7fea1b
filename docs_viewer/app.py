"""Flask application serving the documentation tree."""

from __future__ import annotations

import logging
from pathlib import Path

from flask import Flask, abort, jsonify, redirect, render_template, request, url_for

from .config import ConfigError, ViewerConfig, validate_config
from .exceptions import EntryNotFoundError, FileAccessError
from .filesystem import (
    format_relative_time,
    get_max_file_size,
    list_directory,
    normalize_relative_path,
    read_markdown_file,
    resolve_under_root,
)
from .headings import extract_headings
from .navigation import build_breadcrumbs, parent_of
from .outline import OutlineNavigator
from .preferences import CookiePreferenceStore, ViewState
from .render import ScrollRecorder, render_page

logger = logging.getLogger(__name__)


def create_app(config: ViewerConfig | None = None) -> Flask:
    """Create the viewer application.

    Args:
        config: Viewer configuration; defaults to a new `ViewerConfig`.

    Returns:
        Flask: Configured application.

    Raises:
        ConfigError: If the configuration fails validation or
            `DOCS_VIEWER_MAX_FILE_SIZE` is not a positive integer.

    Examples:
        app = create_app(ViewerConfig(docs_root="handbook"))
    """
    config = config or ViewerConfig()
    validate_config(config)
    try:
        max_file_size = get_max_file_size(default=config.max_file_size)
    except ValueError as error:
        raise ConfigError(str(error)) from error

    app = Flask(__name__)
    app.config["VIEWER"] = config

    docs_root = Path(config.docs_root)
    if not docs_root.exists():
        logger.info("Creating missing docs root %s", docs_root)
        docs_root.mkdir(parents=True, exist_ok=True)

    def listing(relative_path: str = ""):
        return list_directory(
            docs_root,
            relative_path,
            extension=config.markdown_extension,
            excluded_names=config.excluded_names,
        )

    def read(relative_path: str):
        return read_markdown_file(
            docs_root,
            relative_path,
            extension=config.markdown_extension,
            max_file_size=max_file_size,
        )

    def view_state() -> ViewState:
        return ViewState.load(CookiePreferenceStore(request.cookies), request.args)

    @app.context_processor
    def inject_helpers():
        def browse_url(path: str = "", **params) -> str:
            if not path:
                return url_for("index", **params)
            return url_for("browse", subpath=path, **params)

        return {"browse_url": browse_url}

    @app.errorhandler(FileAccessError)
    def handle_file_access_error(error: FileAccessError):
        logger.warning("%s %s: %s", request.method, request.path, error)
        if request.path.startswith("/api/"):
            return jsonify({"error": str(error)}), error.status_code
        return (
            render_template(
                "error.html",
                message=str(error),
                status_code=error.status_code,
                state=view_state(),
                tree=listing(),
                breadcrumbs=build_breadcrumbs(""),
            ),
            error.status_code,
        )

    @app.get("/api/files")
    def api_files():
        return jsonify(listing(request.args.get("path", "")).to_dict())

    @app.get("/api/file-content")
    def api_file_content():
        relative_path = request.args.get("path")
        if not relative_path:
            return jsonify({"error": "File path is required"}), 400

        file_content = read(relative_path)
        return jsonify(
            {
                "content": file_content.content,
                "updatedAt": file_content.updated_at.isoformat(),
                "size": file_content.size,
            }
        )

    @app.get("/")
    def index():
        return browse("")

    @app.get("/browse/<path:subpath>")
    def browse(subpath: str):
        relative_path = normalize_relative_path(subpath)
        target = resolve_under_root(docs_root, relative_path)
        if target.is_dir():
            return _render_folder(relative_path)
        if target.is_file():
            return _render_file(relative_path)
        raise EntryNotFoundError(f"Not found: {relative_path}")

    def _render_folder(relative_path: str):
        folder = listing(relative_path)
        return render_template(
            "folder.html",
            folder=folder,
            parent=parent_of(relative_path),
            breadcrumbs=build_breadcrumbs(relative_path),
            tree=listing(),
            state=view_state(),
        )

    def _render_file(relative_path: str):
        state = view_state()
        file_content = read(relative_path)
        style = config.dark_pygments_style if state.dark_mode else config.pygments_style
        page = render_page(file_content.content, style=style)

        recorder = ScrollRecorder()
        navigator = OutlineNavigator(extract_headings(file_content.content), page.locate, recorder)
        focus = request.args.get("focus")
        if focus is not None:
            navigator.activate(focus)

        parent = parent_of(relative_path)
        return render_template(
            "file.html",
            file=file_content,
            name=Path(relative_path).name,
            updated_at=format_relative_time(file_content.updated_at),
            page=page,
            outline=list(navigator.entries()),
            scroll=recorder.instruction,
            parent=parent,
            breadcrumbs=build_breadcrumbs(relative_path),
            tree=listing(),
            state=state,
        )

    @app.post("/preferences/dark-mode")
    def toggle_dark_mode():
        target = request.form.get("next", "/")
        if not target.startswith("/") or target.startswith("//"):
            abort(400)

        response = redirect(target)
        store = CookiePreferenceStore(request.cookies)
        view_state().toggle_dark_mode(store, response)
        return response

    return app
