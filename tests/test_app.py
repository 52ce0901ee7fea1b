from __future__ import annotations

from pathlib import Path

import pytest

from docs_viewer.app import create_app
from docs_viewer.config import ConfigError, ViewerConfig


def test_api_files_lists_tree(client):
    response = client.get("/api/files")

    assert response.status_code == 200
    data = response.get_json()
    assert data["id"] == "root"
    assert data["name"] == "Docs"
    assert data["updatedAt"] == "now"
    assert [child["name"] for child in data["children"]] == ["guides", "reference", "README.md"]
    assert data["children"][-1]["type"] == "file"
    assert "children" not in data["children"][-1]


def test_api_files_lists_subfolder(client):
    data = client.get("/api/files", query_string={"path": "guides"}).get_json()

    assert data["path"] == "guides"
    assert [child["path"] for child in data["children"]] == ["guides/advanced", "guides/setup.md"]


def test_api_files_rejects_traversal(client):
    response = client.get("/api/files", query_string={"path": "../"})

    assert response.status_code == 403
    assert response.get_json() == {"error": "Invalid path: .."}


def test_api_files_missing_folder(client):
    response = client.get("/api/files", query_string={"path": "missing"})

    assert response.status_code == 404
    assert "Directory not found" in response.get_json()["error"]


def test_api_file_content_returns_document(client, docs_root: Path):
    response = client.get("/api/file-content", query_string={"path": "guides/setup.md"})

    assert response.status_code == 200
    data = response.get_json()
    assert data["content"].startswith("# Setup")
    assert data["size"] == (docs_root / "guides" / "setup.md").stat().st_size
    assert data["updatedAt"].endswith("+00:00")


def test_api_file_content_requires_path(client):
    response = client.get("/api/file-content")

    assert response.status_code == 400
    assert response.get_json() == {"error": "File path is required"}


@pytest.mark.parametrize(
    ("path", "status_code"),
    [
        ("../outside.md", 403),
        ("notes.txt", 403),
        ("missing.md", 404),
        ("guides", 404),
    ],
)
def test_api_file_content_errors(client, path, status_code):
    response = client.get("/api/file-content", query_string={"path": path})

    assert response.status_code == status_code
    assert "error" in response.get_json()


def test_api_file_content_too_large(docs_root: Path):
    app = create_app(ViewerConfig(docs_root=str(docs_root), max_file_size=8))

    response = app.test_client().get("/api/file-content", query_string={"path": "README.md"})

    assert response.status_code == 413


def test_index_shows_root_listing(client):
    response = client.get("/")

    assert response.status_code == 200
    html = response.get_data(as_text=True)
    assert "3 items" in html
    assert "README.md" in html
    assert "Date Modified" in html
    assert "↰ .." not in html
    assert "notes.txt" not in html


def test_folder_page_links_to_parent(client):
    html = client.get("/browse/guides").get_data(as_text=True)

    assert "2 items" in html
    assert "↰ .." in html
    assert 'href="/browse/guides/setup.md"' in html


def test_empty_folder_page(client, docs_root: Path):
    (docs_root / "empty").mkdir()

    html = client.get("/browse/empty").get_data(as_text=True)

    assert "Empty directory" in html


def test_file_page_renders_document_and_outline(client):
    response = client.get("/browse/guides/setup.md")

    assert response.status_code == 200
    html = response.get_data(as_text=True)
    assert '<h1 id="setup" class="md-heading">Setup</h1>' in html
    assert '<code class="md-inline-code">pyproject.toml</code>' in html
    assert "← Back to guides" in html
    assert "On this page" in html
    assert 'href="/browse/guides/setup.md?focus=configure"' in html
    assert "padding-left: 24px" in html
    assert "scrollIntoView" not in html


def test_file_page_at_root_goes_back_to_docs(client):
    html = client.get("/browse/README.md").get_data(as_text=True)

    assert "← Back to Docs" in html
    assert "<strong>guides</strong>" in html


def test_file_page_without_headings(client, docs_root: Path):
    (docs_root / "plain.md").write_text("just text\n", encoding="utf-8")

    html = client.get("/browse/plain.md").get_data(as_text=True)

    assert "No headings" in html


def test_focus_highlights_entry_and_scrolls(client):
    html = client.get("/browse/guides/setup.md?focus=configure").get_data(as_text=True)

    assert '<li class="active" style="padding-left: 24px">' in html
    assert 'document.getElementById("configure")' in html
    assert '"smooth"' in html
    assert '"start"' in html


def test_focus_on_unknown_heading_is_ignored(client):
    response = client.get("/browse/guides/setup.md?focus=nowhere")

    assert response.status_code == 200
    html = response.get_data(as_text=True)
    assert 'class="active"' not in html.split("On this page")[1]
    assert "scrollIntoView" not in html


def test_browse_missing_entry_renders_error_page(client):
    response = client.get("/browse/missing.md")

    assert response.status_code == 404
    assert "Something went wrong (404)" in response.get_data(as_text=True)


def test_browse_non_markdown_file_is_forbidden(client):
    response = client.get("/browse/notes.txt")

    assert response.status_code == 403


def test_sidebar_shows_tree_and_can_be_closed(client):
    open_html = client.get("/").get_data(as_text=True)
    closed_html = client.get("/?sidebar=closed").get_data(as_text=True)

    assert '<nav class="sidebar">' in open_html
    assert 'href="/?sidebar=closed"' in open_html
    assert '<nav class="sidebar">' not in closed_html


def test_dark_mode_toggle_sets_cookie_and_redirects(client):
    response = client.post("/preferences/dark-mode", data={"next": "/browse/guides"})

    assert response.status_code == 302
    assert response.headers["Location"] == "/browse/guides"
    assert response.headers["Set-Cookie"].startswith("darkMode=true")


def test_dark_mode_persists_across_requests(client):
    client.post("/preferences/dark-mode", data={"next": "/"})

    html = client.get("/").get_data(as_text=True)
    assert '<html lang="en" class="dark">' in html
    assert "Light mode" in html

    client.post("/preferences/dark-mode", data={"next": "/"})
    assert '<html lang="en" class="light">' in client.get("/").get_data(as_text=True)


def test_dark_mode_uses_dark_code_style(client, docs_root: Path):
    light = client.get("/browse/guides/setup.md").get_data(as_text=True)
    client.post("/preferences/dark-mode", data={"next": "/"})
    dark = client.get("/browse/guides/setup.md").get_data(as_text=True)

    assert light != dark


@pytest.mark.parametrize("target", ["https://example.com/", "//example.com", "browse"])
def test_dark_mode_toggle_rejects_external_redirects(client, target):
    response = client.post("/preferences/dark-mode", data={"next": target})

    assert response.status_code == 400


def test_create_app_creates_missing_docs_root(tmp_path: Path):
    root = tmp_path / "new-docs"

    create_app(ViewerConfig(docs_root=str(root)))

    assert root.is_dir()


def test_create_app_validates_config(tmp_path: Path):
    with pytest.raises(ConfigError):
        create_app(ViewerConfig(docs_root=str(tmp_path), port=0))


def test_symlink_cycle_does_not_break_pages(client, docs_root: Path):
    try:
        (docs_root / "loop").symlink_to(docs_root, target_is_directory=True)
    except OSError:
        pytest.skip("symlinks are not supported")

    response = client.get("/browse/README.md")

    assert response.status_code == 200
    names = [child["name"] for child in client.get("/api/files").get_json()["children"]]
    assert "loop" not in names


def test_create_app_rejects_unknown_pygments_style(docs_root: Path):
    with pytest.raises(ConfigError, match="`pygments_style` is not a known Pygments style"):
        create_app(ViewerConfig(docs_root=str(docs_root), pygments_style="nope"))


def test_file_size_limit_from_environment(docs_root: Path, monkeypatch):
    monkeypatch.setenv("DOCS_VIEWER_MAX_FILE_SIZE", "8")
    app = create_app(ViewerConfig(docs_root=str(docs_root)))

    response = app.test_client().get("/api/file-content", query_string={"path": "README.md"})

    assert response.status_code == 413


def test_invalid_file_size_environment_is_config_error(docs_root: Path, monkeypatch):
    monkeypatch.setenv("DOCS_VIEWER_MAX_FILE_SIZE", "lots")

    with pytest.raises(ConfigError, match="DOCS_VIEWER_MAX_FILE_SIZE"):
        create_app(ViewerConfig(docs_root=str(docs_root)))


def test_api_file_content_keeps_line_endings(client, docs_root: Path):
    (docs_root / "crlf.md").write_bytes(b"# A\r\nb\r\n")

    data = client.get("/api/file-content", query_string={"path": "crlf.md"}).get_json()

    assert data["content"] == "# A\r\nb\r\n"
    assert data["size"] == 8
