"""Filesystem collaborators: directory listings and Markdown file reads."""

from __future__ import annotations

import logging
import os
import stat
from collections.abc import Iterable
from datetime import datetime, timezone
from pathlib import Path, PurePosixPath

from .constants import DEFAULT_MAX_FILE_SIZE, MARKDOWN_EXTENSION, ROOT_ID, ROOT_NAME
from .exceptions import (
    EntryNotFoundError,
    FileAccessError,
    FileTooLargeError,
    PathOutsideRootError,
    UnsupportedFileTypeError,
)
from .models import EntryType, FileContent, FileEntry

logger = logging.getLogger(__name__)

MAX_FILE_SIZE_ENV_VAR = "DOCS_VIEWER_MAX_FILE_SIZE"

_MINUTE = 60
_HOUR = 60 * _MINUTE
_DAY = 24 * _HOUR
_WEEK = 7 * _DAY
_MONTH = 30 * _DAY


def get_max_file_size(default: int = DEFAULT_MAX_FILE_SIZE) -> int:
    """Resolve the maximum allowed file size.

    Args:
        default: Fallback value in bytes when the environment variable is unset.

    Returns:
        int: Maximum allowed file size in bytes.

    Raises:
        ValueError: If the environment value is not a positive integer.

    Examples:
        os.environ["DOCS_VIEWER_MAX_FILE_SIZE"] = "204800"
        limit = get_max_file_size(default=102400)
    """
    env_value = os.environ.get(MAX_FILE_SIZE_ENV_VAR)
    if env_value is None:
        return default

    try:
        max_size = int(env_value)
    except ValueError as error:
        error_message = (
            f"Invalid value for {MAX_FILE_SIZE_ENV_VAR}: {env_value} (expected positive integer)"
        )
        raise ValueError(error_message) from error

    if max_size <= 0:
        error_message = f"{MAX_FILE_SIZE_ENV_VAR} must be a positive integer, got {max_size}."
        raise ValueError(error_message)

    return max_size


def format_relative_time(mtime: datetime, now: datetime | None = None) -> str:
    """Describe a modification time relative to now.

    Args:
        mtime: Modification time, timezone-aware.
        now: Reference time; defaults to the current UTC time.

    Returns:
        str: ``"just now"``, or ``"N mins ago"`` through ``"N months ago"``.

    Examples:
        format_relative_time(now - timedelta(hours=3), now)  # "3 hours ago"
    """
    now = now or datetime.now(timezone.utc)
    seconds = int((now - mtime).total_seconds())

    if seconds < _MINUTE:
        return "just now"
    if seconds < _HOUR:
        return f"{seconds // _MINUTE} mins ago"
    if seconds < _DAY:
        return f"{seconds // _HOUR} hours ago"
    if seconds < _WEEK:
        return f"{seconds // _DAY} days ago"
    if seconds < _MONTH:
        return f"{seconds // _WEEK} weeks ago"
    return f"{seconds // _MONTH} months ago"


def normalize_relative_path(raw_path: str | None) -> str:
    """Normalize a user-supplied relative path to POSIX form.

    Backslashes become slashes, and empty, ``"."`` and leading-slash segments
    are dropped. ``".."`` segments are kept so the boundary check sees them.

    Examples:
        normalize_relative_path("/guides\\\\setup.md")  # "guides/setup.md"
    """
    if not raw_path:
        return ""
    parts = [part for part in raw_path.replace("\\", "/").split("/") if part not in ("", ".")]
    return str(PurePosixPath(*parts)) if parts else ""


def resolve_under_root(root: Path, relative_path: str) -> Path:
    """Resolve a relative path and require it to stay under `root`.

    Symlinks are followed before the check, so a link pointing outside the
    root is rejected like a ``..`` traversal.

    Args:
        root: Docs root directory.
        relative_path: Path relative to `root`.

    Returns:
        Path: Absolute resolved path inside `root`.

    Raises:
        PathOutsideRootError: If the resolved path escapes `root`.

    Examples:
        resolve_under_root(Path("docs"), "guides/setup.md")
    """
    base_dir = root.resolve()
    resolved = (base_dir / normalize_relative_path(relative_path)).resolve()
    try:
        resolved.relative_to(base_dir)
    except ValueError as error:
        logger.warning("Rejected path outside docs root: %s", relative_path)
        raise PathOutsideRootError(relative_path) from error
    return resolved


def _modified_at(stat_result: os.stat_result) -> datetime:
    return datetime.fromtimestamp(stat_result.st_mtime, tz=timezone.utc)


def _is_listed(name: str, excluded_names: Iterable[str]) -> bool:
    return not name.startswith(".") and name not in excluded_names


def _read_directory(
    directory: Path,
    relative_path: str,
    extension: str,
    excluded_names: tuple[str, ...],
    now: datetime,
) -> list[FileEntry]:
    folders: list[FileEntry] = []
    files: list[FileEntry] = []

    try:
        children = list(directory.iterdir())
    except OSError as error:
        logger.error("Error reading directory %s: %s", directory, error)
        return []

    for child in children:
        if not _is_listed(child.name, excluded_names):
            continue

        child_path = f"{relative_path}/{child.name}" if relative_path else child.name
        try:
            # lstat, so symlinks match neither branch below and are skipped.
            child_stat = child.lstat()
        except OSError as error:
            logger.warning("Skipping unreadable entry %s: %s", child, error)
            continue

        updated_at = format_relative_time(_modified_at(child_stat), now)
        if stat.S_ISDIR(child_stat.st_mode):
            folders.append(
                FileEntry(
                    id=child_path,
                    name=child.name,
                    type=EntryType.FOLDER,
                    path=child_path,
                    updated_at=updated_at,
                    children=_read_directory(child, child_path, extension, excluded_names, now),
                )
            )
        elif stat.S_ISREG(child_stat.st_mode) and child.name.endswith(extension):
            files.append(
                FileEntry(
                    id=child_path,
                    name=child.name,
                    type=EntryType.FILE,
                    path=child_path,
                    updated_at=updated_at,
                )
            )

    def by_name(entry: FileEntry) -> tuple[str, str]:
        return entry.name.casefold(), entry.name

    return sorted(folders, key=by_name) + sorted(files, key=by_name)


def list_directory(
    root: Path,
    relative_path: str = "",
    extension: str = MARKDOWN_EXTENSION,
    excluded_names: tuple[str, ...] = ("node_modules",),
    now: datetime | None = None,
) -> FileEntry:
    """Build the listing tree for a folder under the docs root.

    Hidden entries, excluded names, symlinks, and files without `extension`
    are left out. Within every folder, subfolders come first and both groups are sorted
    by name.

    Args:
        root: Docs root directory.
        relative_path: Folder to list, relative to `root`; empty for the root.
        extension: Extension of files to include.
        excluded_names: Entry names to skip.
        now: Reference time for relative modification times.

    Returns:
        FileEntry: Folder entry for `relative_path` with its subtree.

    Raises:
        PathOutsideRootError: If the folder escapes `root`.
        EntryNotFoundError: If the folder does not exist.

    Examples:
        tree = list_directory(Path("docs"), "guides")
    """
    relative_path = normalize_relative_path(relative_path)
    directory = resolve_under_root(root, relative_path)
    if not directory.is_dir():
        raise EntryNotFoundError(f"Directory not found: {relative_path or '/'}")

    now = now or datetime.now(timezone.utc)
    return FileEntry(
        id=relative_path or ROOT_ID,
        name=PurePosixPath(relative_path).name if relative_path else ROOT_NAME,
        type=EntryType.FOLDER,
        path=relative_path,
        updated_at="now",
        children=_read_directory(directory, relative_path, extension, excluded_names, now),
    )


def collect_file_stat(filepath: Path, relative_path: str) -> os.stat_result:
    """Return stat information for a regular file.

    Args:
        filepath: Resolved path to the file.
        relative_path: Path as requested, used in error messages.

    Returns:
        os.stat_result: File metadata.

    Raises:
        EntryNotFoundError: If the path is missing or not a regular file.
        FileAccessError: If the path is inaccessible.
    """
    try:
        stat_result = filepath.stat()
    except FileNotFoundError as error:
        raise EntryNotFoundError(f"File not found: {relative_path}") from error
    except OSError as error:
        raise FileAccessError(f"Error accessing {relative_path}: {error}") from error

    if not stat.S_ISREG(stat_result.st_mode):
        raise EntryNotFoundError(f"File not found: {relative_path}")

    return stat_result


def enforce_file_size(stat_result: os.stat_result, max_size: int, relative_path: str) -> None:
    """Guard against files that exceed the configured maximum size.

    Raises:
        FileTooLargeError: If `stat_result.st_size` exceeds `max_size`.
    """
    if stat_result.st_size > max_size:
        raise FileTooLargeError(relative_path, max_size)


def read_markdown_file(
    root: Path,
    relative_path: str,
    extension: str = MARKDOWN_EXTENSION,
    max_file_size: int = DEFAULT_MAX_FILE_SIZE,
) -> FileContent:
    """Read a Markdown file under the docs root.

    Args:
        root: Docs root directory.
        relative_path: File to read, relative to `root`.
        extension: Extension the file must carry.
        max_file_size: Maximum allowed size in bytes.

    Returns:
        FileContent: Text with its line endings untouched, modification time,
            and size of the file.

    Raises:
        PathOutsideRootError: If the path escapes `root`.
        EntryNotFoundError: If the file does not exist.
        UnsupportedFileTypeError: If the file does not end with `extension`.
        FileTooLargeError: If the file is larger than `max_file_size`.
        FileAccessError: If the file cannot be read or is not valid UTF-8.

    Examples:
        content = read_markdown_file(Path("docs"), "guides/setup.md")
    """
    relative_path = normalize_relative_path(relative_path)
    filepath = resolve_under_root(root, relative_path)
    stat_result = collect_file_stat(filepath, relative_path)

    if not filepath.name.endswith(extension):
        raise UnsupportedFileTypeError(relative_path, extension)

    enforce_file_size(stat_result, max_file_size, relative_path)

    try:
        with open(filepath, encoding="UTF-8", newline="") as stream:
            content = stream.read()
    except UnicodeDecodeError as error:
        raise FileAccessError(f"Invalid UTF-8 sequence in {relative_path}: {error}") from error
    except OSError as error:
        raise FileAccessError(f"Error accessing {relative_path}: {error}") from error

    logger.debug("Read %s (%d bytes)", relative_path, stat_result.st_size)
    return FileContent(
        path=relative_path,
        content=content,
        updated_at=_modified_at(stat_result),
        size=stat_result.st_size,
    )
