"""Package-specific exception types."""

from __future__ import annotations


class FileAccessError(OSError):
    """Base class for errors raised by the filesystem collaborators.

    Attributes:
        status_code: HTTP status the web layer reports for this error.
    """

    status_code = 500


class EntryNotFoundError(FileAccessError):
    """Raised when a folder or file does not exist under the docs root."""

    status_code = 404


class PathOutsideRootError(FileAccessError):
    """Raised when a requested path would resolve outside the docs root.

    Args:
        path: The user-supplied relative path.
    """

    status_code = 403

    def __init__(self, path: str):
        self.path = path
        super().__init__(f"Invalid path: {path}")


class UnsupportedFileTypeError(FileAccessError):
    """Raised when a requested file does not carry the Markdown extension.

    Args:
        path: The user-supplied relative path.
        extension: Extension files are required to have.
    """

    status_code = 403

    def __init__(self, path: str, extension: str):
        self.path = path
        self.extension = extension
        super().__init__(f"Only {extension} files are allowed: {path}")


class FileTooLargeError(FileAccessError):
    """Raised when a file exceeds the configured maximum size.

    Args:
        path: The user-supplied relative path.
        max_file_size: Maximum allowed size in bytes.
    """

    status_code = 413

    def __init__(self, path: str, max_file_size: int):
        self.path = path
        self.max_file_size = max_file_size
        super().__init__(self._build_message())

    def _build_message(self) -> str:
        return f"{self.path} exceeds the maximum allowed size of {self.max_file_size} bytes"
