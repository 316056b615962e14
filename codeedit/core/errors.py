"""
Error types raised by the workspace core.

A write conflict is not an error; it is reported through ``WriteOutcome``.
"""


class WorkspaceError(Exception):
    """Base class for workspace errors."""

    def __init__(self, message: str, path: str = ""):
        super().__init__(message)
        self.message = message
        self.path = path


class InvalidPathError(WorkspaceError):
    """Raised when a requested path could escape the workspace root."""


class FileNotFoundInWorkspaceError(WorkspaceError):
    """Raised when the target file is missing or unreadable."""


class UnsupportedContentError(WorkspaceError):
    """Raised when the target file looks binary."""


class WriteFailedError(WorkspaceError):
    """Raised when the temporary write or the rename fails."""
