"""
Core business logic for the code edit workspace server.
"""

from .checklist import ChecklistStore
from .errors import (
    WorkspaceError,
    InvalidPathError,
    FileNotFoundInWorkspaceError,
    UnsupportedContentError,
    WriteFailedError,
)
from .file_store import read_file, write_file
from .scanner import search

__all__ = [
    "ChecklistStore",
    "WorkspaceError",
    "InvalidPathError",
    "FileNotFoundInWorkspaceError",
    "UnsupportedContentError",
    "WriteFailedError",
    "read_file",
    "write_file",
    "search",
]
