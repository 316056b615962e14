"""
Shared workspace helpers: path guard, binary detection and fingerprints.
"""

import hashlib
import os
from pathlib import Path

from .errors import InvalidPathError

# Name of the tool's own metadata directory inside a workspace.
METADATA_DIR_NAME = "codeedit"

# Matched against individual path components, never substrings.
EXCLUDED_DIR_NAMES = frozenset({".git", "node_modules", "target", "dist", METADATA_DIR_NAME})

BINARY_SNIFF_BYTES = 8192


def is_binary(data: bytes) -> bool:
    """Return True if any of the first 8192 bytes is a zero byte."""
    return b"\x00" in data[:BINARY_SNIFF_BYTES]


def compute_etag(data: bytes) -> str:
    """SHA-256 hex digest of the exact file bytes."""
    return hashlib.sha256(data).hexdigest()


def decode_text(data: bytes) -> str:
    """Decode UTF-8, replacing invalid sequences instead of failing."""
    return data.decode("utf-8", errors="replace")


def safe_path(root: Path, relative_path: str) -> Path:
    """
    Join a caller-supplied relative path onto the workspace root.

    Any path containing ``..`` or a NUL byte is rejected outright, as is an absolute path
    (joining it would discard the root). This is a string check only; it does
    not resolve symlinks.

    Raises:
        InvalidPathError: if the path is rejected
    """
    if ".." in relative_path or "\x00" in relative_path:
        raise InvalidPathError("Invalid path", relative_path)
    if os.path.isabs(relative_path) or relative_path.startswith(("/", "\\")):
        raise InvalidPathError("Invalid path", relative_path)
    return root / relative_path
