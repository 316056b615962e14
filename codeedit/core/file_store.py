"""
Synchronized file store: fingerprinted reads and conditional atomic writes.

Writes use optimistic concurrency. A write only lands if the file on disk
still has the fingerprint the caller read; otherwise the caller gets a
conflict and must re-read. There is no in-process lock: the fingerprint
check followed by an atomic rename is the only safety mechanism.
"""

import logging
import os
import stat
import tempfile
from pathlib import Path
from typing import Union

from ..models.files import FileContent, WriteOutcome
from .errors import (
    FileNotFoundInWorkspaceError,
    UnsupportedContentError,
    WriteFailedError,
)
from .workspace import compute_etag, decode_text, is_binary, safe_path

logger = logging.getLogger(__name__)

CONFLICT_MESSAGE = "File has changed on disk. Reload required."
TEMP_SUFFIX = ".tmp_save"
NEW_FILE_MODE = 0o644


def read_file(root: Union[str, Path], relative_path: str) -> FileContent:
    """
    Read a workspace file and fingerprint it.

    Raises:
        InvalidPathError: path contains ``..`` or is absolute
        FileNotFoundInWorkspaceError: file is missing or unreadable
        UnsupportedContentError: file looks binary
    """
    path = safe_path(Path(root), relative_path)

    try:
        data = path.read_bytes()
    except OSError as e:
        raise FileNotFoundInWorkspaceError(f"File not found: {relative_path}", relative_path) from e

    if is_binary(data):
        raise UnsupportedContentError(f"Binary file: {relative_path}", relative_path)

    return FileContent(content=decode_text(data), etag=compute_etag(data))


def write_file(
    root: Union[str, Path],
    relative_path: str,
    content: str,
    expected_etag: str
) -> WriteOutcome:
    """
    Write ``content`` if the file still matches ``expected_etag``.

    A file that does not exist yet cannot conflict and is simply created.

    Returns:
        ``WriteOutcome`` with status ``ok`` and the new etag, or status
        ``conflict`` if the file changed since it was read.

    Raises:
        InvalidPathError: path contains ``..`` or is absolute
        WriteFailedError: reading the current file, the temporary write or
            the rename failed
    """
    path = safe_path(Path(root), relative_path)

    if path.exists():
        try:
            current = path.read_bytes()
        except OSError as e:
            raise WriteFailedError(str(e), relative_path) from e

        if compute_etag(current) != expected_etag:
            logger.info(f"Write conflict on {relative_path}")
            return WriteOutcome(status="conflict", message=CONFLICT_MESSAGE)

    data = content.encode("utf-8")
    _atomic_write(path, data, relative_path)

    new_etag = compute_etag(data)
    logger.info(f"Saved {relative_path} ({len(data)} bytes, etag {new_etag[:8]}...)")
    return WriteOutcome(status="ok", new_etag=new_etag)


def _atomic_write(path: Path, data: bytes, relative_path: str):
    """Write to a temporary file beside ``path`` then rename it into place."""
    try:
        mode = stat.S_IMODE(path.stat().st_mode)
    except OSError:
        mode = NEW_FILE_MODE

    try:
        fd, tmp_name = tempfile.mkstemp(
            dir=path.parent,
            prefix=f".{path.name}.",
            suffix=TEMP_SUFFIX
        )
    except OSError as e:
        raise WriteFailedError(str(e), relative_path) from e

    try:
        with os.fdopen(fd, "wb") as f:
            f.write(data)
            f.flush()
            os.fsync(f.fileno())
        # mkstemp creates files as 0600
        os.chmod(tmp_name, mode)
        os.replace(tmp_name, path)
    except OSError as e:
        _remove_quietly(tmp_name)
        raise WriteFailedError(str(e), relative_path) from e


def _remove_quietly(tmp_name: str):
    try:
        os.unlink(tmp_name)
    except FileNotFoundError:
        pass
    except OSError as e:
        logger.warning(f"Could not remove temporary file {tmp_name}: {e}")
