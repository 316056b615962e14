"""
Tests for the synchronized file store.
"""

import hashlib
import os
import stat
from pathlib import Path
from unittest.mock import patch

import pytest

from codeedit.core.errors import (
    FileNotFoundInWorkspaceError,
    InvalidPathError,
    UnsupportedContentError,
    WriteFailedError,
)
from codeedit.core.file_store import CONFLICT_MESSAGE, TEMP_SUFFIX, read_file, write_file
from codeedit.core.workspace import compute_etag, is_binary, safe_path
from tests.conftest import write


class TestReadFile:
    """Test fingerprinted reads."""

    def test_read_returns_content_and_etag(self, workspace):
        """Test content is decoded and the etag is the SHA-256 of the bytes."""
        result = read_file(workspace, "src/util.x")

        assert result.content == "pub fn help() { }\n"
        assert result.etag == hashlib.sha256(b"pub fn help() { }\n").hexdigest()

    def test_etag_is_recomputed(self, workspace):
        """Test an external edit changes the etag on the next read."""
        first = read_file(workspace, "README.md").etag
        (workspace / "README.md").write_text("changed\n")

        assert read_file(workspace, "README.md").etag != first

    def test_missing_file(self, workspace):
        """Test a missing file raises FileNotFoundInWorkspaceError."""
        with pytest.raises(FileNotFoundInWorkspaceError):
            read_file(workspace, "src/nope.x")

    def test_directory_is_not_found(self, workspace):
        """Test reading a directory is reported as not found."""
        with pytest.raises(FileNotFoundInWorkspaceError):
            read_file(workspace, "src")

    def test_binary_file(self, workspace):
        """Test binary files are rejected."""
        write(workspace, "img.bin", b"PNG\x00\x01\x02")

        with pytest.raises(UnsupportedContentError):
            read_file(workspace, "img.bin")

    def test_invalid_utf8_is_replaced(self, workspace):
        """Test invalid bytes decode with replacement characters."""
        write(workspace, "latin.txt", b"caf\xe9\n")

        result = read_file(workspace, "latin.txt")

        assert result.content == "caf�\n"
        assert result.etag == compute_etag(b"caf\xe9\n")


class TestPathGuard:
    """Test rejection of paths that could leave the workspace."""

    @pytest.mark.parametrize("bad_path", ["../secret", "src/../../etc/passwd", "a/..", "name..txt", "a\x00b"])
    def test_read_rejects_unsafe_paths(self, workspace, bad_path):
        """Test '..' or a NUL byte anywhere in the path is rejected before any read."""
        with patch.object(Path, "read_bytes") as read_bytes:
            with pytest.raises(InvalidPathError):
                read_file(workspace, bad_path)
            read_bytes.assert_not_called()

    @pytest.mark.parametrize("bad_path", ["../secret", "src/../../outside.txt", "a\x00b"])
    def test_write_rejects_unsafe_paths(self, workspace, bad_path):
        """Test '..' and NUL bytes are rejected for writes before touching the filesystem."""
        with patch.object(Path, "exists") as exists, patch("codeedit.core.file_store.tempfile.mkstemp") as mkstemp:
            with pytest.raises(InvalidPathError):
                write_file(workspace, bad_path, "data", "")
            exists.assert_not_called()
            mkstemp.assert_not_called()

        assert not (workspace.parent / "secret").exists()

    def test_absolute_path_rejected(self, workspace):
        """Test absolute paths are rejected."""
        with pytest.raises(InvalidPathError):
            read_file(workspace, str(workspace / "README.md"))
        with pytest.raises(InvalidPathError):
            write_file(workspace, "/tmp/evil.txt", "data", "")

    def test_safe_path_joins_root(self, workspace):
        """Test valid paths are joined onto the root."""
        assert safe_path(workspace, "src/main.x") == workspace / "src" / "main.x"


class TestWriteFile:
    """Test conditional atomic writes."""

    def test_write_then_stale_write_conflicts(self, workspace):
        """Test the read/write/stale-write cycle."""
        f1 = read_file(workspace, "src/main.x").etag

        first = write_file(workspace, "src/main.x", "fn main() {}\n", f1)
        assert first.status == "ok"
        assert first.new_etag == compute_etag(b"fn main() {}\n")
        assert first.new_etag != f1

        second = write_file(workspace, "src/main.x", "clobbered\n", f1)
        assert second.status == "conflict"
        assert second.is_conflict
        assert second.message == CONFLICT_MESSAGE
        assert (workspace / "src" / "main.x").read_text() == "fn main() {}\n"

    def test_new_etag_allows_next_write(self, workspace):
        """Test the returned etag can be used without re-reading."""
        etag = read_file(workspace, "README.md").etag

        etag = write_file(workspace, "README.md", "v2\n", etag).new_etag
        result = write_file(workspace, "README.md", "v3\n", etag)

        assert result.status == "ok"
        assert read_file(workspace, "README.md").etag == result.new_etag

    def test_external_change_conflicts(self, workspace):
        """Test a change made outside the store is detected."""
        etag = read_file(workspace, "README.md").etag
        (workspace / "README.md").write_text("edited elsewhere\n")

        result = write_file(workspace, "README.md", "mine\n", etag)

        assert result.is_conflict
        assert (workspace / "README.md").read_text() == "edited elsewhere\n"

    def test_create_new_file(self, workspace):
        """Test a missing file cannot conflict and is created."""
        result = write_file(workspace, "src/new.x", "hello\n", "whatever")

        assert result.status == "ok"
        assert (workspace / "src" / "new.x").read_bytes() == b"hello\n"

    def test_writes_utf8(self, workspace):
        """Test content is encoded as UTF-8 and fingerprinted as written."""
        result = write_file(workspace, "u.txt", "naïve\n", "")

        assert (workspace / "u.txt").read_bytes() == "naïve\n".encode("utf-8")
        assert result.new_etag == compute_etag("naïve\n".encode("utf-8"))

    def test_missing_parent_directory(self, workspace):
        """Test a missing directory is a write failure, not a conflict."""
        with pytest.raises(WriteFailedError):
            write_file(workspace, "nope/dir/file.txt", "x", "")

    def test_no_temporary_files_left(self, workspace):
        """Test successful writes leave only the destination behind."""
        etag = read_file(workspace, "src/util.x").etag
        write_file(workspace, "src/util.x", "updated\n", etag)

        assert sorted(os.listdir(workspace / "src")) == ["main.x", "util.x"]

    @pytest.mark.skipif(os.name == "nt", reason="POSIX permissions")
    def test_preserves_file_mode(self, workspace):
        """Test the replaced file keeps its permission bits."""
        path = workspace / "README.md"
        path.chmod(0o640)
        etag = read_file(workspace, "README.md").etag

        write_file(workspace, "README.md", "x\n", etag)

        assert stat.S_IMODE(path.stat().st_mode) == 0o640


class TestWriteAtomicity:
    """Test that interrupted writes never leave a partial destination."""

    def test_failed_rename_keeps_old_content(self, workspace):
        """Test a rename failure raises and the destination is untouched."""
        etag = read_file(workspace, "src/main.x").etag
        original = (workspace / "src" / "main.x").read_bytes()

        with patch("codeedit.core.file_store.os.replace", side_effect=OSError("disk full")):
            with pytest.raises(WriteFailedError) as exc_info:
                write_file(workspace, "src/main.x", "new content\n", etag)

        assert "disk full" in str(exc_info.value)
        assert (workspace / "src" / "main.x").read_bytes() == original
        assert not [name for name in os.listdir(workspace / "src") if name.endswith(TEMP_SUFFIX)]

    def test_failed_flush_keeps_old_content(self, workspace):
        """Test a failure while writing the temporary file is terminal."""
        etag = read_file(workspace, "README.md").etag
        original = (workspace / "README.md").read_bytes()

        with patch("codeedit.core.file_store.os.fsync", side_effect=OSError("I/O error")):
            with pytest.raises(WriteFailedError):
                write_file(workspace, "README.md", "partial?\n", etag)

        assert (workspace / "README.md").read_bytes() == original
        assert sorted(os.listdir(workspace)) == ["README.md", "src", "target"]

    def test_unreadable_existing_file(self, workspace):
        """Test failing to read the current file is a write failure."""
        with patch.object(Path, "read_bytes", side_effect=PermissionError("denied")):
            with pytest.raises(WriteFailedError):
                write_file(workspace, "README.md", "x", "etag")


class TestHelpers:
    """Test the binary heuristic."""

    def test_is_binary(self):
        """Test only zero bytes in the first 8192 bytes count."""
        assert is_binary(b"abc\x00")
        assert not is_binary(b"plain text")
        assert not is_binary(b"a" * 8192 + b"\x00")
        assert is_binary(b"a" * 8191 + b"\x00")
        assert not is_binary(b"")
