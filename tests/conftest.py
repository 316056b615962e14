"""
Shared fixtures for workspace tests.
"""

import os
from pathlib import Path

import pytest


def write(root: Path, relative_path: str, content) -> Path:
    """Create a file (and its parent directories) under root."""
    path = root / relative_path
    path.parent.mkdir(parents=True, exist_ok=True)
    if isinstance(content, bytes):
        path.write_bytes(content)
    else:
        path.write_bytes(content.encode("utf-8"))
    return path


@pytest.fixture
def workspace(tmp_path):
    """
    Small workspace:

        src/main.x         contains "fn main"
        src/util.x         contains "pub fn help"
        README.md          contains "TODO list"
        target/ignore_me.x contains "fn main" (excluded)
    """
    root = tmp_path / "workspace"
    root.mkdir()
    write(root, "src/main.x", 'fn main() { println!("Hello"); }\n')
    write(root, "src/util.x", "pub fn help() { }\n")
    write(root, "README.md", "# My Project\nTODO: finish this.\n")
    write(root, "target/ignore_me.x", "fn main() { // duplicate }\n")
    return root.resolve()


def write_undecodable_name(root: Path, content: bytes) -> Path:
    """Create ``bad\\xff.txt`` (not valid UTF-8) under root, or skip."""
    raw = os.path.join(os.fsencode(root), b"bad\xff.txt")
    try:
        with open(raw, "wb") as f:
            f.write(content)
    except OSError:
        pytest.skip("filesystem rejects non-UTF-8 file names")
    return Path(os.fsdecode(raw))
