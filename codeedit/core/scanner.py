"""
Workspace scanner: on-demand filename and content search.

Every call walks the tree from scratch; nothing is cached between searches.
"""

import logging
import os
import re
import stat
from pathlib import Path
from typing import Iterator, List, Optional, Union

from ..models.search import SearchMatch
from .workspace import EXCLUDED_DIR_NAMES, decode_text, is_binary

logger = logging.getLogger(__name__)

# Searching stops once the result count goes past this value.
MAX_RESULTS = 2000
PREVIEW_CHARS = 200
FILENAME_MATCH_PREFIX = "FILENAME MATCH: "


def search(
    root: Union[str, Path],
    query: str,
    use_regex: bool = False,
    glob: Optional[str] = None
) -> List[SearchMatch]:
    """
    Search file paths and file contents beneath ``root``.

    Args:
        root: Workspace root directory
        query: Text to look for (case-insensitive)
        use_regex: Treat ``query`` as a regular expression
        glob: Optional path suffix filter. Leading ``*`` characters are
            stripped and the rest must match the end of the file path
            literally; this is not full glob syntax.

    Returns:
        Matches in directory-walk order. At most ``MAX_RESULTS + 1`` records.
    """
    results: List[SearchMatch] = []
    if not query:
        return results

    pattern: Optional[re.Pattern] = None
    if use_regex:
        try:
            pattern = re.compile(query, re.IGNORECASE)
        except re.error as e:
            logger.warning(f"Invalid search regex {query!r}: {e}")
            return results

    root = Path(os.path.abspath(root))
    query_lower = query.encode("utf-8").lower()
    suffix = glob.lstrip("*") if glob is not None else None

    for file_path in _iter_candidate_files(root):
        if suffix is not None and not str(file_path).endswith(suffix):
            continue

        for match in _match_file(root, file_path, pattern, query_lower):
            results.append(match)
            if len(results) > MAX_RESULTS:
                logger.info(f"Search for {query!r} hit the result cap ({MAX_RESULTS})")
                return results

    return results


def _iter_candidate_files(root: Path) -> Iterator[Path]:
    """Yield regular files under ``root`` that are not in an excluded directory."""

    def on_error(error: OSError):
        logger.debug(f"Skipping unreadable directory: {error}")

    for dirpath, dirnames, filenames in os.walk(root, onerror=on_error):
        dirnames[:] = [name for name in dirnames if name not in EXCLUDED_DIR_NAMES]
        for name in filenames:
            path = Path(dirpath) / name
            if is_excluded(path):
                continue
            if not _is_regular_file(path):
                continue
            yield path


def is_excluded(path: Path) -> bool:
    """Check every component of the absolute path against the exclusion set."""
    return any(part in EXCLUDED_DIR_NAMES for part in Path(os.path.abspath(path)).parts)


def _is_regular_file(path: Path) -> bool:
    try:
        return stat.S_ISREG(os.lstat(path).st_mode)
    except OSError:
        return False


def _match_file(
    root: Path,
    file_path: Path,
    pattern: Optional[re.Pattern],
    query_lower: bytes
) -> Iterator[SearchMatch]:
    """Yield the filename match (if any), then content matches line by line."""
    # Undecodable filename bytes become U+FFFD so the record stays valid UTF-8
    rel_path = os.fsencode(file_path.relative_to(root)).decode("utf-8", errors="replace")

    if pattern is not None:
        path_matched = pattern.search(rel_path) is not None
    else:
        path_matched = query_lower in rel_path.encode("utf-8").lower()

    if path_matched:
        yield SearchMatch(
            file=rel_path,
            line=1,
            column=1,
            preview=FILENAME_MATCH_PREFIX + rel_path
        )

    try:
        data = file_path.read_bytes()
    except OSError as e:
        logger.debug(f"Skipping unreadable file {file_path}: {e}")
        return

    if is_binary(data):
        return

    for line_number, line in enumerate(split_lines(decode_text(data)), start=1):
        offset = _find_in_line(line, pattern, query_lower)
        if offset is None:
            continue
        yield SearchMatch(
            file=rel_path,
            line=line_number,
            column=offset + 1,
            preview=line.strip()[:PREVIEW_CHARS]
        )


def split_lines(text: str) -> List[str]:
    """
    Split on ``\\n``. A final terminator does not add an empty line and a
    trailing ``\\r`` is dropped from each line.
    """
    lines = text.split("\n")
    if lines[-1] == "":
        lines.pop()
    return [line[:-1] if line.endswith("\r") else line for line in lines]


def _find_in_line(line: str, pattern: Optional[re.Pattern], query_lower: bytes) -> Optional[int]:
    """Return the UTF-8 byte offset of the first match in ``line``, or None."""
    if pattern is not None:
        m = pattern.search(line)
        if m is None:
            return None
        return len(line[:m.start()].encode("utf-8"))

    # bytes.lower() only folds ASCII, so offsets stay byte-accurate
    index = line.encode("utf-8").lower().find(query_lower)
    return index if index >= 0 else None
