"""
Checklist store: per-file review status persisted as JSON inside the workspace.
"""

import json
import logging
import threading
import time
from pathlib import Path
from typing import Dict, Optional

from pydantic import ValidationError

from ..models.checklist import ChecklistItem

logger = logging.getLogger(__name__)


class ChecklistStore:
    """
    In-memory checklist map backed by a JSON file.

    All reads and updates go through a single lock; each update rewrites the
    whole file while the lock is held.
    """

    def __init__(self, path: Path):
        """
        Initialize the store and load any existing checklist.

        Args:
            path: Location of the checklist JSON file
        """
        self.path = Path(path)
        self._lock = threading.Lock()
        self._items: Dict[str, ChecklistItem] = self._load()

    def _load(self) -> Dict[str, ChecklistItem]:
        """Load the checklist file; a missing or corrupt file gives an empty map."""
        if not self.path.exists():
            return {}

        try:
            raw = json.loads(self.path.read_text(encoding="utf-8"))
            items = {key: ChecklistItem.model_validate(value) for key, value in raw.items()}
        except (OSError, ValueError, AttributeError, ValidationError) as e:
            logger.warning(f"Ignoring unreadable checklist {self.path}: {e}")
            return {}

        logger.info(f"Loaded {len(items)} checklist entries from {self.path}")
        return items

    def snapshot(self) -> Dict[str, ChecklistItem]:
        """Return a copy of all entries, sorted by path."""
        with self._lock:
            return {key: item.model_copy() for key, item in sorted(self._items.items())}

    def update(self, path: str, status: Optional[str] = None, note: Optional[str] = None) -> ChecklistItem:
        """
        Create or update the entry for ``path`` and persist the checklist.

        Raises:
            OSError: if the checklist file cannot be written
        """
        with self._lock:
            now = int(time.time())
            item = self._items.get(path)
            if item is None:
                item = ChecklistItem(status="todo", note="", updated_ts=now)

            changes = {"updated_ts": now}
            if status is not None:
                changes["status"] = status
            if note is not None:
                changes["note"] = note
            item = ChecklistItem.model_validate({**item.model_dump(), **changes})

            # Only commit in memory once the file write has succeeded
            items = {**self._items, path: item}
            self._persist(items)
            self._items = items
            return item.model_copy()

    def _persist(self, items: Dict[str, ChecklistItem]):
        payload = {key: item.model_dump() for key, item in sorted(items.items())}
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(json.dumps(payload, indent=2), encoding="utf-8")
