"""
Data models for the code edit workspace server.
"""

from .search import SearchMatch
from .files import FileContent, SaveFileRequest, WriteOutcome
from .checklist import ChecklistItem, ChecklistPatch, CHECKLIST_STATUSES

__all__ = [
    "SearchMatch",
    "FileContent",
    "SaveFileRequest",
    "WriteOutcome",
    "ChecklistItem",
    "ChecklistPatch",
    "CHECKLIST_STATUSES",
]
