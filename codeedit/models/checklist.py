"""
Checklist data models for tracking per-file review progress.
"""

from typing import Optional

from pydantic import BaseModel, Field, field_validator

CHECKLIST_STATUSES = ("todo", "in_progress", "done")


def _validate_status(v):
    if v is not None and v not in CHECKLIST_STATUSES:
        raise ValueError(f"Status must be one of: {', '.join(CHECKLIST_STATUSES)}")
    return v


class ChecklistItem(BaseModel):
    """Review state of one file."""

    status: str = Field("todo", description="'todo', 'in_progress' or 'done'")
    note: str = Field("", description="Free-form note")
    updated_ts: int = Field(..., description="Unix timestamp (seconds) of the last update")

    @field_validator('status')
    @classmethod
    def validate_status(cls, v):
        """Validate status values."""
        return _validate_status(v)


class ChecklistPatch(BaseModel):
    """Partial update for a checklist entry."""

    path: str = Field(..., description="Path relative to the workspace root")
    status: Optional[str] = Field(None, description="New status, if changing")
    note: Optional[str] = Field(None, description="New note, if changing")

    @field_validator('status')
    @classmethod
    def validate_status(cls, v):
        """Validate status values."""
        return _validate_status(v)
