"""
File read/save models for the synchronized file store.
"""

from typing import Literal, Optional

from pydantic import BaseModel, Field, model_validator


class FileContent(BaseModel):
    """Decoded file content with its fingerprint."""

    content: str = Field(..., description="File text, invalid UTF-8 replaced")
    etag: str = Field(..., description="SHA-256 hex digest of the file bytes")


class SaveFileRequest(BaseModel):
    """Request model for saving a file."""

    path: str = Field(..., description="Path relative to the workspace root")
    content: str = Field(..., description="New file content")
    etag: str = Field(..., description="Fingerprint returned by the last read")


class WriteOutcome(BaseModel):
    """Result of a conditional write: either ok with a new etag, or a conflict."""

    status: Literal["ok", "conflict"]
    new_etag: Optional[str] = Field(None, description="Fingerprint of the written content")
    message: Optional[str] = Field(None, description="Reason for a conflict")

    @model_validator(mode="after")
    def check_fields(self):
        """Ensure each status carries its payload."""
        if self.status == "ok" and not self.new_etag:
            raise ValueError("An ok outcome requires new_etag")
        if self.status == "conflict" and not self.message:
            raise ValueError("A conflict outcome requires a message")
        return self

    @property
    def is_conflict(self) -> bool:
        return self.status == "conflict"
