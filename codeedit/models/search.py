"""
Search result models.
"""

from pydantic import BaseModel, Field


class SearchMatch(BaseModel):
    """A single filename or content match."""

    file: str = Field(..., description="Path relative to the workspace root")
    line: int = Field(..., ge=1, description="1-based line number (1 for filename matches)")
    column: int = Field(..., ge=1, description="1-based byte column of the match start")
    preview: str = Field(..., description="Trimmed line text, or 'FILENAME MATCH: <file>'")
