"""
File read/save API endpoints.
"""

import logging
from pathlib import Path

from fastapi import APIRouter, Depends, HTTPException, Query, status
from fastapi.concurrency import run_in_threadpool

from ..core.errors import (
    FileNotFoundInWorkspaceError,
    InvalidPathError,
    UnsupportedContentError,
    WriteFailedError,
)
from ..core.file_store import read_file, write_file
from ..models.files import FileContent, SaveFileRequest, WriteOutcome
from .dependencies import get_workspace_root

logger = logging.getLogger(__name__)
router = APIRouter()


@router.get("/file", response_model=FileContent)
async def get_file(
    path: str = Query(..., description="Path relative to the workspace root"),
    root: Path = Depends(get_workspace_root)
) -> FileContent:
    """Read a text file together with its etag."""
    try:
        return await run_in_threadpool(read_file, root, path)
    except InvalidPathError:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Invalid path")
    except FileNotFoundInWorkspaceError:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"File not found: {path}")
    except UnsupportedContentError:
        raise HTTPException(
            status_code=status.HTTP_415_UNSUPPORTED_MEDIA_TYPE,
            detail=f"Binary files cannot be opened: {path}"
        )


@router.post("/file", response_model=WriteOutcome, response_model_exclude_none=True)
async def save_file(
    request: SaveFileRequest,
    root: Path = Depends(get_workspace_root)
) -> WriteOutcome:
    """
    Save a file if it has not changed since it was read.

    A stale etag is not an HTTP error: the response has status
    ``conflict`` and the client should reload before retrying.
    """
    try:
        return await run_in_threadpool(write_file, root, request.path, request.content, request.etag)
    except InvalidPathError:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Invalid path")
    except WriteFailedError as e:
        logger.error(f"Error saving {request.path}: {e}")
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(e))
