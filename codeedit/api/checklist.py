"""
Checklist API endpoints.
"""

import logging
from typing import Any, Dict

from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.concurrency import run_in_threadpool

from ..core.checklist import ChecklistStore
from ..models.checklist import ChecklistItem, ChecklistPatch
from .dependencies import get_checklist_store

logger = logging.getLogger(__name__)
router = APIRouter()


@router.get("/checklist", response_model=Dict[str, ChecklistItem])
async def get_checklist(
    store: ChecklistStore = Depends(get_checklist_store)
) -> Dict[str, ChecklistItem]:
    """Return every checklist entry keyed by file path."""
    return store.snapshot()


@router.patch("/checklist")
async def patch_checklist(
    request: ChecklistPatch,
    store: ChecklistStore = Depends(get_checklist_store)
) -> Dict[str, Any]:
    """Create or update one checklist entry."""
    try:
        await run_in_threadpool(store.update, request.path, request.status, request.note)
    except OSError as e:
        logger.error(f"Error saving checklist: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Error saving checklist: {str(e)}"
        )
    return {"ok": True}
