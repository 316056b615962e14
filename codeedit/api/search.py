"""
Search API endpoint.
"""

import logging
from pathlib import Path
from typing import List, Optional

from fastapi import APIRouter, Depends, Query
from fastapi.concurrency import run_in_threadpool

from ..core.scanner import search
from ..models.search import SearchMatch
from .dependencies import get_workspace_root

logger = logging.getLogger(__name__)
router = APIRouter()


@router.get("/search", response_model=List[SearchMatch])
async def search_workspace(
    q: str = Query(..., min_length=1, description="Text or regular expression to find"),
    regex: bool = Query(False, description="Treat q as a case-insensitive regular expression"),
    glob: Optional[str] = Query(None, description="Path suffix filter; leading '*' is ignored"),
    root: Path = Depends(get_workspace_root)
) -> List[SearchMatch]:
    """
    Search file names and contents in the workspace.

    ``glob`` is a literal suffix match (``*.py`` keeps paths ending in
    ``.py``), not full glob syntax.
    """
    results = await run_in_threadpool(search, root, q, regex, glob)
    logger.info(f"Search {q!r} (regex={regex}, glob={glob!r}) returned {len(results)} matches")
    return results
