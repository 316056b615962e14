"""
API routes for the code edit workspace server.
"""

from .health import router as health_router
from .search import router as search_router
from .files import router as files_router
from .checklist import router as checklist_router

__all__ = [
    "health_router",
    "search_router",
    "files_router",
    "checklist_router",
]
