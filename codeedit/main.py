"""
FastAPI application factory for the code edit workspace server.
"""

import logging
from contextlib import asynccontextmanager
from datetime import datetime, timezone
from typing import Any, Dict, Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles

from .api.checklist import router as checklist_router
from .api.files import router as files_router
from .api.health import router as health_router
from .api.search import router as search_router
from .core.checklist import ChecklistStore
from .core.config import Settings, get_settings

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager."""
    settings: Settings = app.state.settings
    logger.info(f"Serving workspace at {settings.workspace_root}")
    yield
    logger.info("Shutting down code edit workspace server...")


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """
    Build the application for one workspace.

    Args:
        settings: Settings to use; defaults to ``get_settings()``
    """
    settings = settings or get_settings()

    app = FastAPI(
        title=settings.app_name,
        description="Search and edit files in a local workspace with conflict detection",
        version=settings.app_version,
        docs_url="/docs",
        redoc_url="/redoc",
        debug=settings.debug,
        lifespan=lifespan
    )
    app.state.settings = settings
    app.state.checklist = ChecklistStore(settings.checklist_path)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(health_router, prefix="/health", tags=["health"])
    app.include_router(search_router, prefix="/api", tags=["search"])
    app.include_router(files_router, prefix="/api", tags=["files"])
    app.include_router(checklist_router, prefix="/api", tags=["checklist"])

    @app.get("/api", tags=["root"])
    async def root() -> Dict[str, Any]:
        """Root endpoint with system information."""
        return {
            "name": settings.app_name,
            "version": settings.app_version,
            "workspace": str(settings.workspace_root),
            "docs": "/docs",
            "health": "/health",
            "status": "operational"
        }

    @app.exception_handler(Exception)
    async def global_exception_handler(request, exc):
        """Global exception handler."""
        logger.error(f"Unhandled exception: {exc}", exc_info=True)
        return JSONResponse(
            status_code=500,
            content={
                "error": "Internal server error",
                "message": "An unexpected error occurred",
                "timestamp": datetime.now(timezone.utc).isoformat().replace("+00:00", "Z")
            }
        )

    # Mounted last so the API routes take precedence
    if settings.static_dir.is_dir():
        app.mount("/", StaticFiles(directory=settings.static_dir, html=True), name="web")
        logger.info(f"Serving web client from {settings.static_dir}")
    else:
        logger.info(f"No web client at {settings.static_dir}; serving API only")

    return app
