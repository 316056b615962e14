"""
Health check API endpoints.
"""

import time
from datetime import datetime, timezone
from typing import Any, Dict

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel

from ..core.config import Settings
from .dependencies import get_app_settings

router = APIRouter()


class HealthResponse(BaseModel):
    """Health check response model."""
    status: str
    timestamp: str
    uptime: float
    version: str
    checks: Dict[str, Any]


# Track application start time
start_time = time.time()


def _timestamp() -> str:
    return datetime.now(timezone.utc).isoformat().replace("+00:00", "Z")


@router.get("/", response_model=HealthResponse)
async def health_check(settings: Settings = Depends(get_app_settings)) -> HealthResponse:
    """Basic health check, including whether the workspace is still reachable."""
    workspace_ok = settings.workspace_root.is_dir()

    return HealthResponse(
        status="healthy" if workspace_ok else "degraded",
        timestamp=_timestamp(),
        uptime=time.time() - start_time,
        version=settings.app_version,
        checks={
            "api": "healthy",
            "workspace": "healthy" if workspace_ok else "missing"
        }
    )


@router.get("/ready")
async def readiness_check(settings: Settings = Depends(get_app_settings)) -> Dict[str, Any]:
    """Readiness check: the workspace directory must exist."""
    if not settings.workspace_root.is_dir():
        raise HTTPException(
            status_code=503,
            detail="Workspace directory is not available"
        )

    return {
        "status": "ready",
        "timestamp": _timestamp(),
        "uptime": time.time() - start_time
    }


@router.get("/live")
async def liveness_check() -> Dict[str, Any]:
    """Liveness check."""
    return {
        "status": "alive",
        "timestamp": _timestamp(),
        "uptime": time.time() - start_time
    }
