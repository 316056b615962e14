"""
FastAPI dependencies shared by the routers.
"""

from pathlib import Path

from fastapi import Request

from ..core.checklist import ChecklistStore
from ..core.config import Settings


def get_app_settings(request: Request) -> Settings:
    """Settings the running application was created with."""
    return request.app.state.settings


def get_workspace_root(request: Request) -> Path:
    """Canonical workspace root for this process."""
    return request.app.state.settings.workspace_root


def get_checklist_store(request: Request) -> ChecklistStore:
    """Checklist store shared by all requests."""
    return request.app.state.checklist
