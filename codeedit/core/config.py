"""
Configuration management for the code edit workspace server.
"""

import json
import logging
import os
from pathlib import Path
from typing import Annotated, List, Optional

from dotenv import load_dotenv
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict

from .workspace import METADATA_DIR_NAME

logger = logging.getLogger(__name__)

CHECKLIST_FILE_NAME = "checklist.json"


def load_environment() -> Optional[str]:
    """
    Load environment variables from ENV_FILE, or ``.env`` if present.

    Returns:
        The file that was loaded, or None
    """
    env_file = os.environ.get("ENV_FILE")
    if env_file and Path(env_file).exists():
        load_dotenv(env_file)
        logger.info(f"Loaded environment from {env_file} (from ENV_FILE)")
        return env_file
    if Path(".env").exists():
        load_dotenv(".env")
        logger.info("Loaded environment from .env")
        return ".env"
    return None


class Settings(BaseSettings):
    """Application settings. Every field can be set as CODEEDIT_<NAME>."""

    # Application settings
    app_name: str = "Code Edit Workspace Server"
    app_version: str = "0.1.0"
    debug: bool = Field(default=False)
    log_level: str = Field(default="INFO")

    # Workspace settings
    workspace_root: Path = Field(default_factory=Path.cwd, description="Directory being browsed and edited")

    # Server settings
    host: str = Field(default="127.0.0.1")
    port: int = Field(default=3000)
    cors_origins: Annotated[List[str], NoDecode] = Field(default=["*"])
    static_dir: Path = Field(default=Path("../web/dist"), description="Built web client, served at / if present")

    @field_validator('workspace_root', mode='after')
    @classmethod
    def canonicalize_workspace_root(cls, v: Path) -> Path:
        """Resolve the workspace root to an absolute path and require a directory."""
        resolved = Path(v).expanduser().resolve()
        if not resolved.is_dir():
            raise ValueError(f"Workspace directory not found: {v}")
        return resolved

    @field_validator('cors_origins', mode='before')
    @classmethod
    def parse_cors_origins(cls, v):
        """Parse CORS origins from various input formats."""
        if isinstance(v, str):
            # Try to parse as JSON first
            try:
                return json.loads(v)
            except json.JSONDecodeError:
                # If not valid JSON, treat as comma-separated string
                return [origin.strip() for origin in v.split(',') if origin.strip()]
        elif isinstance(v, list):
            return v
        else:
            return ["*"]

    @field_validator('log_level')
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate and normalize the log level name."""
        level = v.upper()
        if level not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
            raise ValueError(f"Unknown log level: {v}")
        return level

    @property
    def checklist_path(self) -> Path:
        """Location of the checklist file inside the workspace."""
        return self.workspace_root / METADATA_DIR_NAME / CHECKLIST_FILE_NAME

    model_config = SettingsConfigDict(
        env_prefix="CODEEDIT_",
        case_sensitive=False,
        validate_default=True,
        extra="ignore"
    )


_settings: Optional[Settings] = None


def get_settings() -> Settings:
    """Get application settings."""
    global _settings
    if _settings is None:
        load_environment()
        _settings = Settings()
    return _settings
