#!/usr/bin/env python3
"""
Command-line entry point: ``python -m codeedit [WORKSPACE]``.
"""

import argparse
import logging
import sys
from typing import List, Optional

import uvicorn
from pydantic import ValidationError

from .core.config import Settings, load_environment
from .main import create_app

logger = logging.getLogger("codeedit")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Browse, search and edit a local workspace")
    parser.add_argument("workspace", nargs="?", default=None,
                        help="Workspace directory (defaults to the current directory)")
    parser.add_argument("--host", default=None, help="Interface to bind")
    parser.add_argument("--port", type=int, default=None, help="Port to listen on")
    parser.add_argument("--static-dir", default=None, help="Built web client directory")
    parser.add_argument("--log-level", default=None, help="Logging level (DEBUG, INFO, ...)")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Parse arguments, resolve the workspace and run the server."""
    args = build_parser().parse_args(argv)
    load_environment()

    overrides = {
        "workspace_root": args.workspace,
        "host": args.host,
        "port": args.port,
        "static_dir": args.static_dir,
        "log_level": args.log_level,
    }
    try:
        settings = Settings(**{key: value for key, value in overrides.items() if value is not None})
    except ValidationError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    # Configure logging
    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    )
    logger.info(f"Scanning repository at: {settings.workspace_root}")
    logger.info(f"Server running at http://{settings.host}:{settings.port}")

    uvicorn.run(
        create_app(settings),
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower()
    )
    return 0


if __name__ == "__main__":
    sys.exit(main())
