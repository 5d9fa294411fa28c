"""
Launch the Programming Helper app under uvicorn.

Host, port and log level default to the PH_HOST / PH_PORT / PH_LOG_LEVEL
settings (environment or .env); command-line flags override them for a
single run.
"""

from __future__ import annotations

import argparse
import logging
import os
import sys
from pathlib import Path
from typing import Optional, Sequence

import uvicorn

LOG_LEVELS = ["critical", "error", "warning", "info", "debug", "trace"]
APP_PATH = "programming_helper.main:app"

logger = logging.getLogger("programming_helper.run_server")


def build_parser(settings) -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Run Programming Helper via uvicorn.")
    parser.add_argument("--host", default=settings.host, help=f"Bind address (default: {settings.host})")
    parser.add_argument("--port", type=int, default=settings.port, help=f"Port (default: {settings.port})")
    parser.add_argument(
        "--log-level",
        default=settings.log_level.lower(),
        choices=LOG_LEVELS,
        type=str.lower,
    )
    parser.add_argument("--reload", action="store_true", help="Restart on code changes (development only).")
    return parser


def parse_args(argv: Optional[Sequence[str]] = None, settings=None) -> argparse.Namespace:
    if settings is None:
        from programming_helper.config import get_settings

        settings = get_settings()
    return build_parser(settings).parse_args(argv)


def main(argv: Optional[Sequence[str]] = None) -> None:
    project_root = Path(__file__).resolve().parents[1]
    # Settings read .env from the working directory.
    os.chdir(project_root)
    sys.path.insert(0, str(project_root))

    from programming_helper.config import get_settings

    settings = get_settings()
    args = parse_args(argv, settings)
    if not settings.gemini_api_key:
        logger.warning("No Gemini API key configured; every tool will start disabled.")
    logger.info("Serving %s on http://%s:%d (model=%s)", APP_PATH, args.host, args.port, settings.model_name)

    uvicorn.run(
        APP_PATH,
        host=args.host,
        port=args.port,
        log_level=args.log_level,
        reload=args.reload,
    )


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s [%(name)s] %(message)s")
    main()
