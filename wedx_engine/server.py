"""
Server launcher for the wedX Ritual Engine.

Host, port and reload behavior come from ``settings`` (and therefore from
the environment or ``.env``); command-line flags only override them.

Usage:
    wedx-engine                      # settings.HOST:settings.PORT, reload if DEBUG
    wedx-engine --port 9000 --no-reload
"""

import argparse
import logging
from typing import Any, Dict, List, Optional

import uvicorn

from .config import settings

logger = logging.getLogger(__name__)

APP_IMPORT_PATH = "wedx_engine.main:app"


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="wedx-engine",
        description=f"{settings.APP_NAME} {settings.APP_VERSION} ({settings.ENVIRONMENT})",
    )
    parser.add_argument("--host", default=settings.HOST, help=f"Bind address (default: {settings.HOST})")
    parser.add_argument("--port", type=int, default=settings.PORT, help=f"Bind port (default: {settings.PORT})")
    parser.add_argument(
        "--reload",
        action=argparse.BooleanOptionalAction,
        default=settings.DEBUG,
        help="Auto-reload on code changes (default: on when DEBUG)",
    )
    parser.add_argument(
        "--workers",
        type=int,
        default=1,
        help="Worker processes; ignored while reloading",
    )
    return parser


def uvicorn_options(args: argparse.Namespace) -> Dict[str, Any]:
    """Translate parsed arguments into ``uvicorn.run`` keyword arguments."""
    options: Dict[str, Any] = {
        "host": args.host,
        "port": args.port,
        "log_level": "debug" if settings.DEBUG else "info",
        "reload": args.reload,
    }
    if args.reload:
        options["reload_dirs"] = ["wedx_engine"]
    else:
        options["workers"] = args.workers
    return options


def main(argv: Optional[List[str]] = None) -> None:
    """Console entry point: parse flags and serve the FastAPI app."""
    args = build_parser().parse_args(argv)
    options = uvicorn_options(args)

    logging.basicConfig(level=logging.DEBUG if settings.DEBUG else logging.INFO)
    logger.info(
        f"Serving {settings.APP_NAME} on http://{args.host}:{args.port} "
        f"(reload={'on' if args.reload else 'off'}, environment={settings.ENVIRONMENT})"
    )

    uvicorn.run(APP_IMPORT_PATH, **options)


if __name__ == "__main__":
    main()
