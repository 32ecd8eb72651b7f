"""
Command line entry point.

    python -m kbmedic migrate          # create tables and seed sample data
    python -m kbmedic serve --port 80  # run the HTTP API under uvicorn
"""

from __future__ import annotations

import argparse
import asyncio
from collections.abc import Sequence

import uvicorn

from kbmedic.config import get_config
from kbmedic.db import dispose_database, get_database
from kbmedic.logging import get_logger
from kbmedic.seed import migrate

logger = get_logger(__name__)


def build_parser() -> argparse.ArgumentParser:
    config = get_config()
    parser = argparse.ArgumentParser(prog="kbmedic", description=f"{config.store_name} order service")
    commands = parser.add_subparsers(dest="command", required=True)

    commands.add_parser("migrate", help="create tables and seed sample data")

    serve = commands.add_parser("serve", help="run the HTTP API")
    serve.add_argument("--host", default=config.host)
    serve.add_argument("--port", type=int, default=config.port)
    serve.add_argument("--reload", action="store_true")
    return parser


async def run_migrate() -> None:
    try:
        report = await migrate(get_database())
    finally:
        await dispose_database()
    print(f"Migration complete: {report.users_created} users, {report.products_created} products")


def main(argv: Sequence[str] | None = None) -> None:
    args = build_parser().parse_args(argv)

    match args.command:
        case "migrate":
            asyncio.run(run_migrate())
        case "serve":
            logger.info("Serving on {}:{}", args.host, args.port)
            uvicorn.run(
                "kbmedic.api:create_app",
                factory=True,
                host=args.host,
                port=args.port,
                reload=args.reload,
                log_level=get_config().log_level.lower(),
            )


__all__ = ("build_parser", "main")
