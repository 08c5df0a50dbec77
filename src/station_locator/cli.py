from __future__ import annotations

import argparse
import asyncio
import logging
from collections.abc import Sequence
from dataclasses import asdict

import uvicorn

from .config import Settings, database_url, db_max_overflow, db_pool_size, log_level
from .config import server_host, server_port, source_timeout_seconds
from .config import stations_source_url
from .core.errors import FetchFailed
from .db.engine import Database
from .ingest.source_client import StationSourceClient
from .services.ingestion_service import IngestSummary, StationIngestor
from .utils.log import configure_logging

logger = logging.getLogger(__name__)


def _database() -> Database:
    return Database.from_url(
        database_url(), pool_size=db_pool_size(), max_overflow=db_max_overflow()
    )


async def run_ingest() -> IngestSummary:
    database = _database()
    source = StationSourceClient(
        stations_source_url(), timeout=source_timeout_seconds()
    )
    try:
        await database.connect()
        return await StationIngestor(database, source.fetch_records).run()
    finally:
        await source.aclose()
        await database.dispose()


async def run_init_db() -> None:
    database = _database()
    try:
        await database.create_schema()
    finally:
        await database.dispose()


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="station-locator",
        description="Load railway stations and serve nearest-station queries.",
    )
    commands = parser.add_subparsers(dest="command", required=True)
    commands.add_parser("ingest", help="fetch the station feed once and store it")
    commands.add_parser(
        "init-db", help="create the PostGIS extension and stations table"
    )
    serve = commands.add_parser("serve", help="run the HTTP API")
    serve.add_argument("--host", default=server_host())
    serve.add_argument("--port", type=int, default=server_port())
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    configure_logging(log_level())

    if args.command == "ingest":
        try:
            summary = asyncio.run(run_ingest())
        except FetchFailed as exc:
            logger.error("Error fetching stations: %s", exc.message)
            return 1
        print(asdict(summary))
        return 0

    if args.command == "init-db":
        asyncio.run(run_init_db())
        return 0

    # Fail fast on a missing API_KEY before uvicorn imports the factory.
    Settings.from_env()
    uvicorn.run(
        "station_locator.app.main:create_app",
        factory=True,
        host=args.host,
        port=args.port,
    )
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
