from __future__ import annotations

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from ..api.routes import stations
from ..config import Settings
from ..core.errors import StationLocatorError
from ..db.engine import Database, StatementRunner
from ..ingest.source_client import StationSourceClient
from ..services.ingestion_service import RecordFetcher, StationIngestor
from ..services.proximity_service import ProximityService
from ..utils.log import configure_logging


def create_app(
    settings: Settings | None = None,
    database: StatementRunner | None = None,
    fetch_records: RecordFetcher | None = None,
) -> FastAPI:
    """Build the API. ``database`` and ``fetch_records`` replace the pooled
    store and the remote feed when given; otherwise the lifespan creates and
    releases them.
    """
    settings = settings or Settings.from_env()
    configure_logging(settings.log_level)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        owned_database: Database | None = None
        source: StationSourceClient | None = None

        store = database
        if store is None:
            owned_database = Database.from_url(
                settings.database_url,
                pool_size=settings.db_pool_size,
                max_overflow=settings.db_max_overflow,
            )
            await owned_database.connect()
            store = owned_database

        fetcher = fetch_records
        if fetcher is None:
            source = StationSourceClient(
                settings.stations_source_url,
                timeout=settings.source_timeout_seconds,
            )
            fetcher = source.fetch_records

        app.state.ingestor = StationIngestor(store, fetcher)
        app.state.proximity = ProximityService(store)
        try:
            yield
        finally:
            if source is not None:
                await source.aclose()
            if owned_database is not None:
                await owned_database.dispose()

    app = FastAPI(
        title="Stations API",
        description="API for stations data",
        version="1.0.0",
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.add_middleware(
        CORSMiddleware,
        allow_origins=list(settings.cors_origins),
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.include_router(stations.router)

    @app.exception_handler(StationLocatorError)
    async def station_locator_error(
        _: Request, exc: StationLocatorError
    ) -> JSONResponse:
        return JSONResponse(status_code=exc.status_code, content={"error": exc.message})

    @app.get("/")
    def root() -> dict[str, str]:
        return {"status": "ok", "service": "station-locator"}

    return app
