from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from typing import Any, Protocol

from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncEngine, create_async_engine

from .models import metadata

logger = logging.getLogger(__name__)


class StatementRunner(Protocol):
    async def execute(self, sql: str, params: Mapping[str, object]) -> int: ...

    async def fetch_all(
        self, sql: str, params: Mapping[str, object]
    ) -> Sequence[Mapping[str, Any]]: ...


class Database:
    """Pooled async connection to the PostGIS store.

    One instance is created at process start and handed to the services that
    need it; ``dispose()`` releases the pool at shutdown.
    """

    def __init__(self, engine: AsyncEngine) -> None:
        self._engine = engine

    @classmethod
    def from_url(
        cls, url: str, pool_size: int = 5, max_overflow: int = 5
    ) -> Database:
        engine = create_async_engine(
            url,
            pool_size=pool_size,
            max_overflow=max_overflow,
            pool_pre_ping=True,
        )
        return cls(engine)

    async def connect(self) -> None:
        try:
            async with self._engine.connect() as conn:
                await conn.execute(text("select 1"))
        except Exception as exc:
            logger.error("DB connection error: %s", exc)
            raise
        logger.info("DB connected")

    async def execute(self, sql: str, params: Mapping[str, object]) -> int:
        async with self._engine.begin() as conn:
            result = await conn.execute(text(sql), dict(params))
            return result.rowcount

    async def fetch_all(
        self, sql: str, params: Mapping[str, object]
    ) -> Sequence[Mapping[str, Any]]:
        async with self._engine.connect() as conn:
            result = await conn.execute(text(sql), dict(params))
            return result.mappings().all()

    async def create_schema(self) -> None:
        async with self._engine.begin() as conn:
            await conn.execute(text("create extension if not exists postgis"))
            await conn.run_sync(metadata.create_all)
        logger.info("stations table ready")

    async def dispose(self) -> None:
        await self._engine.dispose()
