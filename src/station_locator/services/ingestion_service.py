from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from typing import Any

from ..core.errors import InvalidCoordinate, InvalidRecord, WriteFailed
from ..db.engine import StatementRunner
from ..db.queries import insert_station
from ..ingest.records import parse_station

logger = logging.getLogger(__name__)

RecordFetcher = Callable[[], Awaitable[list[Any]]]


@dataclass(frozen=True)
class IngestSummary:
    fetched: int
    inserted: int
    existing: int
    skipped: int
    failed: int


class StationIngestor:
    """Loads the remote station list into the store, one record at a time.

    A bad record or a failed write only costs that record; a failed fetch
    raises ``FetchFailed`` and nothing is written.
    """

    def __init__(self, database: StatementRunner, fetch_records: RecordFetcher) -> None:
        self._database = database
        self._fetch_records = fetch_records

    async def run(self) -> IngestSummary:
        records = await self._fetch_records()
        logger.info("Start inserting stations from API: %d records", len(records))

        inserted = existing = skipped = failed = 0
        for payload in records:
            try:
                if await self._ingest_one(payload):
                    inserted += 1
                else:
                    existing += 1
            except InvalidCoordinate as exc:
                skipped += 1
                logger.warning("skip station %s: %s", _code_of(payload), exc.message)
            except InvalidRecord as exc:
                skipped += 1
                logger.warning("skip record: %s", exc.message)
            except WriteFailed as exc:
                failed += 1
                logger.error(
                    "Error inserting station_code %s: %s", exc.station_code, exc.message
                )

        summary = IngestSummary(
            fetched=len(records),
            inserted=inserted,
            existing=existing,
            skipped=skipped,
            failed=failed,
        )
        logger.info("Finished inserting stations from API: %s", summary)
        return summary

    async def _ingest_one(self, payload: object) -> bool:
        row = parse_station(payload)
        try:
            return await insert_station(self._database, row)
        except Exception as exc:
            raise WriteFailed(row.station_code, str(exc)) from exc


def _code_of(payload: object) -> object:
    if isinstance(payload, dict):
        return payload.get("station_code")
    return None
