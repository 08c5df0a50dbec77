from __future__ import annotations

import asyncio
from typing import Any

import pytest

from conftest import FakeDatabase, station_payload
from station_locator.core.errors import FetchFailed
from station_locator.services.ingestion_service import StationIngestor


def _fetcher(records: list[Any]):
    async def fetch() -> list[Any]:
        return records

    return fetch


def test_ingest_is_idempotent() -> None:
    database = FakeDatabase()
    records = [
        station_payload("1001", "13.7", "100.5"),
        station_payload("1002", 14.0, 100.6),
    ]
    ingestor = StationIngestor(database, _fetcher(records))

    first = asyncio.run(ingestor.run())
    second = asyncio.run(ingestor.run())

    assert sorted(database.rows) == ["1001", "1002"]
    assert first.inserted == 2
    assert second.inserted == 0
    assert second.existing == 2


def test_ingest_keeps_first_written_row() -> None:
    database = FakeDatabase()
    asyncio.run(
        StationIngestor(
            database, _fetcher([station_payload("1001", 13.7, 100.5)])
        ).run()
    )
    asyncio.run(
        StationIngestor(
            database, _fetcher([station_payload("1001", 15.0, 101.0, name="renamed")])
        ).run()
    )

    assert database.rows["1001"]["lat"] == 13.7
    assert database.rows["1001"]["name"] == "สถานี 1001"


def test_ingest_skips_invalid_coordinate_and_continues() -> None:
    database = FakeDatabase()
    records = [
        station_payload("1001", 13.7, 100.5),
        station_payload("1002", "N/A", 100.6),
        station_payload("1003", 14.1, 100.7),
    ]

    summary = asyncio.run(StationIngestor(database, _fetcher(records)).run())

    assert sorted(database.rows) == ["1001", "1003"]
    assert summary.fetched == 3
    assert summary.skipped == 1


def test_ingest_isolates_write_failures() -> None:
    database = FakeDatabase(failing_codes=["1002"])
    records = [
        station_payload("1001", 13.7, 100.5),
        station_payload("1002", 14.0, 100.6),
        station_payload("1003", 14.1, 100.7),
    ]

    summary = asyncio.run(StationIngestor(database, _fetcher(records)).run())

    assert sorted(database.rows) == ["1001", "1003"]
    assert summary.failed == 1
    assert summary.inserted == 2


def test_ingest_stores_null_comment_as_absent() -> None:
    database = FakeDatabase()
    records = [station_payload("1001", 13.7, 100.5, comment="NULL")]

    asyncio.run(StationIngestor(database, _fetcher(records)).run())

    assert database.rows["1001"]["comment"] is None


def test_ingest_skips_non_object_records() -> None:
    database = FakeDatabase()
    records = ["garbage", station_payload("1001", 13.7, 100.5)]

    summary = asyncio.run(StationIngestor(database, _fetcher(records)).run())

    assert list(database.rows) == ["1001"]
    assert summary.skipped == 1


def test_ingest_aborts_when_fetch_fails() -> None:
    database = FakeDatabase()

    async def failing_fetch() -> list[Any]:
        raise FetchFailed("feed unavailable")

    with pytest.raises(FetchFailed):
        asyncio.run(StationIngestor(database, failing_fetch).run())
    assert database.calls == []
