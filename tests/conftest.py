from __future__ import annotations

from collections.abc import Mapping, Sequence
from math import asin, cos, radians, sin, sqrt
from typing import Any

from station_locator.db.queries import INSERT_STATION_SQL, NEAREST_STATIONS_SQL

EARTH_RADIUS_METERS = 6_371_008.8


def haversine_meters(lat1: float, lng1: float, lat2: float, lng2: float) -> float:
    dlat = radians(lat2 - lat1)
    dlng = radians(lng2 - lng1)
    a = sin(dlat / 2) ** 2
    a += cos(radians(lat1)) * cos(radians(lat2)) * sin(dlng / 2) ** 2
    return 2 * EARTH_RADIUS_METERS * asin(sqrt(a))


class FakeDatabase:
    """In-memory stand-in for the stations table.

    Inserts skip existing codes and nearest queries sort by great-circle
    distance then code, like the SQL they replace.
    """

    def __init__(self, failing_codes: Sequence[str] = ()) -> None:
        self.rows: dict[str, dict[str, Any]] = {}
        self.failing_codes = set(failing_codes)
        self.calls: list[tuple[str, dict[str, object]]] = []

    async def execute(self, sql: str, params: Mapping[str, object]) -> int:
        self.calls.append((sql, dict(params)))
        assert sql == INSERT_STATION_SQL
        code = str(params["station_code"])
        if code in self.failing_codes:
            raise RuntimeError("connection reset")
        if code in self.rows:
            return 0
        self.rows[code] = dict(params)
        return 1

    async def fetch_all(
        self, sql: str, params: Mapping[str, object]
    ) -> list[dict[str, Any]]:
        self.calls.append((sql, dict(params)))
        assert sql == NEAREST_STATIONS_SQL
        lat = float(params["lat"])
        lng = float(params["lng"])
        limit = int(params["limit"])
        offset = int(params["offset"])
        ranked = sorted(
            (
                (haversine_meters(lat, lng, row["lat"], row["lng"]), code, row)
                for code, row in self.rows.items()
            ),
            key=lambda item: (item[0], item[1]),
        )
        return [
            {
                "name": row["name"],
                "en_name": row["en_name"],
                "lat": row["lat"],
                "lng": row["lng"],
                "distance": distance,
            }
            for distance, _, row in ranked[offset : offset + limit]
        ]


def station_payload(
    code: str, lat: object, long: object, **extra: object
) -> dict[str, object]:
    payload: dict[str, object] = {
        "station_code": code,
        "name": f"สถานี {code}",
        "en_name": f"Station {code}",
        "lat": lat,
        "long": long,
    }
    payload.update(extra)
    return payload
