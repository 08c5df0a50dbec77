from __future__ import annotations

from typing import cast

from .engine import StatementRunner
from .models import NearbyStation, StationRow

INSERT_STATION_SQL = (
    "insert into stations (station_code, name, en_name, th_short, en_short, chname, "
    "controldivision, exact_km, exact_distance, km, class, lat, lng, active, giveway, "
    "dual_track, comment, geom) values (:station_code, :name, :en_name, :th_short, "
    ":en_short, :chname, :controldivision, :exact_km, :exact_distance, :km, "
    ":station_class, :lat, :lng, :active, :giveway, :dual_track, :comment, "
    "ST_SetSRID(ST_MakePoint(CAST(:lng AS double precision), "
    "CAST(:lat AS double precision)), 4326)::geography) "
    "on conflict (station_code) do nothing"
)

# Order by the exact geography distance, then by code so equal distances page stably.
NEAREST_STATIONS_SQL = (
    "with origin as (select ST_SetSRID(ST_MakePoint(CAST(:lng AS double precision), "
    "CAST(:lat AS double precision)), 4326)::geography as point) "
    "select s.name, s.en_name, ST_Y(s.geom::geometry) as lat, "
    "ST_X(s.geom::geometry) as lng, ST_Distance(s.geom, origin.point) as distance "
    "from stations s, origin "
    "order by distance, s.station_code "
    "limit :limit offset :offset"
)


async def insert_station(runner: StatementRunner, row: StationRow) -> bool:
    """Insert ``row`` unless its code already exists. Returns True when inserted."""
    rowcount = await runner.execute(INSERT_STATION_SQL, row.as_params())
    return rowcount > 0


async def fetch_nearest_stations(
    runner: StatementRunner,
    lat: float,
    lng: float,
    limit: int,
    offset: int = 0,
) -> list[NearbyStation]:
    rows = await runner.fetch_all(
        NEAREST_STATIONS_SQL,
        {"lat": lat, "lng": lng, "limit": limit, "offset": offset},
    )
    return [
        NearbyStation(
            name=cast(str | None, row["name"]),
            en_name=cast(str | None, row["en_name"]),
            lat=float(row["lat"]),
            lng=float(row["lng"]),
            distance=float(row["distance"]),
        )
        for row in rows
    ]
