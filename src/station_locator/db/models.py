from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any

from geoalchemy2 import Geography
from sqlalchemy import Boolean, Column, Float, MetaData, String, Table, Text

metadata = MetaData()

stations = Table(
    "stations",
    metadata,
    Column("station_code", String, primary_key=True),
    Column("name", Text),
    Column("en_name", Text),
    Column("th_short", Text),
    Column("en_short", Text),
    Column("chname", Text),
    Column("controldivision", Text),
    Column("exact_km", Float),
    Column("exact_distance", Float),
    Column("km", Float),
    Column("class", Text),
    Column("lat", Float, nullable=False),
    Column("lng", Float, nullable=False),
    Column("active", Boolean),
    Column("giveway", Boolean),
    Column("dual_track", Boolean),
    Column("comment", Text),
    # geoalchemy2 adds a GiST index for spatial columns by default.
    Column("geom", Geography(geometry_type="POINT", srid=4326), nullable=False),
)


@dataclass(frozen=True)
class StationRow:
    station_code: str
    lat: float
    lng: float
    name: str | None = None
    en_name: str | None = None
    th_short: str | None = None
    en_short: str | None = None
    chname: str | None = None
    controldivision: str | None = None
    exact_km: float | None = None
    exact_distance: float | None = None
    km: float | None = None
    station_class: str | None = None
    active: bool | None = None
    giveway: bool | None = None
    dual_track: bool | None = None
    comment: str | None = None

    def as_params(self) -> dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class NearbyStation:
    name: str | None
    en_name: str | None
    lat: float
    lng: float
    distance: float
