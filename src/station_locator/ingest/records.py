from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from ..core.errors import InvalidCoordinate, InvalidRecord
from ..core.normalize import normalize_number
from ..core.query_params import is_valid_coordinate
from ..db.models import StationRow

NULL_SENTINEL = "NULL"

_TRUE_VALUES = {"1", "true", "t", "yes", "y"}
_FALSE_VALUES = {"0", "false", "f", "no", "n"}


@dataclass(frozen=True)
class RawStation:
    """One feed record with every field optional, as received."""

    station_code: str | None = None
    name: str | None = None
    en_name: str | None = None
    th_short: str | None = None
    en_short: str | None = None
    chname: str | None = None
    controldivision: str | None = None
    exact_km: object = None
    exact_distance: object = None
    km: object = None
    station_class: str | None = None
    lat: object = None
    long: object = None
    active: object = None
    giveway: object = None
    dual_track: object = None
    comment: str | None = None

    @classmethod
    def from_payload(cls, payload: object) -> RawStation:
        if not isinstance(payload, dict):
            raise InvalidRecord(f"expected an object, got {type(payload).__name__}")
        return cls(
            station_code=_text(payload.get("station_code")),
            name=_text(payload.get("name")),
            en_name=_text(payload.get("en_name")),
            th_short=_text(payload.get("th_short")),
            en_short=_text(payload.get("en_short")),
            chname=_text(payload.get("chname")),
            controldivision=_text(payload.get("controldivision")),
            exact_km=payload.get("exact_km"),
            exact_distance=payload.get("exact_distance"),
            km=payload.get("km"),
            station_class=_text(payload.get("class")),
            lat=payload.get("lat"),
            long=payload.get("long"),
            active=payload.get("active"),
            giveway=payload.get("giveway"),
            dual_track=payload.get("dual_track"),
            comment=_text(payload.get("comment")),
        )

    def to_row(self) -> StationRow:
        if not self.station_code:
            raise InvalidRecord("missing station_code")

        lat = normalize_number(self.lat)
        lng = normalize_number(self.long)
        if lat is None or lng is None or not is_valid_coordinate(lat, lng):
            raise InvalidCoordinate(f"invalid lat/lng: {self.lat!r}, {self.long!r}")

        return StationRow(
            station_code=self.station_code,
            lat=lat,
            lng=lng,
            name=self.name,
            en_name=self.en_name,
            th_short=self.th_short,
            en_short=self.en_short,
            chname=self.chname,
            controldivision=self.controldivision,
            exact_km=normalize_number(self.exact_km),
            exact_distance=normalize_number(self.exact_distance),
            km=normalize_number(self.km),
            station_class=self.station_class,
            active=_flag(self.active),
            giveway=_flag(self.giveway),
            dual_track=_flag(self.dual_track),
            comment=None if self.comment == NULL_SENTINEL else self.comment,
        )


def parse_station(payload: object) -> StationRow:
    return RawStation.from_payload(payload).to_row()


def _text(value: Any) -> str | None:
    if value is None:
        return None
    return str(value)


def _flag(value: object) -> bool | None:
    if value is None:
        return None
    if isinstance(value, bool):
        return value
    if isinstance(value, (int, float)):
        return bool(value)
    lowered = str(value).strip().lower()
    if lowered in _TRUE_VALUES:
        return True
    if lowered in _FALSE_VALUES:
        return False
    return None
