from __future__ import annotations

from dataclasses import dataclass

from .errors import InvalidParameter, MissingParameter
from .normalize import parse_int_prefix, parse_number_literal

DEFAULT_LIMIT = 10
DEFAULT_PAGE = 1

# LIMIT and OFFSET are bigint in Postgres.
MAX_ROWS = 2**63 - 1


@dataclass(frozen=True)
class Coordinate:
    lat: float
    lng: float


def is_valid_coordinate(lat: float, lng: float) -> bool:
    return -90.0 <= lat <= 90.0 and -180.0 <= lng <= 180.0


def parse_coordinate(lat: str | None, lng: str | None) -> Coordinate:
    if not lat or not lng:
        raise MissingParameter()

    lat_value = parse_number_literal(lat)
    lng_value = parse_number_literal(lng)
    if lat_value is None or lng_value is None:
        raise InvalidParameter()
    if not is_valid_coordinate(lat_value, lng_value):
        raise InvalidParameter()
    return Coordinate(lat=lat_value, lng=lng_value)


def parse_limit(value: str | None) -> int:
    # Unparsable or non-positive values fall back to the default on purpose.
    limit = parse_int_prefix(value)
    if limit is None or limit <= 0:
        return DEFAULT_LIMIT
    return min(limit, MAX_ROWS)


def parse_page(value: str | None) -> int:
    page = parse_int_prefix(value)
    if page is None or page <= 0:
        return DEFAULT_PAGE
    return page


def page_offset(page: int, limit: int) -> int:
    return min((page - 1) * limit, MAX_ROWS)
