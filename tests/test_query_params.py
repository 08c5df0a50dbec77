from __future__ import annotations

import pytest

from station_locator.core.errors import InvalidParameter, MissingParameter
from station_locator.core.query_params import (
    MAX_ROWS,
    page_offset,
    parse_coordinate,
    parse_limit,
    parse_page,
)


def test_parse_coordinate_reads_floats() -> None:
    coordinate = parse_coordinate("13.7563", "100.5018")

    assert coordinate.lat == 13.7563
    assert coordinate.lng == 100.5018


@pytest.mark.parametrize("lat, lng", [(None, "100.5"), ("13.7", None), ("", "100.5")])
def test_parse_coordinate_missing(lat: str | None, lng: str | None) -> None:
    with pytest.raises(MissingParameter):
        parse_coordinate(lat, lng)


@pytest.mark.parametrize(
    "lat, lng",
    [
        ("abc", "100.5"),
        ("13.7", "nan"),
        ("91", "100.5"),
        ("1_3.7", "100.5"),
        ("13.7", "1e999"),
    ],
)
def test_parse_coordinate_rejects_malformed(lat: str, lng: str) -> None:
    with pytest.raises(InvalidParameter):
        parse_coordinate(lat, lng)


def test_parse_limit_defaults_silently() -> None:
    assert parse_limit(None) == 10
    assert parse_limit("lots") == 10
    assert parse_limit("0") == 10
    assert parse_limit("3") == 3


def test_parse_page_defaults_silently() -> None:
    assert parse_page(None) == 1
    assert parse_page("-2") == 1
    assert parse_page("4") == 4


def test_page_offset() -> None:
    assert page_offset(1, 10) == 0
    assert page_offset(3, 5) == 10


def test_parse_coordinate_accepts_surrounding_whitespace() -> None:
    assert parse_coordinate(" 13.75 ", "+100.5").lng == 100.5


def test_parse_limit_defaults_on_oversized_digit_string() -> None:
    assert parse_limit("1" * 5000) == 10
    assert parse_page("9" * 5000) == 1


def test_parse_limit_caps_at_bigint() -> None:
    assert parse_limit("9" * 30) == MAX_ROWS


def test_page_offset_caps_at_bigint() -> None:
    assert page_offset(parse_page("9" * 19), 10) == MAX_ROWS
