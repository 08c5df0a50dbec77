from __future__ import annotations

import logging
from collections.abc import Awaitable
from dataclasses import asdict

from fastapi import APIRouter, Depends, Query

from ...core.errors import FetchFailed, InternalError, StationLocatorError
from ...core.query_params import parse_coordinate, parse_limit, parse_page
from ...db.models import NearbyStation
from ...services.ingestion_service import StationIngestor
from ...services.proximity_service import ProximityService
from ..deps import get_ingestor, get_proximity_service, require_api_key
from ..schemas.stations import ErrorResponse, FetchResponse
from ..schemas.stations import NearbyStation as NearbyStationSchema

logger = logging.getLogger(__name__)

_LAT_DOC = "Latitude in WGS84 degrees, a number in [-90, 90]. Required."
_LNG_DOC = "Longitude in WGS84 degrees, a number in [-180, 180]. Required."
_LIMIT_DOC = "Maximum stations to return, integer. Unparsable values mean 10."
_PAGE_DOC = "1-based page number, integer. Unparsable values mean 1."

_ERRORS = {
    400: {"model": ErrorResponse, "description": "lat,lng required"},
    401: {"model": ErrorResponse, "description": "Unauthorized"},
    500: {"model": ErrorResponse, "description": "Server error"},
}

router = APIRouter(
    prefix="/stations",
    tags=["Stations"],
    dependencies=[Depends(require_api_key)],
)


@router.post(
    "/fetch",
    response_model=FetchResponse,
    summary="Load station data from external API to DB",
    responses={401: _ERRORS[401], 500: _ERRORS[500]},
)
async def fetch_stations(
    ingestor: StationIngestor = Depends(get_ingestor),
) -> FetchResponse:
    try:
        summary = await ingestor.run()
    except FetchFailed as exc:
        logger.error("Error fetching stations: %s", exc.message)
        raise FetchFailed() from exc
    except Exception as exc:
        logger.exception("Error fetching or inserting stations")
        raise FetchFailed() from exc
    return FetchResponse(message="Stations loaded from API", summary=asdict(summary))


@router.get(
    "/near",
    response_model=list[NearbyStationSchema],
    summary="Find stations near lat/lng",
    responses=_ERRORS,
)
async def near(
    lat: str | None = Query(None, description=_LAT_DOC, examples=["13.7563"]),
    lng: str | None = Query(None, description=_LNG_DOC, examples=["100.5018"]),
    limit: str | None = Query(None, description=_LIMIT_DOC, examples=["10"]),
    service: ProximityService = Depends(get_proximity_service),
) -> list[NearbyStation]:
    coordinate = parse_coordinate(lat, lng)
    return await _run_query(
        service.nearest(coordinate.lat, coordinate.lng, parse_limit(limit))
    )


@router.get(
    "/near/paginate",
    response_model=list[NearbyStationSchema],
    summary="Find stations near lat/lng with pagination",
    responses=_ERRORS,
)
async def near_paginate(
    lat: str | None = Query(None, description=_LAT_DOC, examples=["13.7563"]),
    lng: str | None = Query(None, description=_LNG_DOC, examples=["100.5018"]),
    limit: str | None = Query(None, description=_LIMIT_DOC, examples=["10"]),
    page: str | None = Query(None, description=_PAGE_DOC, examples=["1"]),
    service: ProximityService = Depends(get_proximity_service),
) -> list[NearbyStation]:
    coordinate = parse_coordinate(lat, lng)
    return await _run_query(
        service.page(
            coordinate.lat,
            coordinate.lng,
            parse_limit(limit),
            parse_page(page),
        )
    )


async def _run_query(query: Awaitable[list[NearbyStation]]) -> list[NearbyStation]:
    try:
        return await query
    except StationLocatorError:
        raise
    except Exception as exc:
        logger.exception("nearest station query failed")
        raise InternalError() from exc
