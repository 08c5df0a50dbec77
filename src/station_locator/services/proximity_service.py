from __future__ import annotations

from ..core.query_params import DEFAULT_LIMIT, DEFAULT_PAGE, page_offset
from ..db.engine import StatementRunner
from ..db.models import NearbyStation
from ..db.queries import fetch_nearest_stations


class ProximityService:
    def __init__(self, database: StatementRunner) -> None:
        self._database = database

    async def nearest(
        self,
        lat: float,
        lng: float,
        limit: int = DEFAULT_LIMIT,
        offset: int = 0,
    ) -> list[NearbyStation]:
        """Stations ordered by geodesic distance from (lat, lng), nearest first."""
        return await fetch_nearest_stations(self._database, lat, lng, limit, offset)

    async def page(
        self,
        lat: float,
        lng: float,
        limit: int = DEFAULT_LIMIT,
        page: int = DEFAULT_PAGE,
    ) -> list[NearbyStation]:
        return await self.nearest(lat, lng, limit, page_offset(page, limit))
