from __future__ import annotations

from pydantic import BaseModel


class NearbyStation(BaseModel):
    name: str | None = None
    en_name: str | None = None
    lat: float
    lng: float
    distance: float


class IngestSummary(BaseModel):
    fetched: int
    inserted: int
    existing: int
    skipped: int
    failed: int


class FetchResponse(BaseModel):
    message: str
    summary: IngestSummary


class ErrorResponse(BaseModel):
    error: str
