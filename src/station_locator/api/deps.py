from __future__ import annotations

import secrets

from fastapi import Request, Security
from fastapi.security import APIKeyHeader

from ..core.errors import Unauthorized
from ..services.ingestion_service import StationIngestor
from ..services.proximity_service import ProximityService

api_key_header = APIKeyHeader(name="x-api-key", auto_error=False)


def require_api_key(
    request: Request, key: str | None = Security(api_key_header)
) -> None:
    expected: str = request.app.state.settings.api_key
    if not key or not secrets.compare_digest(key.encode(), expected.encode()):
        raise Unauthorized()


def get_ingestor(request: Request) -> StationIngestor:
    return request.app.state.ingestor


def get_proximity_service(request: Request) -> ProximityService:
    return request.app.state.proximity
