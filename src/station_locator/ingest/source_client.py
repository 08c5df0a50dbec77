from __future__ import annotations

from typing import Any

import httpx

from ..core.errors import FetchFailed


class StationSourceClient:
    """Reads the published station list, a single JSON array."""

    def __init__(
        self,
        url: str,
        client: httpx.AsyncClient | None = None,
        timeout: float = 30.0,
    ) -> None:
        self.url = url
        self._client = client or httpx.AsyncClient(timeout=timeout)
        self._owns_client = client is None

    async def fetch_records(self) -> list[Any]:
        try:
            response = await self._client.get(self.url, follow_redirects=True)
            response.raise_for_status()
            payload = response.json()
        except httpx.HTTPError as exc:
            raise FetchFailed(
                f"could not fetch stations from {self.url}: {exc}"
            ) from exc
        except ValueError as exc:
            raise FetchFailed(f"stations feed is not valid JSON: {exc}") from exc

        if not isinstance(payload, list):
            raise FetchFailed(
                f"stations feed should be a JSON array, got {type(payload).__name__}"
            )
        return payload

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()
