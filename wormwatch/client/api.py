"""Thin async HTTP client for the Worm Watch API."""

import logging
import os
from datetime import datetime
from typing import Any

import httpx

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "http://localhost:3000"


class ApiError(Exception):
    """Non-success response from the API."""

    def __init__(self, status_code: int, message: str):
        super().__init__(f"{status_code}: {message}")
        self.status_code = status_code
        self.message = message


class WormWatchClient:
    """Fetches reports and stats, and submits new sightings.

    Use as an async context manager, or call ``aclose()`` when done.
    """

    def __init__(
        self,
        base_url: str | None = None,
        timeout: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.base_url = (
            base_url or os.getenv("WORMWATCH_API_URL") or DEFAULT_BASE_URL
        ).rstrip("/")
        self._client = httpx.AsyncClient(
            base_url=self.base_url, timeout=timeout, transport=transport
        )

    async def __aenter__(self) -> "WormWatchClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._client.aclose()

    async def _request(self, method: str, path: str, **kwargs) -> Any:
        response = await self._client.request(method, path, **kwargs)
        if response.is_success:
            return response.json()

        try:
            message = response.json().get("error", response.reason_phrase)
        except ValueError:
            message = response.reason_phrase
        logger.warning(f"{method} {path} failed with {response.status_code}: {message}")
        raise ApiError(response.status_code, message)

    async def get_reports(self) -> list[dict]:
        """All active reports, newest first."""
        return await self._request("GET", "/api/reports")

    async def submit_report(
        self, lat: float, lng: float, intensity: int, notes: str | None = None
    ) -> dict:
        """Submit a sighting; returns its id and created_at."""
        return await self._request(
            "POST",
            "/api/reports",
            json={"lat": lat, "lng": lng, "intensity": intensity, "notes": notes or None},
        )

    async def get_stats(self) -> dict:
        """Weekly, all-time and last-season statistics."""
        return await self._request("GET", "/api/stats")

    async def delete_reports(
        self,
        admin_secret: str,
        since: datetime | None = None,
        lat_min: float | None = None,
        lat_max: float | None = None,
        lng_min: float | None = None,
        lng_max: float | None = None,
    ) -> dict:
        """Delete reports matching every given filter. No filters deletes everything."""
        params = {
            "since": since.isoformat() if since else None,
            "latMin": lat_min,
            "latMax": lat_max,
            "lngMin": lng_min,
            "lngMax": lng_max,
        }
        return await self._request(
            "DELETE",
            "/api/admin/reports",
            params={k: v for k, v in params.items() if v is not None},
            headers={"x-admin-secret": admin_secret},
        )
