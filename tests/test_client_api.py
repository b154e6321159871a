"""Tests for the async API client."""

import json
from datetime import UTC, datetime

import httpx
import pytest

from wormwatch.client.api import DEFAULT_BASE_URL, ApiError, WormWatchClient


def _client(handler) -> WormWatchClient:
    return WormWatchClient(base_url="http://wormwatch.test", transport=httpx.MockTransport(handler))


async def test_get_reports():
    """get_reports returns the decoded list."""
    reports = [{"lat": 49.9, "lng": -97.1, "intensity": 2, "notes": None, "created_at": "x"}]

    def handler(request: httpx.Request) -> httpx.Response:
        assert request.method == "GET"
        assert request.url.path == "/api/reports"
        return httpx.Response(200, json=reports)

    async with _client(handler) as client:
        assert await client.get_reports() == reports


async def test_submit_report_sends_null_notes():
    """Empty notes are sent as null."""
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen.update(json.loads(request.content))
        return httpx.Response(201, json={"id": 7, "created_at": "2026-06-01T00:00:00Z"})

    async with _client(handler) as client:
        result = await client.submit_report(49.9, -97.1, 3, notes="")

    assert result["id"] == 7
    assert seen == {"lat": 49.9, "lng": -97.1, "intensity": 3, "notes": None}


async def test_error_response_raises_api_error():
    """Non-2xx responses raise ApiError with the server's message."""

    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(429, json={"error": "Too many reports."})

    async with _client(handler) as client:
        with pytest.raises(ApiError) as exc_info:
            await client.submit_report(49.9, -97.1, 3)

    assert exc_info.value.status_code == 429
    assert exc_info.value.message == "Too many reports."


async def test_error_without_json_body():
    """A non-JSON error body falls back to the reason phrase."""

    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(502, text="bad gateway")

    async with _client(handler) as client:
        with pytest.raises(ApiError) as exc_info:
            await client.get_stats()

    assert exc_info.value.status_code == 502
    assert exc_info.value.message == "Bad Gateway"


async def test_delete_reports_sends_secret_and_filters():
    """Only supplied filters are sent, with the admin header."""
    captured = {}

    def handler(request: httpx.Request) -> httpx.Response:
        captured["params"] = dict(request.url.params)
        captured["secret"] = request.headers.get("x-admin-secret")
        return httpx.Response(200, json={"deleted": 2, "message": "Deleted 2 reports."})

    since = datetime(2026, 5, 15, 20, 0, tzinfo=UTC)
    async with _client(handler) as client:
        result = await client.delete_reports("s3cret", since=since, lat_min=49.87)

    assert result["deleted"] == 2
    assert captured["secret"] == "s3cret"
    assert captured["params"] == {"since": since.isoformat(), "latMin": "49.87"}


def test_base_url_from_environment(monkeypatch):
    """WORMWATCH_API_URL is used when no base URL is given."""
    monkeypatch.setenv("WORMWATCH_API_URL", "https://api.example.com/")
    assert WormWatchClient().base_url == "https://api.example.com"


def test_default_base_url(monkeypatch):
    monkeypatch.delenv("WORMWATCH_API_URL", raising=False)
    assert WormWatchClient().base_url == DEFAULT_BASE_URL
