"""Prometheus metrics endpoint."""

import logging

from fastapi import APIRouter, Depends
from fastapi.responses import PlainTextResponse
from prometheus_client import CONTENT_TYPE_LATEST, CollectorRegistry, Gauge, generate_latest
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from wormwatch.database import get_db, utc_now
from wormwatch.errors import StoreError
from wormwatch.schemas.reports import StatsSnapshot
from wormwatch.services.stats import compute_snapshot

logger = logging.getLogger(__name__)

router = APIRouter(tags=["metrics"])

# (metric name, help text, snapshot field)
SNAPSHOT_GAUGES = [
    ("wormwatch_active_reports", "Reports that have not yet expired", "total_active_reports"),
    ("wormwatch_reports_this_week", "Reports created in the last 7 days", "total_reports_this_week"),
    (
        "wormwatch_intensity_this_week",
        "Sum of intensities reported in the last 7 days",
        "total_intensity_this_week",
    ),
    ("wormwatch_reports_all_time", "Reports currently stored", "total_reports_all_time"),
    (
        "wormwatch_last_season_reports",
        "Reports created during last year's season window",
        "last_season_total_reports",
    ),
]


def render_metrics(snapshot: StatsSnapshot) -> bytes:
    """Render a stats snapshot in Prometheus text format."""
    registry = CollectorRegistry()
    for name, description, field in SNAPSHOT_GAUGES:
        gauge = Gauge(name, description, registry=registry)
        gauge.set(getattr(snapshot, field))

    if snapshot.last_season_peak_intensity is not None:
        peak = Gauge(
            "wormwatch_last_season_peak_intensity",
            "Highest intensity reported during last year's season window",
            registry=registry,
        )
        peak.set(snapshot.last_season_peak_intensity)

    return generate_latest(registry)


@router.get("/metrics", response_class=PlainTextResponse)
async def metrics(db: AsyncSession = Depends(get_db)) -> PlainTextResponse:
    """Expose report statistics for Prometheus scraping."""
    try:
        snapshot = await compute_snapshot(db, utc_now())
    except SQLAlchemyError as e:
        logger.exception("Failed to collect metrics")
        raise StoreError("Failed to collect metrics") from e
    return PlainTextResponse(content=render_metrics(snapshot), media_type=CONTENT_TYPE_LATEST)
