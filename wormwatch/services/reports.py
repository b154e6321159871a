"""Report ingestion and retrieval."""

import logging
from dataclasses import dataclass
from datetime import datetime, timedelta

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from wormwatch.errors import ReportValidationError
from wormwatch.models import Report
from wormwatch.models.report import INTENSITY_MAX, INTENSITY_MIN, NOTES_MAX_LENGTH
from wormwatch.schemas.reports import ReportCreate

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class BoundingBox:
    """Inclusive latitude/longitude rectangle."""

    lat_min: float
    lat_max: float
    lng_min: float
    lng_max: float

    def contains(self, lat: float, lng: float) -> bool:
        # Written as chained comparisons so NaN is never inside
        return self.lat_min <= lat <= self.lat_max and self.lng_min <= lng <= self.lng_max


# Winnipeg metro area
CITY_BOUNDS = BoundingBox(lat_min=49.75, lat_max=50.05, lng_min=-97.35, lng_max=-96.95)


def validate_submission(payload: ReportCreate) -> ReportCreate:
    """Check a submission against the report invariants.

    Zero is a present value: only absent or null fields count as missing.
    Empty notes are normalized to None.
    """
    if payload.lat is None or payload.lng is None or payload.intensity is None:
        raise ReportValidationError("lat, lng, and intensity are required")

    if not INTENSITY_MIN <= payload.intensity <= INTENSITY_MAX:
        raise ReportValidationError(
            f"intensity must be between {INTENSITY_MIN} and {INTENSITY_MAX}"
        )

    if not CITY_BOUNDS.contains(payload.lat, payload.lng):
        raise ReportValidationError("Report location must be within Winnipeg")

    if payload.notes and len(payload.notes) > NOTES_MAX_LENGTH:
        raise ReportValidationError(f"Notes must be {NOTES_MAX_LENGTH} characters or less")

    return payload.model_copy(update={"notes": payload.notes or None})


async def create_report(
    db: AsyncSession,
    payload: ReportCreate,
    now: datetime,
    ttl: timedelta,
) -> Report:
    """Persist an already validated submission."""
    report = Report(
        lat=payload.lat,
        lng=payload.lng,
        intensity=payload.intensity,
        notes=payload.notes,
        created_at=now,
        expires_at=now + ttl,
    )
    db.add(report)
    await db.commit()
    await db.refresh(report)
    logger.info(f"Stored report {report.id} (intensity {report.intensity})")
    return report


async def list_active_reports(db: AsyncSession, now: datetime) -> list[Report]:
    """All unexpired reports, newest first."""
    result = await db.execute(
        select(Report)
        .where(Report.expires_at > now)
        .order_by(Report.created_at.desc(), Report.id.desc())
    )
    return list(result.scalars().all())
