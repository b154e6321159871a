"""Report submission and listing endpoints."""

import logging
from datetime import timedelta

from fastapi import APIRouter, Depends, Request, status
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from wormwatch.config import Settings, get_settings
from wormwatch.database import get_db, utc_now
from wormwatch.errors import RateLimitError, StoreError
from wormwatch.schemas.reports import ErrorResponse, ReportCreate, ReportCreated, ReportResponse
from wormwatch.services.rate_limiter import RateLimiter, get_rate_limiter
from wormwatch.services.reports import create_report, list_active_reports, validate_submission

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/reports", tags=["reports"])


def client_address(request: Request, settings: Settings) -> str:
    """Key used to rate-limit a request's sender."""
    if settings.trust_forwarded_for:
        forwarded = request.headers.get("x-forwarded-for")
        if forwarded:
            return forwarded.split(",")[0].strip()
    if request.client:
        return request.client.host
    return "unknown"


@router.get("", response_model=list[ReportResponse])
async def get_reports(db: AsyncSession = Depends(get_db)) -> list[ReportResponse]:
    """List all non-expired reports, newest first."""
    try:
        reports = await list_active_reports(db, utc_now())
    except SQLAlchemyError as e:
        logger.exception("Failed to fetch reports")
        raise StoreError("Failed to fetch reports") from e
    return [ReportResponse.model_validate(r) for r in reports]


@router.post(
    "",
    response_model=ReportCreated,
    status_code=status.HTTP_201_CREATED,
    responses={400: {"model": ErrorResponse}, 429: {"model": ErrorResponse}},
)
async def submit_report(
    payload: ReportCreate,
    request: Request,
    db: AsyncSession = Depends(get_db),
    limiter: RateLimiter = Depends(get_rate_limiter),
    settings: Settings = Depends(get_settings),
) -> ReportCreated:
    """Submit a new sighting."""
    report_data = validate_submission(payload)

    client = client_address(request, settings)
    if not await limiter.check_and_record(client):
        logger.info(f"Rate limit reached for {client}")
        raise RateLimitError("Too many reports. Please wait before submitting again.")

    try:
        report = await create_report(
            db,
            report_data,
            now=utc_now(),
            ttl=timedelta(hours=settings.report_ttl_hours),
        )
    except SQLAlchemyError as e:
        logger.exception("Failed to submit report")
        await limiter.release(client)
        raise StoreError("Failed to submit report") from e
    return ReportCreated.model_validate(report)
