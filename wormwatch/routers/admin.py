"""Admin endpoints, gated by the shared admin secret."""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, Query
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from wormwatch.auth.middleware import require_admin_secret
from wormwatch.database import get_db
from wormwatch.errors import StoreError
from wormwatch.schemas.reports import DeleteResult, ErrorResponse
from wormwatch.services.admin import (
    ReportFilter,
    delete_reports,
    deletion_message,
    parse_since,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/admin", tags=["admin"])


@router.delete(
    "/reports",
    response_model=DeleteResult,
    responses={401: {"model": ErrorResponse}},
)
async def admin_delete_reports(
    since: Annotated[
        str | None, Query(description="Only delete reports created at or after this time")
    ] = None,
    lat_min: Annotated[float | None, Query(alias="latMin")] = None,
    lat_max: Annotated[float | None, Query(alias="latMax")] = None,
    lng_min: Annotated[float | None, Query(alias="lngMin")] = None,
    lng_max: Annotated[float | None, Query(alias="lngMax")] = None,
    db: AsyncSession = Depends(get_db),
    _admin: None = Depends(require_admin_secret),
) -> DeleteResult:
    """Delete reports matching every supplied filter.

    With no filters at all, every report is deleted.
    """
    report_filter = (
        ReportFilter()
        .since(parse_since(since))
        .within_bounds(lat_min=lat_min, lat_max=lat_max, lng_min=lng_min, lng_max=lng_max)
    )
    try:
        deleted = await delete_reports(db, report_filter)
    except SQLAlchemyError as e:
        logger.exception("Failed to delete reports")
        raise StoreError("Failed to delete reports") from e
    return DeleteResult(deleted=deleted, message=deletion_message(deleted))
