"""Aggregate statistics endpoint."""

import logging

from fastapi import APIRouter, Depends
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from wormwatch.database import get_db, utc_now
from wormwatch.errors import StoreError
from wormwatch.schemas.reports import StatsSnapshot
from wormwatch.services.stats import compute_snapshot

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/stats", tags=["stats"])


@router.get("", response_model=StatsSnapshot)
async def get_stats(db: AsyncSession = Depends(get_db)) -> StatsSnapshot:
    """Weekly summary plus all-time and last-season figures.

    Last-season fields are zero/null until a full season has been recorded,
    which is how clients detect their first year of operation.
    """
    try:
        return await compute_snapshot(db, utc_now())
    except SQLAlchemyError as e:
        logger.exception("Failed to fetch stats")
        raise StoreError("Failed to fetch stats") from e
