"""Aggregate statistics over stored reports."""

from datetime import UTC, datetime, timedelta

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from wormwatch.models import Report
from wormwatch.schemas.reports import StatsSnapshot

WEEK = timedelta(days=7)

# Season window: May 1 (inclusive) to Aug 1 (exclusive)
SEASON_START_MONTH = 5
SEASON_END_MONTH = 8


def last_season_window(now: datetime) -> tuple[datetime, datetime]:
    """Start and end of the previous calendar year's season window, in UTC."""
    year = now.year - 1
    return (
        datetime(year, SEASON_START_MONTH, 1, tzinfo=UTC),
        datetime(year, SEASON_END_MONTH, 1, tzinfo=UTC),
    )


async def compute_snapshot(db: AsyncSession, now: datetime) -> StatsSnapshot:
    """Run the snapshot as a single read-only query of scalar subqueries."""
    week_start = now - WEEK
    season_start, season_end = last_season_window(now)
    in_week = Report.created_at >= week_start
    in_season = (Report.created_at >= season_start) & (Report.created_at < season_end)

    query = select(
        select(func.count(Report.id)).where(in_week).scalar_subquery()
        .label("total_reports_this_week"),
        select(func.coalesce(func.sum(Report.intensity), 0)).where(in_week).scalar_subquery()
        .label("total_intensity_this_week"),
        select(func.count(Report.id)).where(Report.expires_at > now).scalar_subquery()
        .label("total_active_reports"),
        select(func.count(Report.id)).scalar_subquery()
        .label("total_reports_all_time"),
        select(func.count(Report.id)).where(in_season).scalar_subquery()
        .label("last_season_total_reports"),
        select(func.max(Report.intensity)).where(in_season).scalar_subquery()
        .label("last_season_peak_intensity"),
        select(func.max(Report.created_at)).where(in_season).scalar_subquery()
        .label("last_season_last_report_date"),
    )

    row = (await db.execute(query)).one()
    return StatsSnapshot(
        total_reports_this_week=row.total_reports_this_week,
        total_intensity_this_week=row.total_intensity_this_week,
        total_active_reports=row.total_active_reports,
        total_reports_all_time=row.total_reports_all_time,
        last_season_total_reports=row.last_season_total_reports,
        last_season_peak_intensity=row.last_season_peak_intensity,
        last_season_last_report_date=row.last_season_last_report_date,
    )
