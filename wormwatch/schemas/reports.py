"""Schemas for report submission, listing, statistics and admin deletion."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict


class ReportCreate(BaseModel):
    """Body of a report submission.

    Fields are optional at the schema level so that missing values are
    reported with the service's own error message instead of a schema error.
    """

    lat: float | None = None
    lng: float | None = None
    intensity: int | None = None
    notes: str | None = None


class ReportCreated(BaseModel):
    """Identifier and timestamp of a newly stored report."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    created_at: datetime


class ReportResponse(BaseModel):
    """An active report as returned to map clients."""

    model_config = ConfigDict(from_attributes=True)

    lat: float
    lng: float
    intensity: int
    notes: str | None
    created_at: datetime


class StatsSnapshot(BaseModel):
    """Weekly, all-time and previous-season aggregates."""

    total_reports_this_week: int
    total_intensity_this_week: int
    total_active_reports: int
    total_reports_all_time: int
    last_season_total_reports: int
    last_season_peak_intensity: int | None
    last_season_last_report_date: datetime | None


class DeleteResult(BaseModel):
    """Outcome of an admin bulk deletion."""

    deleted: int
    message: str


class ErrorResponse(BaseModel):
    """Error body shared by every endpoint."""

    error: str
