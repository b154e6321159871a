"""Filtered bulk deletion of reports."""

import logging
import operator
from collections.abc import Callable
from datetime import datetime
from typing import Any

from pydantic import TypeAdapter
from pydantic import ValidationError as PydanticValidationError
from sqlalchemy import ColumnElement, delete
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import InstrumentedAttribute

from wormwatch.errors import ReportValidationError
from wormwatch.models import Report

logger = logging.getLogger(__name__)


class ReportFilter:
    """Accumulates optional predicates on report columns.

    Each predicate is a (column, comparison, value) triple; values that were
    not supplied are skipped. All collected predicates are ANDed, and no
    predicates at all means every report matches.
    """

    def __init__(self) -> None:
        self._predicates: list[tuple[InstrumentedAttribute, Callable[[Any, Any], Any], Any]] = []

    def __len__(self) -> int:
        return len(self._predicates)

    def add(
        self,
        column: InstrumentedAttribute,
        comparison: Callable[[Any, Any], Any],
        value: Any,
    ) -> "ReportFilter":
        if value is not None:
            self._predicates.append((column, comparison, value))
        return self

    def since(self, created_after: datetime | None) -> "ReportFilter":
        """Lower bound on created_at, inclusive."""
        return self.add(Report.created_at, operator.ge, created_after)

    def within_bounds(
        self,
        lat_min: float | None = None,
        lat_max: float | None = None,
        lng_min: float | None = None,
        lng_max: float | None = None,
    ) -> "ReportFilter":
        """Inclusive bounding box; any edge may be left open."""
        return (
            self.add(Report.lat, operator.ge, lat_min)
            .add(Report.lat, operator.le, lat_max)
            .add(Report.lng, operator.ge, lng_min)
            .add(Report.lng, operator.le, lng_max)
        )

    def clauses(self) -> list[ColumnElement[bool]]:
        """Bound SQL expressions for every collected predicate."""
        return [comparison(column, value) for column, comparison, value in self._predicates]


_datetime_adapter = TypeAdapter(datetime)


def parse_since(value: str | None) -> datetime | None:
    """Parse the since filter; a blank value means the filter was not supplied."""
    if value is None or not value.strip():
        return None
    try:
        return _datetime_adapter.validate_python(value.strip())
    except PydanticValidationError as e:
        raise ReportValidationError("since must be an ISO 8601 timestamp") from e


def deletion_message(count: int) -> str:
    """Human-readable summary of a deletion."""
    if count == 0:
        return "No reports matched those filters."
    return f"Deleted {count} report{'s' if count != 1 else ''}."


async def delete_reports(db: AsyncSession, report_filter: ReportFilter) -> int:
    """Delete every report matching the filter and return the number removed."""
    result = await db.execute(delete(Report).where(*report_filter.clauses()))
    await db.commit()
    deleted = result.rowcount
    logger.info(f"Admin deleted {deleted} reports using {len(report_filter)} filters")
    return deleted
