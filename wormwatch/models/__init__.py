"""SQLAlchemy ORM models."""

from wormwatch.models.report import Report

__all__ = [
    "Report",
]
