"""Report model for insect sightings."""

from datetime import datetime

from sqlalchemy import CheckConstraint, DateTime, Float, Integer, SmallInteger, Text
from sqlalchemy.orm import Mapped, mapped_column

from wormwatch.database import Base, utc_now

# Fixed validation constants
INTENSITY_MIN = 1
INTENSITY_MAX = 5
NOTES_MAX_LENGTH = 500


class Report(Base):
    """A single geotagged sighting submitted by a resident."""

    __tablename__ = "reports"
    __table_args__ = (
        CheckConstraint(
            f"intensity BETWEEN {INTENSITY_MIN} AND {INTENSITY_MAX}",
            name="ck_reports_intensity_range",
        ),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    # Location (degrees)
    lat: Mapped[float] = mapped_column(Float, nullable=False)
    lng: Mapped[float] = mapped_column(Float, nullable=False)

    intensity: Mapped[int] = mapped_column(SmallInteger, nullable=False)
    notes: Mapped[str | None] = mapped_column(Text)

    # Timestamps
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=utc_now,
        nullable=False,
        index=True,
    )
    expires_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        index=True,
    )
