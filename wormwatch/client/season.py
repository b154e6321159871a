"""Season status label shown on the stats panel."""

import enum
from collections.abc import Mapping, Sized
from datetime import date

# Months (inclusive) during which sightings are expected
SEASON_MONTHS = range(5, 8)


class SeasonStatus(str, enum.Enum):
    """Where the city is in the yearly cycle."""

    ACTIVE = "ACTIVE"
    WATCH = "WATCH"
    DORMANT = "DORMANT"


def season_status(active_reports: Sized, month: int | None = None) -> SeasonStatus:
    """ACTIVE or WATCH during May-July depending on active reports, else DORMANT."""
    if month is None:
        month = date.today().month
    if month not in SEASON_MONTHS:
        return SeasonStatus.DORMANT
    return SeasonStatus.ACTIVE if len(active_reports) > 0 else SeasonStatus.WATCH


def is_first_year(stats: Mapping | None) -> bool:
    """True until a previous season has recorded at least one report."""
    return not stats or not stats.get("last_season_total_reports")
