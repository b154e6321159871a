"""Client for the Worm Watch API and the map/panel helpers built on it."""

from wormwatch.client.api import ApiError, WormWatchClient
from wormwatch.client.heatmap import to_heatmap_points
from wormwatch.client.intensity import INTENSITY_LEVELS, get_intensity_level
from wormwatch.client.neighbourhoods import NEIGHBOURHOODS, nearest_neighbourhood
from wormwatch.client.season import SeasonStatus, is_first_year, season_status

__all__ = [
    "ApiError",
    "INTENSITY_LEVELS",
    "NEIGHBOURHOODS",
    "SeasonStatus",
    "WormWatchClient",
    "get_intensity_level",
    "is_first_year",
    "nearest_neighbourhood",
    "season_status",
    "to_heatmap_points",
]
