"""Heatmap projection of active reports."""

from collections.abc import Iterable, Mapping

from wormwatch.client.intensity import MAX_INTENSITY


def to_heatmap_points(reports: Iterable[Mapping]) -> list[tuple[float, float, float]]:
    """Map reports to (lat, lng, weight) with weight = intensity / 5."""
    return [(r["lat"], r["lng"], r["intensity"] / MAX_INTENSITY) for r in reports]
