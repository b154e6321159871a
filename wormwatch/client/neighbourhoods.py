"""Named reference points for labelling report locations."""

from dataclasses import dataclass


@dataclass(frozen=True)
class Neighbourhood:
    """A neighbourhood and its approximate centre."""

    name: str
    lat: float
    lng: float


NEIGHBOURHOODS: list[Neighbourhood] = [
    Neighbourhood("The Forks / Exchange District", 49.9, -97.135),
    Neighbourhood("South Broadway", 49.87, -97.13),
    Neighbourhood("Osborne Village", 49.885, -97.135),
    Neighbourhood("River Heights", 49.88, -97.155),
    Neighbourhood("Wolseley", 49.895, -97.12),
    Neighbourhood("North End", 49.93, -97.12),
    Neighbourhood("West End", 49.9, -97.17),
    Neighbourhood("St. Boniface", 49.895, -97.08),
    Neighbourhood("Fort Rouge", 49.87, -97.1),
    Neighbourhood("Tuxedo", 49.9, -97.2),
    Neighbourhood("Charleswood", 49.9, -97.24),
    Neighbourhood("St. James-Assiniboia", 49.9, -97.22),
    Neighbourhood("Grandview", 49.91, -97.14),
    Neighbourhood("Elmwood", 49.92, -97.08),
    Neighbourhood("Transcona", 49.91, -97.0),
    Neighbourhood("St. Vital", 49.84, -97.1),
    Neighbourhood("Fort Garry", 49.83, -97.12),
    Neighbourhood("Kildonan", 49.95, -97.08),
    Neighbourhood("West Kildonan", 49.95, -97.17),
]


def nearest_neighbourhood(lat: float, lng: float) -> Neighbourhood:
    """Closest reference point by squared Euclidean distance in degrees.

    No longitude scaling is applied; at this latitude the ranking error is
    negligible. Ties go to the earlier entry.
    """
    return min(
        NEIGHBOURHOODS,
        key=lambda n: (lat - n.lat) ** 2 + (lng - n.lng) ** 2,
    )
