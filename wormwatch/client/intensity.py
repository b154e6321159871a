"""Display metadata for the five intensity levels."""

from dataclasses import dataclass


@dataclass(frozen=True)
class IntensityLevel:
    """Label and description shown for one intensity rating."""

    level: int
    label: str
    emoji: str
    description: str


INTENSITY_LEVELS: list[IntensityLevel] = [
    IntensityLevel(1, "A Few Stragglers", "🐛", "Just a handful, easy to ignore"),
    IntensityLevel(2, "Noticeable", "🐛🐛", "You noticed them. They noticed you."),
    IntensityLevel(3, "Getting Gross", "😬", "Unpleasant. Avoid if possible."),
    IntensityLevel(4, "Full Infestation", "😨", "Stay away. Seriously."),
    IntensityLevel(5, "Plague Level", "☠️", "Do not go outside."),
]

MAX_INTENSITY = INTENSITY_LEVELS[-1].level

_BY_LEVEL = {lvl.level: lvl for lvl in INTENSITY_LEVELS}


def get_intensity_level(level: int) -> IntensityLevel | None:
    """Look up the display entry for a rating, or None if out of range."""
    return _BY_LEVEL.get(level)
