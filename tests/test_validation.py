"""Tests for report submission validation."""

import pytest

from wormwatch.errors import ReportValidationError
from wormwatch.schemas.reports import ReportCreate
from wormwatch.services.reports import CITY_BOUNDS, validate_submission

VALID = {"lat": 49.9, "lng": -97.14, "intensity": 3}


class TestRequiredFields:
    """Tests for missing lat/lng/intensity."""

    @pytest.mark.parametrize("missing", ["lat", "lng", "intensity"])
    def test_missing_field_rejected(self, missing):
        """Each of lat, lng and intensity is required."""
        data = {k: v for k, v in VALID.items() if k != missing}
        with pytest.raises(ReportValidationError, match="required"):
            validate_submission(ReportCreate(**data))

    def test_zero_intensity_is_present_but_out_of_range(self):
        """Zero is a value, so it fails the range check rather than the required check."""
        with pytest.raises(ReportValidationError, match="between 1 and 5"):
            validate_submission(ReportCreate(**{**VALID, "intensity": 0}))

    def test_zero_coordinates_are_present_but_out_of_bounds(self):
        """Zero coordinates fail the bounds check rather than the required check."""
        with pytest.raises(ReportValidationError, match="within Winnipeg"):
            validate_submission(ReportCreate(lat=0, lng=0, intensity=3))


class TestIntensity:
    """Tests for the intensity range."""

    @pytest.mark.parametrize("intensity", [-3, 0, 6, 10, 100])
    def test_out_of_range_rejected(self, intensity):
        """Intensities outside 1-5 are rejected."""
        with pytest.raises(ReportValidationError):
            validate_submission(ReportCreate(**{**VALID, "intensity": intensity}))

    @pytest.mark.parametrize("intensity", [1, 2, 3, 4, 5])
    def test_in_range_accepted(self, intensity):
        """Every intensity from 1 to 5 is accepted."""
        result = validate_submission(ReportCreate(**{**VALID, "intensity": intensity}))
        assert result.intensity == intensity

    def test_intensity_checked_before_location(self):
        """A bad intensity is reported even when the location is also bad."""
        with pytest.raises(ReportValidationError, match="intensity"):
            validate_submission(ReportCreate(lat=45.0, lng=-80.0, intensity=9))


class TestBounds:
    """Tests for the city bounding box."""

    @pytest.mark.parametrize(
        "lat,lng",
        [
            (49.74, -97.14),
            (50.06, -97.14),
            (49.9, -97.36),
            (49.9, -96.94),
            (43.65, -79.38),
        ],
    )
    def test_outside_rejected(self, lat, lng):
        """Coordinates outside the box are rejected."""
        with pytest.raises(ReportValidationError, match="within Winnipeg"):
            validate_submission(ReportCreate(lat=lat, lng=lng, intensity=2))

    @pytest.mark.parametrize(
        "lat,lng",
        [(49.75, -97.35), (50.05, -96.95), (49.75, -96.95), (50.05, -97.35)],
    )
    def test_corners_accepted(self, lat, lng):
        """The box is inclusive on every edge."""
        result = validate_submission(ReportCreate(lat=lat, lng=lng, intensity=2))
        assert (result.lat, result.lng) == (lat, lng)

    def test_nan_is_outside(self):
        """NaN never falls inside the box."""
        assert CITY_BOUNDS.contains(float("nan"), -97.14) is False


class TestNotes:
    """Tests for the notes length limit."""

    def test_500_characters_accepted(self):
        """Notes of exactly 500 characters are accepted."""
        result = validate_submission(ReportCreate(**VALID, notes="x" * 500))
        assert len(result.notes) == 500

    def test_501_characters_rejected(self):
        """Notes of 501 characters are rejected."""
        with pytest.raises(ReportValidationError, match="500 characters"):
            validate_submission(ReportCreate(**VALID, notes="x" * 501))

    def test_empty_notes_normalized_to_none(self):
        """Empty notes are stored as null."""
        result = validate_submission(ReportCreate(**VALID, notes=""))
        assert result.notes is None

    def test_notes_optional(self):
        """Notes may be omitted."""
        result = validate_submission(ReportCreate(**VALID))
        assert result.notes is None
