from __future__ import annotations

import pytest

from shift_tracker.common.validators import require_break_kind, require_coordinates, require_non_empty
from shift_tracker.core.enums import BreakKind
from shift_tracker.core.exceptions import ValidationError
from shift_tracker.shifts.model import GeoPoint


def test_coordinates_keep_longitude_latitude_order():
    point = require_coordinates(-122.4, 37.8)
    assert point == GeoPoint(longitude=-122.4, latitude=37.8)
    assert point.as_coordinates() == [-122.4, 37.8]


def test_numeric_strings_are_accepted():
    assert require_coordinates("10.5", "-3") == GeoPoint(longitude=10.5, latitude=-3.0)


@pytest.mark.parametrize(
    "longitude, latitude",
    [
        (None, 1.0),
        (1.0, None),
        ("", 1.0),
        ("abc", 1.0),
        (True, 1.0),
        (181.0, 0.0),
        (0.0, -90.5),
        (float("nan"), 0.0),
    ],
)
def test_bad_coordinates_are_rejected(longitude, latitude):
    with pytest.raises(ValidationError):
        require_coordinates(longitude, latitude)


def test_break_kind_is_case_insensitive():
    assert require_break_kind(" LUNCH ") == BreakKind.LUNCH
    assert require_break_kind(BreakKind.SMOKE) == BreakKind.SMOKE


@pytest.mark.parametrize("value", [None, "", "   ", "siesta"])
def test_bad_break_kinds_are_rejected(value):
    with pytest.raises(ValidationError):
        require_break_kind(value)


def test_require_non_empty_strips():
    assert require_non_empty("  x ", "field") == "x"
    with pytest.raises(ValidationError):
        require_non_empty(None, "field")
