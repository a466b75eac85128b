from __future__ import annotations

import math
from typing import Any

from ..core.constants import MAX_LATITUDE, MAX_LONGITUDE, MIN_LATITUDE, MIN_LONGITUDE
from ..core.enums import BreakKind
from ..core.exceptions import ValidationError
from ..shifts.model import GeoPoint


def require_non_empty(value: Any, field_name: str) -> str:
    if value is None or not str(value).strip():
        raise ValidationError(f"Please provide {field_name}")
    return str(value).strip()


def _as_coordinate(value: Any, field_name: str, low: float, high: float) -> float:
    # bool is an int subclass; true/false is never a coordinate
    if isinstance(value, bool):
        raise ValidationError(f"{field_name} must be a number")
    try:
        number = float(value)
    except (TypeError, ValueError):
        raise ValidationError(f"{field_name} must be a number") from None
    if math.isnan(number) or not low <= number <= high:
        raise ValidationError(f"{field_name} must be between {low:g} and {high:g}")
    return number


def require_coordinates(longitude: Any, latitude: Any) -> GeoPoint:
    """Validate a caller-supplied (longitude, latitude) pair.

    Zero is a valid coordinate; only absent values count as missing.
    """
    if longitude is None or latitude is None or longitude == "" or latitude == "":
        raise ValidationError("Please provide location coordinates")
    return GeoPoint(
        longitude=_as_coordinate(longitude, "longitude", MIN_LONGITUDE, MAX_LONGITUDE),
        latitude=_as_coordinate(latitude, "latitude", MIN_LATITUDE, MAX_LATITUDE),
    )


def require_break_kind(value: Any) -> BreakKind:
    if isinstance(value, BreakKind):
        return value
    raw = require_non_empty(value, "break type").lower()
    try:
        return BreakKind(raw)
    except ValueError:
        allowed = ", ".join(k.value for k in BreakKind)
        raise ValidationError(f"Unknown break type '{raw}' (allowed: {allowed})") from None
