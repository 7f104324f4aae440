from __future__ import annotations

from typing import Any, Optional

from ..core.enums import AdmissionMode
from ..core.exceptions import ValidationError
from .geo import GeoPoint


def require_non_empty(value: Any, field_name: str) -> str:
    if value is None or not str(value).strip():
        raise ValidationError(f"{field_name} is required")
    return str(value).strip()


def optional_str(value: Any) -> Optional[str]:
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def require_positive_int(value: Any, field_name: str) -> int:
    if isinstance(value, bool) or (isinstance(value, float) and not value.is_integer()):
        raise ValidationError(f"{field_name} must be a positive integer")
    try:
        number = int(value)
    except (TypeError, ValueError):
        raise ValidationError(f"{field_name} must be a positive integer") from None
    if number <= 0:
        raise ValidationError(f"{field_name} must be a positive integer")
    return number


def parse_mode(value: Any) -> AdmissionMode:
    if isinstance(value, AdmissionMode):
        return value
    try:
        return AdmissionMode(str(value or "").strip().lower())
    except ValueError:
        allowed = ", ".join(m.value for m in AdmissionMode)
        raise ValidationError(f"mode must be one of: {allowed}") from None


def _coordinate(value: Any, field_name: str, limit: float) -> float:
    try:
        number = float(value)
    except (TypeError, ValueError):
        raise ValidationError(f"{field_name} must be a number") from None
    if not -limit <= number <= limit:
        raise ValidationError(f"{field_name} out of range")
    return number


def parse_location(value: Any) -> Optional[GeoPoint]:
    """Accept a GeoJSON Point ([lon, lat]), a {latitude, longitude} dict, or a GeoPoint."""
    if value is None:
        return None
    if isinstance(value, GeoPoint):
        return value
    if not isinstance(value, dict):
        raise ValidationError("location must be an object")

    if "coordinates" in value:
        coords = value.get("coordinates")
        if not isinstance(coords, (list, tuple)) or len(coords) < 2:
            raise ValidationError("location.coordinates must be [longitude, latitude]")
        lon, lat = coords[0], coords[1]
    else:
        lat = value.get("latitude", value.get("lat"))
        lon = value.get("longitude", value.get("lon"))
        if lat is None or lon is None:
            raise ValidationError("location needs latitude and longitude")

    return GeoPoint(lat=_coordinate(lat, "latitude", 90.0), lon=_coordinate(lon, "longitude", 180.0))
