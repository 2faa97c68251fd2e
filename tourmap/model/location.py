"""Canonical geographic coordinate value."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any, Tuple

from tourmap.exceptions import InvalidCoordinate

MIN_LNG = -180.0
MAX_LNG = 180.0
MIN_LAT = -85.05115
MAX_LAT = 85.0

# Locations are compared on values rounded to this many decimals
PRECISION = 5
_SCALE = 10**PRECISION


def canonicalize(value: float) -> float:
    """Round `value` to `PRECISION` decimals, halves away from zero.

    Args:
        value: Raw coordinate component.

    Returns:
        The canonical coordinate component.
    """
    scaled = abs(value) * _SCALE
    rounded = math.floor(scaled + 0.5)
    if rounded == 0:
        return 0.0
    return math.copysign(rounded, value) / _SCALE


def _as_float(value: Any, name: str) -> float:
    try:
        result = float(value)
    except (TypeError, ValueError) as exc:
        raise InvalidCoordinate(f"{name} must be a number, got {value!r}") from exc
    if math.isnan(result):
        raise InvalidCoordinate(f"{name} must not be NaN")
    return result


@dataclass(frozen=True, order=True, init=False)
class Location:
    """A point on the map identified by its canonical coordinates.

    Coordinates are checked against the world bounds and then rounded to five
    decimals, so two Locations differing only beyond the fifth decimal compare
    and hash equal. Instances are ordered by ``(lng, lat)``.

    Attributes:
        lng: Canonical longitude in [-180, 180].
        lat: Canonical latitude in [-85.05115, 85].
    """

    lng: float
    lat: float

    def __init__(self, lng: float, lat: float) -> None:
        lng = _as_float(lng, "longitude")
        lat = _as_float(lat, "latitude")
        if not (MIN_LNG <= lng <= MAX_LNG) or not (MIN_LAT <= lat <= MAX_LAT):
            raise InvalidCoordinate(
                f"Coordinates ({lng}, {lat}) exceed world bounds: longitude in "
                f"[{MIN_LNG}, {MAX_LNG}], latitude in [{MIN_LAT}, {MAX_LAT}]"
            )
        object.__setattr__(self, "lng", canonicalize(lng))
        object.__setattr__(self, "lat", canonicalize(lat))

    @classmethod
    def coerce(cls, value: Any) -> Location:
        """Return `value` as a Location, accepting ``(lng, lat)`` pairs."""
        if isinstance(value, Location):
            return value
        try:
            lng, lat = value
        except (TypeError, ValueError) as exc:
            raise InvalidCoordinate(
                f"Expected a Location or a (lng, lat) pair, got {value!r}"
            ) from exc
        return cls(lng, lat)

    def as_tuple(self) -> Tuple[float, float]:
        return (self.lng, self.lat)

    def __str__(self) -> str:
        return f"{self.lng},{self.lat}"

    def __repr__(self) -> str:
        return f"Location(lng={self.lng}, lat={self.lat})"
