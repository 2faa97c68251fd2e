"""Undirected routed edge between two locations.

A ``Path`` is the resolved answer of the routing service for one unordered pair
of locations. It is immutable once built, and equality and hashing ignore the
direction in which it was requested, so ``Path(a, b) == Path(b, a)``.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Optional, Tuple

from tourmap.model.location import Location

METERS_PER_MILE = 1609.344

PathKey = Tuple[Location, Location]


def pair_key(a: Location, b: Location) -> PathKey:
    """Return the canonical key of the unordered pair ``{a, b}``.

    Args:
        a: One endpoint.
        b: The other endpoint.

    Returns:
        The two endpoints sorted by ``(lng, lat)``.
    """
    return (a, b) if a <= b else (b, a)


@dataclass(frozen=True)
class BoundingBox:
    """Axis-aligned box in degrees.

    Attributes:
        west: Lowest longitude.
        east: Highest longitude.
        south: Lowest latitude.
        north: Highest latitude.
    """

    west: float
    east: float
    south: float
    north: float

    @classmethod
    def from_point(cls, location: Location) -> BoundingBox:
        """Return the degenerate box covering a single location."""
        return cls(location.lng, location.lng, location.lat, location.lat)

    @classmethod
    def from_corners(cls, northeast: Location, southwest: Location) -> BoundingBox:
        return cls(
            west=southwest.lng,
            east=northeast.lng,
            south=southwest.lat,
            north=northeast.lat,
        )

    def union(self, other: BoundingBox) -> BoundingBox:
        """Return the smallest box covering both boxes."""
        return BoundingBox(
            west=min(self.west, other.west),
            east=max(self.east, other.east),
            south=min(self.south, other.south),
            north=max(self.north, other.north),
        )

    def as_tuple(self) -> Tuple[float, float, float, float]:
        """Return ``(west, east, south, north)``."""
        return (self.west, self.east, self.south, self.north)


@dataclass(frozen=True, eq=False)
class Path:
    """Represents the route between two locations.

    Attributes:
        start: Endpoint the route was requested from.
        end: Endpoint the route was requested to.
        feasible: Whether the routing service found at least one route.
        distance: Total distance in meters, or -1 when infeasible.
        duration: Total travel time in seconds, or -1 when infeasible.
        bounds: Bounding box of the route geometry, None when infeasible.
        geometry: Provider encoded route shape, None when infeasible.
        mode: Travel mode the route was resolved with.
    """

    start: Location
    end: Location
    feasible: bool
    distance: float = -1.0
    duration: float = -1.0
    bounds: Optional[BoundingBox] = None
    geometry: Optional[str] = field(default=None, repr=False)
    mode: Optional[str] = None

    @classmethod
    def infeasible(
        cls, start: Location, end: Location, mode: Optional[str] = None
    ) -> Path:
        """Return the no-route outcome for ``start`` and ``end``."""
        return cls(start=start, end=end, feasible=False, mode=mode)

    @property
    def key(self) -> PathKey:
        """Canonical unordered endpoint pair."""
        return pair_key(self.start, self.end)

    def touches(self, location: Location) -> bool:
        """Return True if ``location`` is one of the endpoints."""
        return self.start == location or self.end == location

    def get_distance(self) -> float:
        """Return the distance in meters, or -1 if no route exists."""
        if not self.feasible:
            return -1
        return self.distance

    def get_time(self) -> float:
        """Return the travel time in seconds, or -1 if no route exists."""
        if not self.feasible:
            return -1
        return self.duration

    def get_distance_in_miles(self) -> float:
        """Return the distance in miles rounded to one decimal, or -1."""
        if not self.feasible:
            return -1
        return round(self.distance / METERS_PER_MILE, 1)

    def get_boundaries(self) -> Optional[BoundingBox]:
        """Return the route bounding box, or None if no route exists."""
        if not self.feasible:
            return None
        return self.bounds

    def get_path_id(self) -> Optional[str]:
        """Return the encoded geometry, or None if no route exists."""
        if not self.feasible:
            return None
        return self.geometry

    def __eq__(self, other: Any) -> bool:
        if not isinstance(other, Path):
            return NotImplemented
        return self.key == other.key

    def __hash__(self) -> int:
        return hash(self.key)

    def __repr__(self) -> str:
        if not self.feasible:
            return f"Path({self.start} -> {self.end}, infeasible)"
        return (
            f"Path({self.start} -> {self.end}, distance={self.distance}, "
            f"duration={self.duration})"
        )
