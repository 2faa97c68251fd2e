"""Totals over the visible paths in human units."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Iterable, Optional

from tourmap.model.path import METERS_PER_MILE, Path


def _plural(n: float, singular: str, plural: Optional[str] = None) -> str:
    """Return grammatically correct unit for count n."""
    if n == 1:
        return singular
    return plural or (singular + "s")


def format_distance(meters: float) -> str:
    """Return ``meters`` as miles with one decimal, e.g. ``"3.1 miles"``."""
    return f"{meters / METERS_PER_MILE:.1f} miles"


def format_duration(seconds: float) -> str:
    """Return ``seconds`` as ``"<H> hour(s) <M> minute(s)"``.

    Zero components are left out, so a zero duration gives ``""``. Minutes are
    rounded to one decimal with a trailing ``.0`` dropped.

    Examples:
        3600 -> "1 hour"; 5430 -> "1 hour 30.5 minutes"; 60 -> "1 minute".
    """
    total_minutes = round(seconds / 60.0, 1)
    hours = int(total_minutes // 60)
    minutes = round(total_minutes - hours * 60, 1)

    parts = []
    if hours:
        parts.append(f"{hours} {_plural(hours, 'hour')}")
    if minutes:
        text = f"{minutes:.1f}".rstrip("0").rstrip(".")
        parts.append(f"{text} {_plural(minutes, 'minute')}")
    return " ".join(parts)


@dataclass(frozen=True)
class RouteSummary:
    """Totals over a set of paths.

    Attributes:
        paths: Number of paths summed.
        distance: Total distance in meters.
        duration: Total travel time in seconds.
    """

    paths: int
    distance: float
    duration: float

    @property
    def distance_text(self) -> str:
        return format_distance(self.distance)

    @property
    def duration_text(self) -> str:
        return format_duration(self.duration)

    def as_dict(self) -> Dict[str, Any]:
        return {
            "paths": self.paths,
            "distance_m": self.distance,
            "duration_s": self.duration,
            "distance": self.distance_text,
            "duration": self.duration_text,
        }


def summarize(paths: Iterable[Path]) -> RouteSummary:
    """Sum distance and time over ``paths`` (normally the visible set)."""
    count = 0
    distance = 0.0
    duration = 0.0
    for path in paths:
        count += 1
        distance += path.get_distance()
        duration += path.get_time()
    return RouteSummary(paths=count, distance=distance, duration=duration)
