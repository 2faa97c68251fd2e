"""Map extent of a path graph.

The extent is the smallest box covering every member location, the route box
of every visible path, and the fixed center when one is set.
"""

from __future__ import annotations

import math
from typing import Iterable, Optional

from tourmap.config import MAX_ZOOM, MIN_ZOOM
from tourmap.exceptions import EmptyGraph
from tourmap.graph.path_graph import PathGraph
from tourmap.model.location import Location
from tourmap.model.path import BoundingBox

TILE_SIZE = 256


def _union(boxes: Iterable[BoundingBox]) -> Optional[BoundingBox]:
    result: Optional[BoundingBox] = None
    for box in boxes:
        result = box if result is None else result.union(box)
    return result


def compute_bounds(graph: PathGraph, center: Optional[Location] = None) -> BoundingBox:
    """Return the box covering the members, visible paths and center.

    Args:
        graph: Path graph whose members and visible paths are covered.
        center: Optional fixed map center to include.

    Returns:
        The covering box; degenerate for a single member with nothing else.

    Raises:
        EmptyGraph: If the graph has no members.
    """
    if not graph.is_set:
        raise EmptyGraph("Map boundaries need at least one point on the graph")

    boxes = [BoundingBox.from_point(location) for location in graph.members]
    for path in graph.visible:
        box = path.get_boundaries()
        if box is not None:
            boxes.append(box)
    if center is not None:
        boxes.append(BoundingBox.from_point(center))

    result = _union(boxes)
    assert result is not None
    return result


def find_center(graph: PathGraph, center: Optional[Location] = None) -> Location:
    """Return ``center`` if given, else the middle of the graph's extent."""
    if center is not None:
        return center
    box = compute_bounds(graph)
    return Location((box.west + box.east) / 2.0, (box.south + box.north) / 2.0)


def _mercator_y(lat: float) -> float:
    """Web Mercator y of ``lat`` on a unit square (0 at the top)."""
    lat_rad = math.radians(lat)
    return (1.0 - math.log(math.tan(lat_rad) + 1.0 / math.cos(lat_rad)) / math.pi) / 2.0


def fit_zoom(box: BoundingBox, width: int, height: int) -> int:
    """Return the largest zoom at which ``box`` fits a ``width`` x ``height`` canvas.

    Uses 256-pixel Web Mercator tiles. A degenerate box gets `MAX_ZOOM`.
    """
    x_span = (box.east - box.west) / 360.0
    y_span = abs(_mercator_y(box.south) - _mercator_y(box.north))

    zoom = MAX_ZOOM
    for span, pixels in ((x_span, width), (y_span, height)):
        if span <= 0:
            continue
        fitted = math.floor(math.log2(pixels / (TILE_SIZE * span)))
        zoom = min(zoom, fitted)
    return max(MIN_ZOOM, min(MAX_ZOOM, zoom))
