"""Value types: locations, bounding boxes and routed paths."""

from tourmap.model.location import Location
from tourmap.model.path import BoundingBox, Path, PathKey, pair_key

__all__ = ["Location", "BoundingBox", "Path", "PathKey", "pair_key"]
