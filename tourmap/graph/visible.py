"""Paths selected for drawing on the rendered map."""

from __future__ import annotations

from typing import Callable, Dict, Iterable, Iterator, List, Optional

from tourmap.exceptions import InfeasiblePath, UnknownEndpoint
from tourmap.model.location import Location
from tourmap.model.path import Path, PathKey


class VisibleSet:
    """Insertion-ordered set of feasible paths between graph members.

    Args:
        is_member: Predicate telling whether a location is on the graph.
    """

    def __init__(self, is_member: Callable[[Location], bool]) -> None:
        self._is_member = is_member
        self._paths: Dict[PathKey, Path] = {}

    def _check(self, path: Path) -> None:
        if not path.feasible:
            raise InfeasiblePath(f"Impossible path {path.start} -> {path.end} can't be drawn")
        if path.start == path.end:
            raise UnknownEndpoint(f"Path {path.start} -> {path.end} needs two distinct points")
        if not (self._is_member(path.start) and self._is_member(path.end)):
            raise UnknownEndpoint(
                f"Path {path.start} -> {path.end} has endpoints that are not on the map"
            )

    def add(self, path: Path) -> None:
        """Mark ``path`` visible; adding an equal path again is a no-op.

        Raises:
            InfeasiblePath: If the path has no route.
            UnknownEndpoint: If either endpoint is not a graph member.
        """
        self._check(path)
        self._paths.setdefault(path.key, path)

    def remove(self, path: Path) -> None:
        """Unmark ``path``; absent paths are ignored."""
        self.remove_key(path.key)

    def remove_key(self, key: PathKey) -> None:
        self._paths.pop(key, None)

    def set_paths(self, paths: Optional[Iterable[Path]]) -> None:
        """Replace the whole set; None clears it.

        Every path is validated before the set changes.
        """
        if paths is None:
            self.clear()
            return
        staged: Dict[PathKey, Path] = {}
        for path in paths:
            self._check(path)
            staged.setdefault(path.key, path)
        self._paths = staged

    def replace(self, path: Path) -> None:
        """Swap in a re-resolved path for an already visible key."""
        if path.key in self._paths:
            self._paths[path.key] = path

    def discard_touching(self, location: Location) -> List[Path]:
        """Drop every path with ``location`` as an endpoint and return them."""
        dropped = [p for p in self._paths.values() if p.touches(location)]
        for path in dropped:
            del self._paths[path.key]
        return dropped

    def clear(self) -> None:
        self._paths = {}

    @property
    def is_set(self) -> bool:
        return bool(self._paths)

    def keys(self) -> List[PathKey]:
        return list(self._paths)

    def __contains__(self, path: object) -> bool:
        return isinstance(path, Path) and path.key in self._paths

    def __iter__(self) -> Iterator[Path]:
        return iter(list(self._paths.values()))

    def __len__(self) -> int:
        return len(self._paths)
