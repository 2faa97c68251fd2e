"""Complete graph of routed paths over a set of locations.

`PathGraph` keeps one resolved `Path` for every unordered pair of member
locations. The edges live in a single flat mapping keyed by the sorted endpoint
pair, so each pair is stored and resolved once. Every mutation of the member
set restores completeness before it returns.

The graph is "unset" while it has no members. Removing the last member or
setting an empty point list returns it to that state.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Dict, Iterable, Iterator, List, Optional

from tourmap.config import validate_travel_mode
from tourmap.exceptions import UnknownEndpoint
from tourmap.graph.visible import VisibleSet
from tourmap.lib.nx import to_networkx
from tourmap.logging import get_logger
from tourmap.model.location import Location
from tourmap.model.path import Path, PathKey, pair_key
from tourmap.routing.client import RoutingClient

if TYPE_CHECKING:
    import networkx as nx

logger = get_logger(__name__)


class PathGraph:
    """Resolved paths between every pair of member locations.

    Args:
        client: Routing client used to resolve each new pair.

    Attributes:
        client: The routing client.
        visible: Paths selected for rendering. Entries touching a removed
            location are dropped together with it.
    """

    def __init__(self, client: RoutingClient) -> None:
        self.client = client
        self._members: Optional[Dict[Location, None]] = None
        self._paths: Dict[PathKey, Path] = {}
        self.visible = VisibleSet(self.__contains__)

    # ------------------------------------------------------------------
    # Read access
    # ------------------------------------------------------------------

    @property
    def is_set(self) -> bool:
        """False while the graph has no members."""
        return self._members is not None

    @property
    def members(self) -> List[Location]:
        """Member locations in insertion order."""
        return list(self._members or ())

    def paths(self) -> List[Path]:
        """All resolved paths, feasible or not."""
        return list(self._paths.values())

    def __contains__(self, location: object) -> bool:
        return self._members is not None and location in self._members

    def __iter__(self) -> Iterator[Location]:
        return iter(self.members)

    def __len__(self) -> int:
        return len(self._members or ())

    # ------------------------------------------------------------------
    # Member mutations
    # ------------------------------------------------------------------

    def add_point(self, location: Location) -> None:
        """Add ``location`` and resolve its path to every existing member.

        Adding a location that is already a member does nothing. With ``n``
        members this issues exactly ``n`` routing requests.
        """
        if location in self:
            return
        new_paths = {}
        for member in self.members:
            path = self.client.resolve(location, member)
            new_paths[path.key] = path
        if self._members is None:
            self._members = {}
        self._paths.update(new_paths)
        self._members[location] = None
        logger.debug(
            "Added point %s (%d new paths, %d points)", location, len(new_paths), len(self)
        )

    def remove_point(self, location: Location) -> None:
        """Remove ``location`` with its paths and visible entries."""
        if location not in self:
            return
        assert self._members is not None
        del self._members[location]
        self._paths = {
            key: path for key, path in self._paths.items() if location not in key
        }
        dropped = self.visible.discard_touching(location)
        if dropped:
            logger.debug("Removed %d visible paths touching %s", len(dropped), location)
        if not self._members:
            self._members = None
            self._paths = {}
            self.visible.clear()

    def set_points(self, locations: Optional[Iterable[Location]]) -> None:
        """Replace every member and rebuild the full path set.

        Visible paths are cleared. Duplicate locations collapse into one member.
        ``None`` or an empty iterable clears the graph. Nothing changes if a
        routing request fails part way.
        """
        unique: Dict[Location, None] = dict.fromkeys(locations or ())
        paths = self._resolve_all(list(unique))
        self.visible.clear()
        self._members = unique or None
        self._paths = paths
        logger.debug("Set %d points (%d paths)", len(unique), len(paths))

    def clear(self) -> None:
        """Remove every member and visible path."""
        self.set_points(None)

    def change_travel_mode(self, mode: str) -> None:
        """Switch the routing mode and re-resolve every path.

        Visible paths are re-pointed at their re-resolved paths; those left
        without a route under the new mode are dropped.

        Raises:
            UnsupportedMode: If ``mode`` is not a supported travel mode.
        """
        mode = validate_travel_mode(mode)
        previous = self.client.travel_mode
        self.client.travel_mode = mode
        try:
            paths = self._resolve_all(self.members)
        except Exception:
            self.client.travel_mode = previous
            raise
        self._paths = paths

        for key in self.visible.keys():
            path = paths.get(key)
            if path is not None and path.feasible:
                self.visible.replace(path)
            else:
                logger.warning(
                    "Dropping visible path %s -> %s: no %s route", key[0], key[1], mode
                )
                self.visible.remove_key(key)
        logger.info("Travel mode changed from %s to %s", previous, mode)

    def _resolve_all(self, members: List[Location]) -> Dict[PathKey, Path]:
        paths: Dict[PathKey, Path] = {}
        for i, start in enumerate(members):
            for end in members[i + 1 :]:
                path = self.client.resolve(start, end)
                paths[path.key] = path
        return paths

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def get_path(self, a: Location, b: Location) -> Path:
        """Return the path between ``a`` and ``b``.

        The cached path is returned when both are members. Otherwise a fresh
        path is resolved for this query only and is not stored.
        """
        if a in self and b in self and a != b:
            return self._paths[pair_key(a, b)]
        return self.client.resolve(a, b)

    def get_distance(self, a: Location, b: Location) -> float:
        """Return the routed distance in meters, or -1 when there is no route."""
        return self.get_path(a, b).get_distance()

    def member_path(self, a: Location, b: Location) -> Path:
        """Return the cached path between two distinct members.

        Raises:
            UnknownEndpoint: If either location is not a member.
        """
        if a not in self or b not in self:
            raise UnknownEndpoint(f"Path {a} -> {b} has endpoints that are not on the map")
        if a == b:
            raise UnknownEndpoint(f"Path {a} -> {b} needs two distinct points")
        return self._paths[pair_key(a, b)]

    def add_visible_path(self, a: Location, b: Location) -> Path:
        """Mark the cached path between two members visible.

        Raises:
            UnknownEndpoint: If either location is not a member.
            InfeasiblePath: If the members have no route between them.
        """
        path = self.member_path(a, b)
        self.visible.add(path)
        return path

    def to_networkx(self) -> "nx.Graph":
        """Return the graph as a ``networkx.Graph``."""
        return to_networkx(self)
