"""Map session: the single context object of a tourmap run.

A `MapSession` holds the credentials, view configuration, routing client and
path graph of one run. Use `create_session` to build one.

Example:
    from tourmap import create_session

    session = create_session()
    session.set_api_keys(render_key, routing_key)
    session.add_point(-74.65219, 40.35025)
    session.add_point(-74.65904, 40.34187)
    session.add_visible_path(-74.65219, 40.35025, -74.65904, 40.34187)
    print(session.render_url())
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Optional, Sequence, Tuple

from tourmap.config import (
    MAX_ZOOM,
    MIN_ZOOM,
    STATIC_MAP_URL,
    VALIDATION_DESTINATION,
    VALIDATION_ORIGIN,
    VALIDATION_RENDER_PARAMS,
    RenderConfig,
    normalize_color,
    validate_zoom,
)
from tourmap.exceptions import (
    AlreadyConfigured,
    InvalidCredential,
    TransportError,
)
from tourmap.graph.path_graph import PathGraph
from tourmap.logging import get_logger
from tourmap.model.location import Location
from tourmap.model.path import BoundingBox, Path, pair_key
from tourmap.render.bounds import compute_bounds, find_center, fit_zoom
from tourmap.render.request import RenderRequest, compose_render_request
from tourmap.routing.client import RoutingClient
from tourmap.routing.transport import RequestsTransport, Transport
from tourmap.summary import RouteSummary, summarize

logger = get_logger(__name__)

Point = Tuple[float, float]
Segment = Tuple[float, float, float, float]


@dataclass(frozen=True)
class Credentials:
    """API keys for the two external services."""

    render_key: str
    routing_key: str


class MapSession:
    """Points, visible paths and view settings of one map.

    Args:
        config: View configuration; defaults are used when omitted.
        transport: HTTP transport shared by routing and credential checks.
        render_url: Static map endpoint.
    """

    def __init__(
        self,
        config: Optional[RenderConfig] = None,
        transport: Optional[Transport] = None,
        render_url: str = STATIC_MAP_URL,
    ) -> None:
        self.config = config if config is not None else RenderConfig()
        self.transport = transport if transport is not None else RequestsTransport()
        self.render_base_url = render_url
        self.credentials: Optional[Credentials] = None
        self.client = RoutingClient(
            travel_mode=self.config.travel_mode, transport=self.transport
        )
        self.graph = PathGraph(self.client)

    # ------------------------------------------------------------------
    # Credentials
    # ------------------------------------------------------------------

    @property
    def api_keys_set(self) -> bool:
        return self.credentials is not None

    def set_api_keys(self, render_key: str, routing_key: str, validate: bool = True) -> None:
        """Set the render and routing keys; allowed once per session.

        Args:
            render_key: Static map key.
            routing_key: Directions key.
            validate: Probe both services with a known-good request first.

        Raises:
            AlreadyConfigured: If keys were already set.
            InvalidCredential: If a key is empty or rejected by its service.
        """
        if self.credentials is not None:
            raise AlreadyConfigured("API keys can only be set once")
        if validate:
            self.validate_api_keys(render_key, routing_key)
        elif not render_key or not routing_key:
            raise InvalidCredential("API keys must be non-empty strings")
        self.credentials = Credentials(render_key=render_key, routing_key=routing_key)
        self.client.api_key = routing_key
        logger.debug("API keys set (validated=%s)", validate)

    def validate_api_keys(self, render_key: str, routing_key: str) -> None:
        """Check both keys by issuing one real request to each service.

        Raises:
            InvalidCredential: If a key is empty, rejected, or the probe fails.
        """
        if not render_key:
            raise InvalidCredential("Static map API key is invalid")
        if not routing_key:
            raise InvalidCredential("Directions API key is invalid")

        probe = RoutingClient(
            api_key=routing_key,
            travel_mode="walking",
            transport=self.transport,
            url=self.client.url,
        )
        try:
            probe.resolve(Location(*VALIDATION_ORIGIN), Location(*VALIDATION_DESTINATION))
        except TransportError as exc:
            raise InvalidCredential(
                "Directions API key is invalid, API call failed"
            ) from exc

        params = dict(VALIDATION_RENDER_PARAMS, key=render_key)
        try:
            status = self.transport.get_status(self.render_base_url, params)
        except TransportError as exc:
            raise InvalidCredential("Static map API key is invalid, API call failed") from exc
        if status != 200:
            raise InvalidCredential(f"Static map API key is invalid (HTTP {status})")

    # ------------------------------------------------------------------
    # Points
    # ------------------------------------------------------------------

    def add_point(self, lng: float, lat: float) -> Location:
        location = Location(lng, lat)
        self.graph.add_point(location)
        return location

    def remove_point(self, lng: float, lat: float) -> None:
        self.graph.remove_point(Location(lng, lat))

    def set_points(self, points: Optional[Iterable[Point]]) -> None:
        """Replace all points; visible paths are cleared, None clears everything."""
        if points is None:
            self.graph.set_points(None)
            return
        self.graph.set_points([Location(lng, lat) for lng, lat in points])

    def clear(self) -> None:
        """Remove every point and visible path."""
        self.graph.clear()

    @property
    def points(self) -> Sequence[Location]:
        return self.graph.members

    # ------------------------------------------------------------------
    # Visible paths
    # ------------------------------------------------------------------

    def add_visible_path(
        self, start_lng: float, start_lat: float, end_lng: float, end_lat: float
    ) -> Path:
        """Mark the path between two points on the map visible."""
        return self.graph.add_visible_path(
            Location(start_lng, start_lat), Location(end_lng, end_lat)
        )

    def remove_visible_path(
        self, start_lng: float, start_lat: float, end_lng: float, end_lat: float
    ) -> None:
        """Unmark the path between two points; absent paths are ignored."""
        key = pair_key(Location(start_lng, start_lat), Location(end_lng, end_lat))
        self.graph.visible.remove_key(key)

    def set_visible_paths(self, segments: Optional[Iterable[Segment]]) -> None:
        """Replace the visible paths; None clears them.

        Each segment is ``(start_lng, start_lat, end_lng, end_lat)`` between two
        points on the map. Nothing changes if any segment is rejected.
        """
        if segments is None:
            self.graph.visible.clear()
            return
        paths = [
            self.graph.member_path(Location(a_lng, a_lat), Location(b_lng, b_lat))
            for a_lng, a_lat, b_lng, b_lat in segments
        ]
        self.graph.visible.set_paths(paths)

    def clear_paths(self) -> None:
        self.graph.visible.clear()

    @property
    def visible_paths(self) -> Sequence[Path]:
        return list(self.graph.visible)

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def get_map_distance(
        self, start_lng: float, start_lat: float, end_lng: float, end_lat: float
    ) -> float:
        """Return the routed distance in meters, or -1 when there is no route."""
        return self.graph.get_distance(
            Location(start_lng, start_lat), Location(end_lng, end_lat)
        )

    def bounds(self) -> BoundingBox:
        return compute_bounds(self.graph, self.config.center)

    def center(self) -> Location:
        return find_center(self.graph, self.config.center)

    def render_request(self) -> RenderRequest:
        key = self.credentials.render_key if self.credentials else None
        return compose_render_request(self.graph, self.config, key, self.render_base_url)

    def render_url(self) -> str:
        return self.render_request().url

    def summary(self) -> RouteSummary:
        return summarize(self.graph.visible)

    # ------------------------------------------------------------------
    # View settings
    # ------------------------------------------------------------------

    def set_map_center(self, lng: float, lat: float) -> None:
        self.config.center = Location(lng, lat)

    def clear_map_center(self) -> None:
        self.config.center = None

    def set_map_screen_size(self, width: int, height: int) -> None:
        """Set the canvas size; non-positive values keep the defaults."""
        self.config.set_screen_size(width, height)

    def set_point_color(self, color: str) -> None:
        self.config.point_color = normalize_color(color)

    def set_path_color(self, color: str) -> None:
        self.config.path_color = normalize_color(color)

    def set_show_points(self, toggle: bool) -> None:
        self.config.show_points = bool(toggle)

    def set_travel_mode(self, mode: str) -> None:
        """Switch the travel mode and re-resolve every path on the map."""
        self.graph.change_travel_mode(mode)
        self.config.travel_mode = self.client.travel_mode

    def set_zoom(self, zoom: Optional[int]) -> None:
        """Pin the zoom level, or pass None for automatic zoom."""
        self.config.zoom = validate_zoom(zoom)

    def _current_zoom(self) -> int:
        if self.config.zoom is not None:
            return self.config.zoom
        return fit_zoom(self.bounds(), self.config.width, self.config.height)

    def zoom_in(self) -> int:
        """Increase the zoom by one level, starting from the fitted zoom."""
        self.config.zoom = min(MAX_ZOOM, self._current_zoom() + 1)
        return self.config.zoom

    def zoom_out(self) -> int:
        """Decrease the zoom by one level, starting from the fitted zoom."""
        self.config.zoom = max(MIN_ZOOM, self._current_zoom() - 1)
        return self.config.zoom

    def enable_default_zoom(self) -> None:
        """Let the renderer choose the zoom."""
        self.config.zoom = None

    def disable_default_zoom(self) -> int:
        """Pin the zoom at the level that fits the current map."""
        self.config.zoom = self._current_zoom()
        return self.config.zoom


def create_session(
    config: Optional[RenderConfig] = None,
    transport: Optional[Transport] = None,
    render_url: str = STATIC_MAP_URL,
) -> MapSession:
    """Return a new `MapSession`."""
    return MapSession(config=config, transport=transport, render_url=render_url)
