"""Client for the external directions service.

Each call to `RoutingClient.resolve` issues exactly one request and turns the
response into a `Path`. Statuses meaning "there is no route" produce an
infeasible Path, statuses meaning the request itself is wrong raise.
"""

from __future__ import annotations

from typing import Any, Dict, Mapping, Optional

from tourmap.config import DEFAULT_TRAVEL_MODE, DIRECTIONS_URL, validate_travel_mode
from tourmap.exceptions import (
    GeocodeFailure,
    InvalidCredential,
    NotConfigured,
    QuotaExceeded,
    TransportError,
)
from tourmap.logging import get_logger
from tourmap.model.location import Location
from tourmap.model.path import BoundingBox, Path
from tourmap.routing.transport import RequestsTransport, Transport

logger = get_logger(__name__)

STATUS_OK = "OK"
NO_ROUTE_STATUSES = frozenset(
    {"ZERO_RESULTS", "MAX_WAYPOINTS_EXCEEDED", "MAX_ROUTE_LENGTH_EXCEEDED"}
)
GEOCODE_STATUSES = frozenset({"INVALID_REQUEST", "NOT_FOUND"})
DENIED_STATUSES = frozenset({"REQUEST_DENIED"})
QUOTA_STATUSES = frozenset({"OVER_QUERY_LIMIT", "OVER_DAILY_LIMIT"})


class RoutingClient:
    """Resolves paths through the directions service.

    Args:
        api_key: Directions credential. Resolution fails with `NotConfigured`
            until a key is set.
        travel_mode: One of ``driving``, ``walking``, ``bicycling``, ``transit``.
        transport: HTTP transport; defaults to `RequestsTransport`.
        url: Directions endpoint.
    """

    def __init__(
        self,
        api_key: Optional[str] = None,
        travel_mode: str = DEFAULT_TRAVEL_MODE,
        transport: Optional[Transport] = None,
        url: str = DIRECTIONS_URL,
    ) -> None:
        self.api_key = api_key
        self._travel_mode = validate_travel_mode(travel_mode)
        self.transport = transport if transport is not None else RequestsTransport()
        self.url = url
        self.resolutions = 0

    @property
    def travel_mode(self) -> str:
        return self._travel_mode

    @travel_mode.setter
    def travel_mode(self, mode: str) -> None:
        self._travel_mode = validate_travel_mode(mode)

    @property
    def is_configured(self) -> bool:
        return bool(self.api_key)

    def request_params(self, start: Location, end: Location) -> Dict[str, str]:
        """Return the query parameters for a route from ``start`` to ``end``."""
        if not self.is_configured:
            raise NotConfigured("Routing calls can't be made until the API keys are set")
        return {
            "mode": self._travel_mode,
            "origin": str(start),
            "destination": str(end),
            "key": str(self.api_key),
        }

    def resolve(self, start: Location, end: Location) -> Path:
        """Query the route between two locations.

        Args:
            start: Origin.
            end: Destination.

        Returns:
            A feasible Path, or an infeasible one when the service has no route.

        Raises:
            NotConfigured: If no credential is set.
            GeocodeFailure: If the service can't resolve the coordinates.
            InvalidCredential: If the service rejects the credential.
            QuotaExceeded: If the credential's quota is exhausted.
            TransportError: On network failure or a malformed response.
        """
        params = self.request_params(start, end)
        self.resolutions += 1
        logger.debug(
            "Resolving %s route %s -> %s", self._travel_mode, params["origin"], params["destination"]
        )
        payload = self.transport.get_json(self.url, params)
        return parse_directions(payload, start, end, self._travel_mode)


def parse_directions(
    payload: Mapping[str, Any], start: Location, end: Location, mode: Optional[str] = None
) -> Path:
    """Turn a directions response into a `Path`.

    Args:
        payload: Decoded JSON body of the directions response.
        start: Origin the request was made for.
        end: Destination the request was made for.
        mode: Travel mode recorded on the Path.

    Returns:
        The resolved Path.
    """
    status = payload.get("status")

    if status == STATUS_OK:
        return _parse_route(payload, start, end, mode)
    if status in NO_ROUTE_STATUSES:
        logger.debug("No route between %s and %s (%s)", start, end, status)
        return Path.infeasible(start, end, mode)
    if status in GEOCODE_STATUSES:
        raise GeocodeFailure(
            f"Invalid coordinates for the path {start} -> {end}; couldn't geocode ({status})"
        )
    if status in DENIED_STATUSES:
        raise InvalidCredential("Directions API key is not correct")
    if status in QUOTA_STATUSES:
        raise QuotaExceeded(
            f"Directions API key is obsolete, or the daily limit has been exceeded ({status})"
        )

    logger.warning(
        "Unknown status %r from the directions service for %s -> %s; treating as no route",
        status,
        start,
        end,
    )
    return Path.infeasible(start, end, mode)


def _parse_route(
    payload: Mapping[str, Any], start: Location, end: Location, mode: Optional[str]
) -> Path:
    try:
        route = payload["routes"][0]
        distance = 0.0
        duration = 0.0
        for leg in route["legs"]:
            distance += float(leg["distance"]["value"])
            duration += float(leg["duration"]["value"])
        geometry = route["overview_polyline"]["points"]
        ne = route["bounds"]["northeast"]
        sw = route["bounds"]["southwest"]
        ne_lng, ne_lat, sw_lng, sw_lat = ne["lng"], ne["lat"], sw["lng"], sw["lat"]
    except (KeyError, IndexError, TypeError, ValueError) as exc:
        raise TransportError(f"Malformed directions response for {start} -> {end}: {exc!r}") from exc

    northeast = Location(ne_lng, ne_lat)
    southwest = Location(sw_lng, sw_lat)

    return Path(
        start=start,
        end=end,
        feasible=True,
        distance=distance,
        duration=duration,
        bounds=BoundingBox.from_corners(northeast, southwest),
        geometry=geometry,
        mode=mode,
    )
