"""Global pytest configuration.

Provides an in-memory `FakeTransport` that answers directions requests from
canned payloads and records every call, so tests can count routing requests
without network access.
"""

from __future__ import annotations

from typing import Any, Callable, Dict, List, Mapping, Optional, Tuple

import pytest

from tourmap.config import RenderConfig
from tourmap.exceptions import TransportError
from tourmap.model.location import Location
from tourmap.routing.client import RoutingClient
from tourmap.graph.path_graph import PathGraph
from tourmap.session import MapSession


def route_payload(
    legs: List[Tuple[float, float]],
    points: str = "enc_token",
    northeast: Tuple[float, float] = (1.0, 1.0),
    southwest: Tuple[float, float] = (0.0, 0.0),
) -> Dict[str, Any]:
    """Build an OK directions payload.

    Args:
        legs: ``(distance_m, duration_s)`` per leg.
        points: Encoded overview polyline.
        northeast: ``(lng, lat)`` of the route box corner.
        southwest: ``(lng, lat)`` of the route box corner.
    """
    return {
        "status": "OK",
        "routes": [
            {
                "legs": [
                    {"distance": {"value": d}, "duration": {"value": t}} for d, t in legs
                ],
                "overview_polyline": {"points": points},
                "bounds": {
                    "northeast": {"lng": northeast[0], "lat": northeast[1]},
                    "southwest": {"lng": southwest[0], "lat": southwest[1]},
                },
            }
        ],
    }


def status_payload(status: str) -> Dict[str, Any]:
    return {"status": status, "routes": []}


def _parse(point: str) -> Tuple[float, float]:
    lng, lat = point.split(",")
    return float(lng), float(lat)


class FakeTransport:
    """Transport answering from canned payloads.

    Pairs without an explicit response get a one-leg route whose distance is
    the Manhattan distance of the endpoints in 1e-5 degree units, and whose
    duration is half of that.
    """

    def __init__(self) -> None:
        self.calls: List[Tuple[str, Dict[str, Any]]] = []
        self.status_calls: List[Tuple[str, Dict[str, Any]]] = []
        self.responses: Dict[frozenset, Dict[str, Any]] = {}
        self.mode_responses: Dict[Tuple[str, frozenset], Dict[str, Any]] = {}
        self.status_code = 200
        self.error: Optional[Exception] = None

    def set_response(
        self, a: Location, b: Location, payload: Dict[str, Any], mode: Optional[str] = None
    ) -> None:
        key = frozenset({str(a), str(b)})
        if mode is None:
            self.responses[key] = payload
        else:
            self.mode_responses[(mode, key)] = payload

    def default_payload(self, origin: str, destination: str) -> Dict[str, Any]:
        (lng1, lat1), (lng2, lat2) = _parse(origin), _parse(destination)
        distance = round((abs(lng1 - lng2) + abs(lat1 - lat2)) * 100000)
        return route_payload(
            [(distance, distance / 2)],
            points=f"enc{len(self.calls)}",
            northeast=(max(lng1, lng2), max(lat1, lat2)),
            southwest=(min(lng1, lng2), min(lat1, lat2)),
        )

    def get_json(self, url: str, params: Mapping[str, Any]) -> Dict[str, Any]:
        self.calls.append((url, dict(params)))
        if self.error is not None:
            raise self.error
        key = frozenset({params["origin"], params["destination"]})
        if (params["mode"], key) in self.mode_responses:
            return self.mode_responses[(params["mode"], key)]
        if key in self.responses:
            return self.responses[key]
        return self.default_payload(params["origin"], params["destination"])

    def get_status(self, url: str, params: Mapping[str, Any]) -> int:
        self.status_calls.append((url, dict(params)))
        if self.error is not None:
            raise self.error
        return self.status_code


@pytest.fixture
def transport() -> FakeTransport:
    return FakeTransport()


@pytest.fixture
def client(transport: FakeTransport) -> RoutingClient:
    return RoutingClient(api_key="routing-key", transport=transport)


@pytest.fixture
def graph(client: RoutingClient) -> PathGraph:
    return PathGraph(client)


@pytest.fixture
def session(transport: FakeTransport) -> MapSession:
    s = MapSession(config=RenderConfig(), transport=transport)
    s.set_api_keys("render-key", "routing-key", validate=False)
    return s


@pytest.fixture
def make_route() -> Callable[..., Dict[str, Any]]:
    return route_payload


@pytest.fixture
def make_status() -> Callable[[str], Dict[str, Any]]:
    return status_payload


@pytest.fixture
def transport_error() -> TransportError:
    return TransportError("connection refused")
