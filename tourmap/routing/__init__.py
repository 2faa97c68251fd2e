"""Directions service access."""

from tourmap.routing.client import RoutingClient, parse_directions
from tourmap.routing.transport import RequestsTransport, Transport

__all__ = ["RoutingClient", "parse_directions", "RequestsTransport", "Transport"]
