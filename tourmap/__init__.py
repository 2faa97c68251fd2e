"""tourmap: routed tour maps over a set of points.

tourmap keeps a complete graph of routed paths between user supplied points,
resolving each pair once through a directions service, and composes a static
map request that draws a chosen subset of those paths.

Primary API:
    create_session() - Build a MapSession holding keys, points and view settings
    MapSession - Points, visible paths, zoom, colors, render URL and summary
    Location, Path, BoundingBox - Value types
    PathGraph, VisibleSet - Graph of resolved paths and the drawn subset

Example:
    from tourmap import create_session

    session = create_session()
    session.set_api_keys(render_key, routing_key)
    session.set_points([(-74.65219, 40.35025), (-74.65904, 40.34187)])
    session.add_visible_path(-74.65219, 40.35025, -74.65904, 40.34187)
    print(session.render_url())
    print(session.summary().distance_text)
"""

from __future__ import annotations

from tourmap import cli, logging
from tourmap._version import __version__
from tourmap.config import RenderConfig, load_config
from tourmap.exceptions import (
    AlreadyConfigured,
    EmptyGraph,
    GeocodeFailure,
    InfeasiblePath,
    InvalidColor,
    InvalidCoordinate,
    InvalidCredential,
    NotConfigured,
    QuotaExceeded,
    RenderBudgetExceeded,
    TourMapError,
    TransportError,
    UnknownEndpoint,
    UnsupportedMode,
)
from tourmap.graph import PathGraph, VisibleSet
from tourmap.model import BoundingBox, Location, Path
from tourmap.routing import RequestsTransport, RoutingClient
from tourmap.session import MapSession, create_session
from tourmap.summary import RouteSummary, summarize

__all__ = [
    # Version
    "__version__",
    # Session (primary API)
    "create_session",
    "MapSession",
    "RenderConfig",
    "load_config",
    # Model
    "Location",
    "Path",
    "BoundingBox",
    "PathGraph",
    "VisibleSet",
    "RouteSummary",
    "summarize",
    # Routing
    "RoutingClient",
    "RequestsTransport",
    # Errors
    "TourMapError",
    "InvalidCoordinate",
    "InvalidColor",
    "UnsupportedMode",
    "NotConfigured",
    "AlreadyConfigured",
    "InvalidCredential",
    "QuotaExceeded",
    "GeocodeFailure",
    "InfeasiblePath",
    "UnknownEndpoint",
    "EmptyGraph",
    "RenderBudgetExceeded",
    "TransportError",
    # Utilities
    "cli",
    "logging",
]
