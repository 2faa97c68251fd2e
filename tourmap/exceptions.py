"""Exception hierarchy for tourmap.

Every error raised by the package derives from `TourMapError`. Errors caused by
invalid caller input additionally derive from `ValueError` so generic handlers
keep working.
"""

from __future__ import annotations


class TourMapError(Exception):
    """Base class for all tourmap errors."""


class InvalidCoordinate(TourMapError, ValueError):
    """Raised when a coordinate lies outside the world bounds."""


class InvalidColor(TourMapError, ValueError):
    """Raised when a color is not a 6-digit hex value."""


class UnsupportedMode(TourMapError, ValueError):
    """Raised for a travel mode the routing service does not support."""


class NotConfigured(TourMapError):
    """Raised when an operation needs credentials or points that are not set."""


class AlreadyConfigured(TourMapError):
    """Raised when credentials are set a second time."""


class InvalidCredential(TourMapError):
    """Raised when a service rejects the configured credential."""


class QuotaExceeded(TourMapError):
    """Raised when the routing service reports an exhausted quota."""


class GeocodeFailure(TourMapError):
    """Raised when the routing service cannot resolve the given coordinates."""


class InfeasiblePath(TourMapError):
    """Raised when an infeasible path is marked visible."""


class UnknownEndpoint(TourMapError):
    """Raised when a visible path references a point that is not on the graph."""


class EmptyGraph(TourMapError):
    """Raised when bounds are requested for a graph without points."""


class RenderBudgetExceeded(TourMapError):
    """Raised when the mandatory render parameters alone exceed the budget."""


class TransportError(TourMapError):
    """Raised when a request fails on the wire or its body cannot be parsed."""
