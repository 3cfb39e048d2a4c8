"""
Routing Error Taxonomy

This module defines the exception hierarchy raised by the routing core and by
the data loading layer. Errors are raised synchronously where they occur and
propagate to the caller; the API layer maps them to HTTP responses in
core.exceptions.

Hierarchy:
- EvacRouteError: base class for every error raised by this package
- InvalidCoordinateError: coordinate outside WGS84 bounds
- InvalidGeometryError: blank ids, degenerate polylines/rings, bad edges
- InvalidRouteRequestError: malformed request parameters, distance limit
- RouteNotFoundError: network topology precludes an answer
- NetworkInconsistencyError: graph references a segment the network lacks
- RoadDataUnavailableError: road network data cannot be loaded
- RouteComputationTimeoutError: request deadline exceeded

Author: EvacRoute Project
License: AGPL-3.0
"""


class EvacRouteError(Exception):
    """Base class for all EvacRoute errors."""


class InvalidCoordinateError(EvacRouteError, ValueError):
    """Raised when a latitude/longitude pair is not valid WGS84."""


class InvalidGeometryError(EvacRouteError, ValueError):
    """Raised when a segment, zone, node or edge is constructed from bad input."""


class InvalidRouteRequestError(EvacRouteError, ValueError):
    """Raised when a route request is well-typed but semantically invalid."""


class RouteNotFoundError(EvacRouteError):
    """Raised when no route connects the requested endpoints."""


class NetworkInconsistencyError(EvacRouteError, RuntimeError):
    """
    Raised when the routing graph and the segment map disagree.

    Indicates a construction bug, not a bad request.
    """


class RoadDataUnavailableError(EvacRouteError):
    """Raised when the road network source is missing or holds no segments."""


class RouteComputationTimeoutError(EvacRouteError):
    """Raised when route calculation exceeds the request deadline."""

    def __init__(self, timeout_seconds: float):
        self.timeout_seconds = timeout_seconds
        super().__init__(
            f"Route computation timeout (exceeded {timeout_seconds:g} seconds)"
        )
