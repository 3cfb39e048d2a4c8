"""
@file evacuation.py
@brief Evacuation route service: data loading, hazard application, routing

@details
Provides the application-level use case behind the route endpoint:
- Load (and keep) the road network built from GeoJSON road data
- Load the flood zones active at the request instant
- Flag hazardous segments copy-on-write on a per-request network view
- Run the hazard-penalized route calculation and log the outcome

The base network is loaded once and reused while the road data file is
unchanged. Hazard application never mutates it, so concurrent requests can
share it safely.

@author EvacRoute Project
@date 2026-10-18
@version 1.0
@license AGPL-3.0

@see services.route_calculation for the search algorithm
@see services.hazard_detection for flood zone classification
@see etl.geojson_loader for the data sources
"""

import logging
import os
import threading
from datetime import datetime, timezone
from typing import List, Optional

from evacroute.core import config
from evacroute.etl.geojson_loader import load_active_flood_zones, load_road_network
from evacroute.models.exceptions import InvalidRouteRequestError
from evacroute.models.geo import Coordinate, FloodZone
from evacroute.models.road_network import RoadNetwork
from evacroute.models.route import Route
from evacroute.services.graph_builder import GraphBuilder
from evacroute.services.hazard_detection import HazardDetector, ShapelyHazardDetector
from evacroute.services.route_calculation import RouteCalculationService

logger = logging.getLogger(__name__)


class EvacuationService:
    """
    @brief Orchestrates route requests against the configured data sources

    @details
    Collaborators are injectable so tests and alternative backends can swap
    the hazard detector or the calculator without touching the search logic.
    """

    def __init__(
        self,
        road_network_path: str = config.ROAD_NETWORK_PATH,
        flood_zones_path: str = config.FLOOD_ZONES_PATH,
        max_route_distance_meters: float = config.MAX_ROUTE_DISTANCE_METERS,
        graph_builder: Optional[GraphBuilder] = None,
        hazard_detector: Optional[HazardDetector] = None,
        route_calculator: Optional[RouteCalculationService] = None,
    ):
        """
        @brief Initialize the service with data paths and collaborators

        @param road_network_path Road network GeoJSON file
        @param flood_zones_path Flood zone GeoJSON file
        @param max_route_distance_meters Straight-line limit between endpoints
        """
        self.road_network_path = road_network_path
        self.flood_zones_path = flood_zones_path
        self.max_route_distance_meters = max_route_distance_meters
        self.graph_builder = graph_builder or GraphBuilder()
        self.hazard_detector = hazard_detector or ShapelyHazardDetector()
        self.route_calculator = route_calculator or RouteCalculationService()

        self._network: Optional[RoadNetwork] = None
        self._network_mtime: Optional[float] = None
        self._lock = threading.Lock()

    def get_base_network(self) -> RoadNetwork:
        """
        @brief Return the road network without hazard flags applied

        @details
        Reloads when the road data file's modification time changes.

        @throws RoadDataUnavailableError if the road data cannot be loaded
        """
        with self._lock:
            mtime = self._current_mtime()
            if self._network is None or mtime != self._network_mtime:
                self._network = load_road_network(self.road_network_path, self.graph_builder)
                self._network_mtime = mtime
            return self._network

    def get_active_flood_zones(self, at: Optional[datetime] = None) -> List[FloodZone]:
        return load_active_flood_zones(self.flood_zones_path, at or datetime.now(timezone.utc))

    def get_network(self, at: Optional[datetime] = None) -> RoadNetwork:
        """Network view with the flood zones active at the given instant applied."""
        zones = self.get_active_flood_zones(at)
        return self.get_base_network().apply_flood_zones(zones, self.hazard_detector)

    def validate_distance(self, start: Coordinate, end: Coordinate) -> None:
        """
        @brief Reject endpoint pairs further apart than the configured limit

        @throws InvalidRouteRequestError if the straight-line distance is too large
        """
        distance = start.distance_to(end)
        if distance > self.max_route_distance_meters:
            raise InvalidRouteRequestError(
                f"Distance between start and end exceeds maximum: "
                f"{self.max_route_distance_meters / 1000:.0f} km "
                f"({distance / 1000:.1f} km requested)"
            )

    def calculate_route(
        self, start: Coordinate, end: Coordinate, at: Optional[datetime] = None
    ) -> Route:
        """
        @brief Calculate the safest evacuation route between two points

        @param start Validated start coordinate
        @param end Validated end coordinate
        @param at Instant used to select active flood zones (default: now, UTC)

        @return Route with segments and metadata

        @throws InvalidRouteRequestError if the endpoints are too far apart
        @throws RouteNotFoundError if no route connects the endpoints
        @throws RoadDataUnavailableError if the road data cannot be loaded
        """
        logger.info(
            f"Calculating route from {start.latitude},{start.longitude} "
            f"to {end.latitude},{end.longitude}"
        )
        self.validate_distance(start, end)

        network = self.get_network(at)
        route = self.route_calculator.calculate_route(network, start, end)

        logger.info(
            f"Route calculated: {route.metadata.distance_meters:.1f} meters, "
            f"{len(route.segments)} segments, "
            f"safety score: {route.metadata.safety_score:.2f}"
        )
        return route

    def _current_mtime(self) -> Optional[float]:
        try:
            return os.path.getmtime(self.road_network_path)
        except OSError:
            return None
