"""
@file hazard_detection.py
@brief Spatial classification of road segments against flood zones

@details
Defines the HazardDetector capability (a typing.Protocol with a single
detect_hazardous_segments operation) and its Shapely implementation.

**Algorithm (ShapelyHazardDetector):**
1. Return immediately when there are no zones (no index is built)
2. Build an STRtree over the zone polygons (shell + holes)
3. For each segment, build its LineString and query the tree with the
   segment envelope to obtain candidate zones
4. Run the exact polygon/line intersects predicate on each candidate

Boundary contact counts as intersecting. A line lying wholly inside a hole
does not intersect the polygon. Geometry is planar in (longitude, latitude)
degrees, which is how GeoJSON hazard data is published.

The index is rebuilt on every call. Temporal filtering of zones is the
caller's responsibility (see FloodZone.is_valid_at).

@author EvacRoute Project
@date 2026-10-18
@version 1.0
@license AGPL-3.0

@see models.road_network.RoadNetwork.apply_flood_zones for the consumer
"""

import logging
from typing import Iterable, List, Protocol, Sequence, Set

from shapely.geometry import LineString, Polygon
from shapely.strtree import STRtree

from evacroute.models.geo import Coordinate, FloodZone
from evacroute.models.road_network import RoadSegment

logger = logging.getLogger(__name__)


class HazardDetector(Protocol):
    """
    @brief Capability interface for hazard classification backends
    """

    def detect_hazardous_segments(
        self, segments: Iterable[RoadSegment], zones: Sequence[FloodZone]
    ) -> Set[str]:
        """Return ids of segments intersecting at least one zone."""
        ...


class ShapelyHazardDetector:
    """
    @brief HazardDetector backed by shapely geometries and an STRtree index
    """

    def detect_hazardous_segments(
        self, segments: Iterable[RoadSegment], zones: Sequence[FloodZone]
    ) -> Set[str]:
        """
        @brief Classify segments against flood zone polygons

        @param segments Road segments to classify
        @param zones Flood zones active at the relevant instant

        @return Set of hazardous segment ids (empty when zones is empty)

        @complexity O((s + z) log z) expected for s segments and z zones
        """
        if not zones:
            logger.debug("No flood zones to process")
            return set()

        segments = list(segments)
        logger.debug(
            f"Detecting hazardous segments: {len(segments)} segments, "
            f"{len(zones)} flood zones"
        )

        polygons = [to_polygon(zone) for zone in zones]
        index = STRtree(polygons)

        hazardous_ids = set()
        for segment in segments:
            line = to_line_string(segment.coordinates)
            candidates = index.query(line)
            if any(self._intersects(polygons[i], line) for i in candidates):
                hazardous_ids.add(segment.id)

        logger.debug(f"Detected {len(hazardous_ids)} hazardous segments")
        return hazardous_ids

    def _intersects(self, polygon: Polygon, line: LineString) -> bool:
        return polygon.intersects(line)


def to_line_string(coordinates: Sequence[Coordinate]) -> LineString:
    """Shapely LineString in (longitude, latitude) order."""
    return LineString([coord.to_lon_lat() for coord in coordinates])


def to_polygon(zone: FloodZone) -> Polygon:
    """Shapely Polygon in (longitude, latitude) order, holes included."""
    return Polygon(
        _ring_coords(zone.outer_ring),
        holes=[_ring_coords(hole) for hole in zone.holes],
    )


def _ring_coords(ring: Sequence[Coordinate]) -> List[tuple]:
    return [coord.to_lon_lat() for coord in ring]
