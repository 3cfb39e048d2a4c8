"""
Road Network Data Model

This module defines the road segment value type and the RoadNetwork aggregate
that routing runs against. Segments are loaded from GeoJSON road data (see
etl.geojson_loader) and combined with the graph built from them.

Model: RoadSegment
- Stores the road polyline as an ordered tuple of Coordinates (>= 2 points)
- Tracks directionality (one-way or bidirectional)
- Carries a hazardous flag set by flood zone detection
- Derives its length in meters from consecutive haversine distances

Model: RoadNetwork
- Owns the segment-id -> RoadSegment mapping
- Owns the routing Graph built once from those segments
- Applies flood zone detection copy-on-write: the result is a new network,
  the receiver is never modified

Author: EvacRoute Project
License: AGPL-3.0
"""

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Dict, Iterable, List, Optional, Sequence, Tuple

from evacroute.models.exceptions import InvalidGeometryError
from evacroute.models.geo import Coordinate, FloodZone
from evacroute.models.graph import Graph, Node

if TYPE_CHECKING:
    from evacroute.services.hazard_detection import HazardDetector

logger = logging.getLogger(__name__)

MIN_SEGMENT_COORDINATES = 2


@dataclass(frozen=True)
class RoadSegment:
    """
    Immutable road segment.

    Attributes:
        id (str): Unique, non-blank segment identifier
        coordinates (tuple): Polyline points, first and last become graph nodes
        oneway (bool): Whether traffic may only flow first -> last point
        hazardous (bool): Whether the segment intersects an active flood zone
        length_meters (float): Derived sum of consecutive haversine distances
    """

    id: str
    coordinates: Tuple[Coordinate, ...]
    oneway: bool = False
    hazardous: bool = False
    length_meters: float = field(init=False, repr=False)

    def __post_init__(self):
        coordinates = tuple(self.coordinates) if self.coordinates is not None else ()
        if len(coordinates) < MIN_SEGMENT_COORDINATES:
            raise InvalidGeometryError(
                f"Segment must have at least {MIN_SEGMENT_COORDINATES} points"
            )
        if not self.id or not str(self.id).strip():
            raise InvalidGeometryError("Segment ID cannot be null or blank")

        object.__setattr__(self, "coordinates", coordinates)
        object.__setattr__(
            self,
            "length_meters",
            sum(a.distance_to(b) for a, b in zip(coordinates, coordinates[1:])),
        )

    @classmethod
    def from_lat_lon(
        cls,
        segment_id: str,
        points: Sequence[Tuple[float, float]],
        oneway: bool = False,
        hazardous: bool = False,
    ) -> "RoadSegment":
        """Build a segment from (latitude, longitude) pairs."""
        return cls(
            id=segment_id,
            coordinates=tuple(Coordinate(lat, lon) for lat, lon in points),
            oneway=oneway,
            hazardous=hazardous,
        )

    @property
    def start(self) -> Coordinate:
        return self.coordinates[0]

    @property
    def end(self) -> Coordinate:
        return self.coordinates[-1]

    def with_hazardous(self, hazardous: bool) -> "RoadSegment":
        """Return a copy with the given hazardous flag (self if unchanged)."""
        if self.hazardous == hazardous:
            return self
        return RoadSegment(self.id, self.coordinates, self.oneway, hazardous)


class RoadNetwork:
    """
    Road segments plus the routing graph built from them.

    A network is treated as a read-only value once constructed. Applying flood
    zones produces a new network whose segment map and graph edges both carry
    the updated hazardous flags, so a loaded network can be shared across
    concurrent requests.

    Attributes:
        graph (Graph): Frozen routing graph
        segments (list): Segments in load order
    """

    def __init__(self, segments: Iterable[RoadSegment], graph: Graph):
        segment_list = list(segments) if segments is not None else []
        if not segment_list:
            raise InvalidGeometryError("Road network must have at least one segment")

        self._segments: Dict[str, RoadSegment] = {}
        for segment in segment_list:
            if segment.id in self._segments:
                raise InvalidGeometryError(f"Duplicate segment ID: {segment.id}")
            self._segments[segment.id] = segment
        self._graph = graph

    @property
    def graph(self) -> Graph:
        return self._graph

    @property
    def segments(self) -> List[RoadSegment]:
        return list(self._segments.values())

    @property
    def hazardous_segment_ids(self) -> List[str]:
        return [s.id for s in self._segments.values() if s.hazardous]

    def find_segment(self, segment_id: str) -> Optional[RoadSegment]:
        return self._segments.get(segment_id)

    def find_nearest_node(self, coordinate: Coordinate) -> Optional[Node]:
        """
        Exhaustive nearest-node search by haversine distance.

        The first node encountered wins on exact ties. Returns None when the
        graph has no nodes.
        """
        nearest = None
        nearest_distance = float("inf")
        for node in self._graph.nodes:
            distance = node.coordinate.distance_to(coordinate)
            if distance < nearest_distance:
                nearest = node
                nearest_distance = distance
        return nearest

    def apply_flood_zones(
        self, zones: Sequence[FloodZone], detector: "HazardDetector"
    ) -> "RoadNetwork":
        """
        Classify segments against flood zones and return the updated network.

        Matched segments are replaced by with_hazardous(True) copies and the
        graph edges of those segments are flagged in a frozen graph copy, so
        the penalty applied during search agrees with the segment map. When
        nothing matches, self is returned.

        Args:
            zones: Flood zones already filtered to the relevant instant
            detector: Hazard detection strategy

        Returns:
            RoadNetwork: New network (or self when no segment is hazardous)
        """
        hazardous_ids = detector.detect_hazardous_segments(self.segments, zones)
        matched = {sid for sid in hazardous_ids if sid in self._segments}
        if not matched:
            logger.debug("No segments intersect the supplied flood zones")
            return self

        updated = [
            segment.with_hazardous(True) if segment.id in matched else segment
            for segment in self._segments.values()
        ]
        logger.info(
            f"Flagged {len(matched)} of {len(updated)} segments as hazardous "
            f"({len(zones)} flood zones)"
        )
        return RoadNetwork(updated, self._graph.with_hazardous_segments(matched))
