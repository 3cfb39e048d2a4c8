"""
Route Result Model

A computed route is the ordered list of traversed road segments plus the
metadata reported to clients (distance, timing, hazard exposure).

Author: EvacRoute Project
License: AGPL-3.0
"""

from dataclasses import dataclass
from datetime import datetime
from typing import List, Tuple

from evacroute.models.geo import Coordinate
from evacroute.models.road_network import RoadSegment


@dataclass(frozen=True)
class RouteMetadata:
    """
    Metadata computed for a route.

    Attributes:
        distance_meters (float): Sum of traversed segment lengths (>= 0)
        computation_time_ms (int): Wall-clock duration of the calculation (>= 0)
        hazardous_segment_count (int): Hazardous segments in the final path
        safety_score (float): 1 - hazardous/total, in [0, 1]; 1.0 when empty
        timestamp (datetime): UTC instant the route was produced
        all_paths_hazardous (bool): True iff every traversed segment is hazardous
    """

    distance_meters: float
    computation_time_ms: int
    hazardous_segment_count: int
    safety_score: float
    timestamp: datetime
    all_paths_hazardous: bool

    def __post_init__(self):
        if not 0.0 <= self.safety_score <= 1.0:
            raise ValueError(
                f"Safety score must be [0.0, 1.0], got: {self.safety_score}"
            )
        if self.distance_meters < 0:
            raise ValueError("Distance cannot be negative")
        if self.computation_time_ms < 0:
            raise ValueError("Computation time cannot be negative")


@dataclass(frozen=True)
class Route:
    """Ordered road segments (possibly empty) and their metadata."""

    segments: Tuple[RoadSegment, ...]
    metadata: RouteMetadata

    def __post_init__(self):
        if self.segments is None:
            raise ValueError("Route segments cannot be null")
        if self.metadata is None:
            raise ValueError("Metadata cannot be null")
        object.__setattr__(self, "segments", tuple(self.segments))

    @property
    def coordinates(self) -> List[Coordinate]:
        """Segment polylines concatenated in traversal order."""
        return [coord for segment in self.segments for coord in segment.coordinates]

    @property
    def segment_ids(self) -> List[str]:
        return [segment.id for segment in self.segments]

