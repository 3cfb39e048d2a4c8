"""
Geometry Primitives

This module defines the immutable geographic value types shared by the graph
builder, the hazard detector and the route calculation service.

Models:
- Coordinate: WGS84 point with great-circle (haversine) distance
- FloodZone: hazard polygon (outer ring + optional holes) with an optional
  validity window

Coordinates are stored as (latitude, longitude) in decimal degrees. Geometry
backends such as shapely expect (x=longitude, y=latitude); conversion happens
at the backend boundary, never here.

Author: EvacRoute Project
License: AGPL-3.0
"""

import math
from dataclasses import dataclass
from datetime import datetime
from typing import Iterable, Optional, Sequence, Tuple

from evacroute.models.exceptions import InvalidCoordinateError, InvalidGeometryError

MIN_LATITUDE = -90.0
MAX_LATITUDE = 90.0
MIN_LONGITUDE = -180.0
MAX_LONGITUDE = 180.0

# WGS84 mean radius; haversine accuracy is about 0.5%, well within what
# evacuation routing needs.
EARTH_RADIUS_METERS = 6_371_000.0

MIN_RING_POINTS = 3


@dataclass(frozen=True)
class Coordinate:
    """
    WGS84 geographic point.

    Attributes:
        latitude (float): Decimal degrees in [-90, 90]
        longitude (float): Decimal degrees in [-180, 180]

    Raises:
        InvalidCoordinateError: If either value is out of range or NaN
    """

    latitude: float
    longitude: float

    def __post_init__(self):
        if not MIN_LATITUDE <= self.latitude <= MAX_LATITUDE:
            raise InvalidCoordinateError(
                f"Latitude must be [{MIN_LATITUDE:.1f}, {MAX_LATITUDE:.1f}], "
                f"got: {self.latitude:.6f}"
            )
        if not MIN_LONGITUDE <= self.longitude <= MAX_LONGITUDE:
            raise InvalidCoordinateError(
                f"Longitude must be [{MIN_LONGITUDE:.1f}, {MAX_LONGITUDE:.1f}], "
                f"got: {self.longitude:.6f}"
            )

    def distance_to(self, other: "Coordinate") -> float:
        """
        Great-circle distance to another coordinate in meters (haversine).

        The longitude delta is wrapped into (-pi, pi] so that points on either
        side of the antimeridian measure the short way round.
        """
        lat1 = math.radians(self.latitude)
        lat2 = math.radians(other.latitude)
        d_lat = math.radians(other.latitude - self.latitude)
        d_lon = math.radians(other.longitude - self.longitude)

        if abs(d_lon) > math.pi:
            d_lon = d_lon - 2 * math.pi if d_lon > 0 else d_lon + 2 * math.pi

        a = (
            math.sin(d_lat / 2) ** 2
            + math.cos(lat1) * math.cos(lat2) * math.sin(d_lon / 2) ** 2
        )
        central_angle = 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))
        return EARTH_RADIUS_METERS * central_angle

    def to_lon_lat(self) -> Tuple[float, float]:
        """Return the (x, y) pair used by GeoJSON and shapely."""
        return (self.longitude, self.latitude)


Ring = Tuple[Coordinate, ...]


@dataclass(frozen=True)
class FloodZone:
    """
    Polygonal hazard zone.

    Attributes:
        id (str): Non-blank zone identifier
        rings (tuple): Polygon rings; the first is the outer boundary, any
            further rings are holes. Each ring holds at least 3 points.
        valid_from (datetime): Start of validity (inclusive), None if unbounded
        valid_until (datetime): End of validity (inclusive), None if unbounded
    """

    id: str
    rings: Tuple[Ring, ...]
    valid_from: Optional[datetime] = None
    valid_until: Optional[datetime] = None

    def __post_init__(self):
        if not self.id or not str(self.id).strip():
            raise InvalidGeometryError("FloodZone ID cannot be null or blank")
        if not self.rings:
            raise InvalidGeometryError("FloodZone must have at least one polygon ring")

        rings = tuple(tuple(ring) for ring in self.rings)
        for index, ring in enumerate(rings):
            if len(ring) < MIN_RING_POINTS:
                raise InvalidGeometryError(
                    f"Polygon ring {index} must have at least {MIN_RING_POINTS} "
                    f"points, got: {len(ring)}"
                )
        object.__setattr__(self, "rings", rings)

    @classmethod
    def from_rings(
        cls,
        zone_id: str,
        rings: Iterable[Sequence[Tuple[float, float]]],
        valid_from: Optional[datetime] = None,
        valid_until: Optional[datetime] = None,
    ) -> "FloodZone":
        """Build a zone from rings of (latitude, longitude) pairs."""
        return cls(
            id=zone_id,
            rings=tuple(
                tuple(Coordinate(lat, lon) for lat, lon in ring) for ring in rings
            ),
            valid_from=valid_from,
            valid_until=valid_until,
        )

    @property
    def outer_ring(self) -> Ring:
        return self.rings[0]

    @property
    def holes(self) -> Tuple[Ring, ...]:
        return self.rings[1:]

    def is_valid_at(self, timestamp: datetime) -> bool:
        """True when timestamp lies within [valid_from, valid_until]."""
        if self.valid_from is None and self.valid_until is None:
            return True
        after_start = self.valid_from is None or timestamp >= self.valid_from
        before_end = self.valid_until is None or timestamp <= self.valid_until
        return after_start and before_end
