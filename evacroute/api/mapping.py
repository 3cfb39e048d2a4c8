"""
@file mapping.py
@brief Request parsing and GeoJSON response mapping

@details
Converts between wire formats and domain values:
- "lat,lon" query strings -> Coordinate (rounded to 6 decimals, ~0.11 m)
- Route -> GeoJSON Feature with a LineString in [lon, lat] order
- RoadNetwork / FloodZone lists -> GeoJSON FeatureCollections for map views

@author EvacRoute Project
@date 2026-10-18
@version 1.0
@license AGPL-3.0
"""

from typing import Any, Dict, Iterable, List

from evacroute.models.exceptions import InvalidCoordinateError
from evacroute.models.geo import Coordinate, FloodZone
from evacroute.models.road_network import RoadSegment
from evacroute.models.route import Route

## @brief Decimal places kept when parsing request coordinates
COORDINATE_PRECISION = 6

## @brief Accepted "lat,lon" format for query parameters
COORDINATE_PATTERN = r"^\s*-?\d+(\.\d+)?\s*,\s*-?\d+(\.\d+)?\s*$"


def parse_coordinate(value: str) -> Coordinate:
    """
    @brief Parse a "lat,lon" string into a Coordinate

    @throws InvalidCoordinateError on blank input, wrong arity, non-numeric
            parts or out-of-range values
    """
    if value is None or not value.strip():
        raise InvalidCoordinateError("Coordinate string cannot be null or blank")

    parts = value.strip().split(",")
    if len(parts) != 2:
        raise InvalidCoordinateError("Invalid coordinate format. Expected: 'lat,lon'")

    try:
        lat = float(parts[0].strip())
        lon = float(parts[1].strip())
    except ValueError:
        raise InvalidCoordinateError(f"Invalid coordinate numbers: {value}")

    return Coordinate(round(lat, COORDINATE_PRECISION), round(lon, COORDINATE_PRECISION))


def _positions(coordinates: Iterable[Coordinate]) -> List[List[float]]:
    return [[coord.longitude, coord.latitude] for coord in coordinates]


def route_to_feature(route: Route) -> Dict[str, Any]:
    """
    @brief Serialize a Route as a GeoJSON Feature

    @details
    Geometry is the concatenation of the traversed segment polylines.
    """
    metadata = route.metadata
    return {
        "type": "Feature",
        "geometry": {
            "type": "LineString",
            "coordinates": _positions(route.coordinates),
        },
        "properties": {
            "distanceMeters": metadata.distance_meters,
            "computationTimeMs": metadata.computation_time_ms,
            "hazardousSegmentsAvoided": metadata.hazardous_segment_count,
            "safetyScore": metadata.safety_score,
            "timestamp": metadata.timestamp.isoformat(),
            "allPathsHazardous": metadata.all_paths_hazardous,
            "segmentCount": len(route.segments),
        },
    }


def segments_to_feature_collection(segments: Iterable[RoadSegment]) -> Dict[str, Any]:
    features = [
        {
            "type": "Feature",
            "geometry": {"type": "LineString", "coordinates": _positions(s.coordinates)},
            "properties": {
                "id": s.id,
                "oneway": s.oneway,
                "hazardous": s.hazardous,
                "lengthMeters": round(s.length_meters, 2),
            },
        }
        for s in segments
    ]
    return {"type": "FeatureCollection", "features": features, "count": len(features)}


def flood_zones_to_feature_collection(zones: Iterable[FloodZone]) -> Dict[str, Any]:
    features = [
        {
            "type": "Feature",
            "geometry": {
                "type": "Polygon",
                "coordinates": [_positions(ring) for ring in zone.rings],
            },
            "properties": {
                "id": zone.id,
                "validFrom": zone.valid_from.isoformat() if zone.valid_from else None,
                "validUntil": zone.valid_until.isoformat() if zone.valid_until else None,
            },
        }
        for zone in zones
    ]
    return {"type": "FeatureCollection", "features": features, "count": len(features)}
