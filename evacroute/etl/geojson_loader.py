"""
GeoJSON Road Network and Flood Zone Loader

This module reads the two data sources the router depends on and converts
them into domain values:

1. Road network: LineString / MultiLineString features -> RoadSegment values,
   then GraphBuilder -> RoadNetwork
2. Flood zones: Polygon / MultiPolygon features -> FloodZone values, with an
   optional validFrom/validUntil window per feature

Data Format:
- Coordinates are GeoJSON (longitude, latitude) pairs in WGS84 (EPSG:4326)
- Road features may carry an "oneway" property: yes/true/1 (case
  insensitive) or a boolean marks the road one-way
- Flood zone features may carry ISO-8601 "validFrom" / "validUntil" properties
- Feature ids come from the "id" property; rows without one are numbered
- Multi-part geometries produce one value per part with id "<id>_<i>"

Processing Workflow:
1. Read the file with geopandas
2. Convert each row, skipping unsupported geometry types and invalid
   coordinates with a warning
3. Build the routing graph (roads) or filter by validity instant (zones)

Author: EvacRoute Project
License: AGPL-3.0
"""

import logging
import os
import time
from datetime import datetime
from typing import Any, Iterable, List, Optional

import geopandas as gpd
import pandas as pd

from evacroute.models.exceptions import EvacRouteError, RoadDataUnavailableError
from evacroute.models.geo import Coordinate, FloodZone
from evacroute.models.road_network import RoadNetwork, RoadSegment
from evacroute.services.graph_builder import GraphBuilder

logger = logging.getLogger(__name__)

# GeoJSON property keys
ID_PROPERTY = "id"
ONEWAY_PROPERTY = "oneway"
VALID_FROM_PROPERTY = "validFrom"
VALID_UNTIL_PROPERTY = "validUntil"

ONEWAY_TRUE_VALUES = {"yes", "true", "1"}


def read_features(path: str) -> gpd.GeoDataFrame:
    """
    Read a GeoJSON file into a GeoDataFrame.

    Args:
        path (str): File path

    Returns:
        gpd.GeoDataFrame: One row per feature

    Raises:
        FileNotFoundError: If the file does not exist
    """
    if not os.path.exists(path):
        raise FileNotFoundError(path)
    logger.info(f"Loading GeoJSON: {path}")
    gdf = gpd.read_file(path)
    logger.info(f"  → Loaded {len(gdf)} features")
    return gdf


# ---------------------------------------------------------------------------
# Property parsing
# ---------------------------------------------------------------------------

def _is_missing(value: Any) -> bool:
    if value is None:
        return True
    try:
        return bool(pd.isna(value))
    except (TypeError, ValueError):
        return False


def feature_id(row: pd.Series, index: int, prefix: str) -> str:
    """Feature id from the "id" property, else "<prefix>-<index>"."""
    value = row.get(ID_PROPERTY)
    if _is_missing(value) or not str(value).strip():
        return f"{prefix}-{index}"
    return str(value).strip()


def parse_oneway(value: Any) -> bool:
    """Interpret an "oneway" property value; anything unrecognised is two-way."""
    if _is_missing(value):
        return False
    if pd.api.types.is_bool(value):
        return bool(value)
    if pd.api.types.is_number(value):
        return bool(value == 1)
    return str(value).strip().lower() in ONEWAY_TRUE_VALUES


def parse_instant(value: Any) -> Optional[datetime]:
    """Parse an ISO-8601 string or datetime into a UTC-aware datetime."""
    if _is_missing(value):
        return None
    timestamp = pd.Timestamp(value)
    if timestamp.tzinfo is None:
        timestamp = timestamp.tz_localize("UTC")
    else:
        timestamp = timestamp.tz_convert("UTC")
    return timestamp.to_pydatetime()


def _to_coordinates(coords: Iterable) -> List[Coordinate]:
    # GeoJSON positions are (lon, lat[, z])
    return [Coordinate(point[1], point[0]) for point in coords]


# ---------------------------------------------------------------------------
# Road network
# ---------------------------------------------------------------------------

def road_segments_from_frame(gdf: gpd.GeoDataFrame) -> List[RoadSegment]:
    """
    Convert road features to RoadSegment values.

    LineString rows produce one segment, MultiLineString rows one segment per
    part. Rows with other geometry types, invalid coordinates or an already
    used id are skipped with a warning.
    """
    segments: List[RoadSegment] = []
    seen = set()

    for index, (_, row) in enumerate(gdf.iterrows()):
        geom = row.geometry
        if geom is None or geom.is_empty:
            continue

        base_id = feature_id(row, index, "road")
        oneway = parse_oneway(row.get(ONEWAY_PROPERTY))

        if geom.geom_type == "LineString":
            parts = [(base_id, geom)]
        elif geom.geom_type == "MultiLineString":
            parts = [(f"{base_id}_{i}", line) for i, line in enumerate(geom.geoms)]
        else:
            logger.warning(f"Unsupported geometry type: {geom.geom_type} ({base_id})")
            continue

        for segment_id, line in parts:
            if segment_id in seen:
                logger.warning(f"Duplicate segment id skipped: {segment_id}")
                continue
            try:
                segment = RoadSegment(segment_id, tuple(_to_coordinates(line.coords)), oneway)
            except EvacRouteError as e:
                logger.warning(f"Invalid road feature {segment_id} skipped: {e}")
                continue
            seen.add(segment_id)
            segments.append(segment)

    return segments


def load_road_network(path: str, builder: Optional[GraphBuilder] = None) -> RoadNetwork:
    """
    Load road segments from GeoJSON and build the routing network.

    Args:
        path (str): Road network GeoJSON path
        builder (GraphBuilder): Graph builder (default tolerance if omitted)

    Returns:
        RoadNetwork: Segments with a frozen routing graph

    Raises:
        RoadDataUnavailableError: If the file is missing or yields no segments
    """
    started = time.perf_counter()
    try:
        gdf = read_features(path)
    except FileNotFoundError:
        raise RoadDataUnavailableError(f"Road network file not found: {path}")

    segments = road_segments_from_frame(gdf)
    if not segments:
        raise RoadDataUnavailableError(f"No valid road segments found in: {path}")

    graph = (builder or GraphBuilder()).build(segments)
    network = RoadNetwork(segments, graph)

    duration_ms = (time.perf_counter() - started) * 1000
    logger.info(
        f"[DATA_LOAD] Loaded {len(segments)} segments, {graph.node_count} nodes, "
        f"{graph.edge_count} edges in {duration_ms:.0f} ms"
    )
    return network


# ---------------------------------------------------------------------------
# Flood zones
# ---------------------------------------------------------------------------

def _polygon_rings(polygon) -> List[List[Coordinate]]:
    rings = [_to_coordinates(polygon.exterior.coords)]
    rings.extend(_to_coordinates(interior.coords) for interior in polygon.interiors)
    return rings


def flood_zones_from_frame(gdf: gpd.GeoDataFrame) -> List[FloodZone]:
    """
    Convert flood zone features to FloodZone values.

    Polygon rows produce one zone, MultiPolygon rows one zone per part.
    """
    zones: List[FloodZone] = []

    for index, (_, row) in enumerate(gdf.iterrows()):
        geom = row.geometry
        if geom is None or geom.is_empty:
            continue

        base_id = feature_id(row, index, "zone")
        if geom.geom_type == "Polygon":
            parts = [(base_id, geom)]
        elif geom.geom_type == "MultiPolygon":
            parts = [(f"{base_id}_{i}", poly) for i, poly in enumerate(geom.geoms)]
        else:
            logger.warning(f"Unsupported flood zone geometry: {geom.geom_type} ({base_id})")
            continue

        valid_from = parse_instant(row.get(VALID_FROM_PROPERTY))
        valid_until = parse_instant(row.get(VALID_UNTIL_PROPERTY))

        for zone_id, polygon in parts:
            try:
                zones.append(FloodZone(
                    id=zone_id,
                    rings=tuple(tuple(r) for r in _polygon_rings(polygon)),
                    valid_from=valid_from,
                    valid_until=valid_until,
                ))
            except EvacRouteError as e:
                logger.warning(f"Invalid flood zone {zone_id} skipped: {e}")

    return zones


def load_flood_zones(path: str) -> List[FloodZone]:
    """
    Load every flood zone in a GeoJSON file.

    A missing file means no flood zones are published; an empty list is
    returned with a warning.
    """
    try:
        gdf = read_features(path)
    except FileNotFoundError:
        logger.warning(f"Flood zones file not found: {path}, assuming no flood zones")
        return []
    return flood_zones_from_frame(gdf)


def load_active_flood_zones(path: str, at: datetime) -> List[FloodZone]:
    """
    Load flood zones valid at the given instant.

    Args:
        path (str): Flood zone GeoJSON path
        at (datetime): UTC-aware instant to filter on

    Returns:
        list: Zones for which FloodZone.is_valid_at(at) holds
    """
    started = time.perf_counter()
    zones = load_flood_zones(path)
    active = [zone for zone in zones if zone.is_valid_at(at)]

    duration_ms = (time.perf_counter() - started) * 1000
    logger.info(
        f"[DATA_LOAD] Loaded {len(zones)} flood zones ({len(active)} active at "
        f"{at.isoformat()}) in {duration_ms:.0f} ms"
    )
    return active
