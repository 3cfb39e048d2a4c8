"""
@file config.py
@brief Environment-driven application configuration

@details
All settings are read from environment variables with development defaults:
- ROAD_NETWORK_PATH: GeoJSON road network (LineString/MultiLineString)
- FLOOD_ZONES_PATH: GeoJSON flood zones (Polygon/MultiPolygon)
- MAX_ROUTE_DISTANCE_METERS: straight-line limit between endpoints
- ROUTE_TIMEOUT_SECONDS: deadline for a single route calculation
- NETWORK_CACHE_TTL / FLOOD_ZONE_CACHE_TTL: Redis TTLs for GeoJSON views

Values are resolved when this module is imported.

@author EvacRoute Project
@date 2026-10-18
@version 1.0
@license AGPL-3.0
"""

import os

## @brief Road network GeoJSON file
ROAD_NETWORK_PATH = os.getenv("ROAD_NETWORK_PATH", "data/roads.geojson")

## @brief Flood zone GeoJSON file (missing file = no hazards)
FLOOD_ZONES_PATH = os.getenv("FLOOD_ZONES_PATH", "data/flood_zones.geojson")

## @brief Maximum straight-line distance between start and end (200 km)
MAX_ROUTE_DISTANCE_METERS = float(os.getenv("MAX_ROUTE_DISTANCE_METERS", "200000"))

## @brief Route calculation deadline in seconds
ROUTE_TIMEOUT_SECONDS = float(os.getenv("ROUTE_TIMEOUT_SECONDS", "30"))

## @brief Cache TTL for the road network GeoJSON view (24h)
NETWORK_CACHE_TTL = int(os.getenv("NETWORK_CACHE_TTL", "86400"))

## @brief Cache TTL for the active flood zone GeoJSON view (5 min)
FLOOD_ZONE_CACHE_TTL = int(os.getenv("FLOOD_ZONE_CACHE_TTL", "300"))

## @brief Redis connection URL
REDIS_URL = os.getenv("REDIS_URL", "redis://localhost:6379/0")
