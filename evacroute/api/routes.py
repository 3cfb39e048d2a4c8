"""
@file routes.py
@brief FastAPI endpoint definitions for evacuation routing

@details
Provides RESTful endpoints for:
- Safest-route calculation avoiding active flood zones (GeoJSON Feature)
- Road network export (GeoJSON FeatureCollection, cached)
- Active flood zone export (GeoJSON FeatureCollection, cached)

Route calculation is CPU bound and synchronous; it runs in the event
loop's default executor under a deadline of ROUTE_TIMEOUT_SECONDS. Computed routes are
never cached.

@author EvacRoute Project
@date 2026-10-18
@version 1.0
@license AGPL-3.0

@see services.evacuation for the use case behind these endpoints
@see api.mapping for request parsing and GeoJSON serialization
"""

import asyncio
import logging
from typing import Optional

from fastapi import APIRouter, Depends, Query
from starlette.concurrency import run_in_threadpool

from evacroute.api.mapping import (
    COORDINATE_PATTERN,
    flood_zones_to_feature_collection,
    parse_coordinate,
    route_to_feature,
    segments_to_feature_collection,
)
from evacroute.core import config
from evacroute.core.cache import cache
from evacroute.models.exceptions import RouteComputationTimeoutError
from evacroute.services.evacuation import EvacuationService

## @brief FastAPI router instance for evacuation endpoints
router = APIRouter(prefix="/api/evac", tags=["Evacuation Routes"])

## @brief Module-level logger for request/response debugging
logger = logging.getLogger(__name__)

_service: Optional[EvacuationService] = None


def get_evacuation_service() -> EvacuationService:
    """
    @brief FastAPI dependency providing the shared EvacuationService

    @details
    The service keeps the parsed road network between requests; tests
    replace it through app.dependency_overrides.
    """
    global _service
    if _service is None:
        _service = EvacuationService()
    return _service


@router.get("/route")
async def calculate_route(
    start: str = Query(
        ...,
        pattern=COORDINATE_PATTERN,
        description="Start coordinate (latitude,longitude)",
        examples=["52.2297,21.0122"],
    ),
    end: str = Query(
        ...,
        pattern=COORDINATE_PATTERN,
        description="End coordinate (latitude,longitude)",
        examples=["52.2400,21.0250"],
    ),
    service: EvacuationService = Depends(get_evacuation_service),
):
    """
    @brief Calculate the safest evacuation route between two points

    @details
    Snaps both coordinates to the nearest road network nodes and runs a
    hazard-penalized Dijkstra search. Segments intersecting an active flood
    zone cost 10,000x their length, so they are used only when no dry
    alternative exists.

    @param start "lat,lon" start coordinate (e.g. "52.2297,21.0122")
    @param end "lat,lon" end coordinate (e.g. "52.2400,21.0250")

    @return GeoJSON Feature with LineString geometry and route metadata:
    - distanceMeters, computationTimeMs, hazardousSegmentsAvoided
    - safetyScore (1.0 = no hazardous segments), allPathsHazardous
    - timestamp, segmentCount

    @throws 400 bad or missing coordinates, or endpoints further apart
    than the limit
    @throws 404 no route available
    @throws 503 computation timeout or road data unavailable
    """
    logger.info(f"GET /api/evac/route?start={start}&end={end}")

    start_coord = parse_coordinate(start)
    end_coord = parse_coordinate(end)

    timeout = config.ROUTE_TIMEOUT_SECONDS
    loop = asyncio.get_running_loop()
    try:
        # The worker thread cannot be interrupted; on timeout it finishes unobserved.
        route = await asyncio.wait_for(
            loop.run_in_executor(None, service.calculate_route, start_coord, end_coord),
            timeout=timeout,
        )
    except asyncio.TimeoutError:
        raise RouteComputationTimeoutError(timeout)

    return route_to_feature(route)


@router.get("/network")
async def get_network(service: EvacuationService = Depends(get_evacuation_service)):
    """
    @brief Retrieve the road network as a GeoJSON FeatureCollection
    @details
    Cached in Redis for NETWORK_CACHE_TTL seconds (24h by default).
    Segments are returned without flood zone flags.
    """
    cache_key = "api:evac:network:geojson"
    cached = await cache.get(cache_key)
    if cached:
        return cached

    network = await run_in_threadpool(service.get_base_network)
    result = segments_to_feature_collection(network.segments)

    await cache.set(cache_key, result, ttl=config.NETWORK_CACHE_TTL)
    return result


@router.get("/flood-zones")
async def get_flood_zones(service: EvacuationService = Depends(get_evacuation_service)):
    """
    @brief Retrieve flood zones active now as a GeoJSON FeatureCollection
    @details
    Cached in Redis for FLOOD_ZONE_CACHE_TTL seconds (5 minutes by default).
    """
    cache_key = "api:evac:flood-zones:geojson"
    cached = await cache.get(cache_key)
    if cached:
        return cached

    zones = await run_in_threadpool(service.get_active_flood_zones)
    result = flood_zones_to_feature_collection(zones)

    await cache.set(cache_key, result, ttl=config.FLOOD_ZONE_CACHE_TTL)
    return result
