"""
@file health.py
@brief System health checks and status monitoring

@details
Provides health checks for:
- Road network data (critical: no routing without it)
- Flood zone data (optional: missing file means no known hazards)
- Redis cache connectivity (optional)

@author EvacRoute Project
@date 2026-10-18
@version 1.0
@license AGPL-3.0
"""

import logging
import os
from typing import Any, Dict

from evacroute.core import config
from evacroute.core.cache import cache

logger = logging.getLogger(__name__)


class HealthStatus:
    """Health status indicator for system components"""

    HEALTHY = "healthy"
    DEGRADED = "degraded"
    UNHEALTHY = "unhealthy"


def _check_readable(path: str) -> bool:
    return os.path.isfile(path) and os.access(path, os.R_OK)


async def check_road_data() -> Dict[str, Any]:
    """
    @brief Check that the road network GeoJSON file is readable

    @return Dict with status, message and component name
    """
    path = config.ROAD_NETWORK_PATH
    if _check_readable(path):
        return {
            "status": HealthStatus.HEALTHY,
            "message": "Road network data is available",
            "component": "road_data"
        }
    logger.error(f"Road network data not readable at {path}")
    return {
        "status": HealthStatus.UNHEALTHY,
        "message": "Road network data is unavailable",
        "component": "road_data",
        "error": f"File not readable: {path}"
    }


async def check_flood_zone_data() -> Dict[str, Any]:
    """
    @brief Check that the flood zone GeoJSON file is readable
    @details
    Routes are still served without it, but without hazard avoidance,
    so a missing file only degrades the system.
    """
    path = config.FLOOD_ZONES_PATH
    if _check_readable(path):
        return {
            "status": HealthStatus.HEALTHY,
            "message": "Flood zone data is available",
            "component": "flood_zone_data"
        }
    logger.warning(f"Flood zone data not readable at {path}")
    return {
        "status": HealthStatus.DEGRADED,
        "message": "Flood zone data is unavailable (routing without hazard avoidance)",
        "component": "flood_zone_data",
        "error": f"File not readable: {path}"
    }


async def check_cache() -> Dict[str, Any]:
    """
    @brief Check Redis cache connectivity

    @return Dict with status, message
    @details
    Attempts a PING to Redis to verify connectivity.
    Redis is optional - degraded status if unavailable.
    """
    try:
        if not cache.client:
            return {
                "status": HealthStatus.DEGRADED,
                "message": "Redis cache is not initialized",
                "component": "cache"
            }

        await cache.client.ping()
        return {
            "status": HealthStatus.HEALTHY,
            "message": "Redis cache is healthy",
            "component": "cache"
        }
    except Exception as e:
        logger.warning(f"Cache health check failed: {e}")
        return {
            "status": HealthStatus.DEGRADED,
            "message": "Redis cache is unavailable (running in degraded mode)",
            "component": "cache",
            "error": str(e)
        }


async def get_system_health() -> Dict[str, Any]:
    """
    @brief Get comprehensive system health status

    @return Dict with overall status and component details
    @details
    - HEALTHY: All components operational
    - DEGRADED: Road data OK, flood zones or cache unavailable
    - UNHEALTHY: Road data unavailable (critical failure)
    """
    components = {
        "road_data": await check_road_data(),
        "flood_zone_data": await check_flood_zone_data(),
        "cache": await check_cache(),
    }

    statuses = [component["status"] for component in components.values()]
    if components["road_data"]["status"] == HealthStatus.UNHEALTHY:
        overall_status = HealthStatus.UNHEALTHY
    elif HealthStatus.DEGRADED in statuses:
        overall_status = HealthStatus.DEGRADED
    else:
        overall_status = HealthStatus.HEALTHY

    return {
        "status": overall_status,
        "components": components,
        "message": get_status_message(overall_status)
    }


def get_status_message(status: str) -> str:
    """Get human-readable status message"""
    messages = {
        HealthStatus.HEALTHY: "System is operational",
        HealthStatus.DEGRADED: "System is running with reduced functionality (optional data or services unavailable)",
        HealthStatus.UNHEALTHY: "System is in maintenance mode (road network data unavailable)"
    }
    return messages.get(status, "Unknown status")
