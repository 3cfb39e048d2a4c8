"""
@file health.py
@brief Health check API endpoints
@details
Provides endpoints for monitoring system status, readiness, and liveness.
Only missing road data makes the service unhealthy; a degraded system
still answers route requests.

@author EvacRoute Project
@date 2026-10-18
@version 1.0
@license AGPL-3.0
"""

from fastapi import APIRouter
from fastapi.responses import JSONResponse

from evacroute.core.health import HealthStatus, get_system_health

router = APIRouter(tags=["Health"])


@router.get("/health")
async def health_check():
    """
    @brief Get system health status

    @details
    Reports road data, flood zone data and cache status.
    Returns 503 only when road data is unavailable.
    """
    health = await get_system_health()
    body = {
        "status": health["status"],
        "message": health["message"],
        "components": health["components"]
    }

    if health["status"] == HealthStatus.UNHEALTHY:
        body["note"] = "System is in maintenance mode. Routing is unavailable."
        return JSONResponse(status_code=503, content=body)
    if health["status"] == HealthStatus.DEGRADED:
        body["note"] = "System is running with reduced functionality."

    return body


@router.get("/health/ready")
async def readiness_check():
    """
    @brief Kubernetes readiness probe
    @details Returns 200 whenever routes can be served (healthy or degraded).
    """
    health = await get_system_health()

    if health["status"] != HealthStatus.UNHEALTHY:
        return {"ready": True, "status": "System is ready"}
    return JSONResponse(
        status_code=503,
        content={
            "ready": False,
            "status": "System is not ready",
            "reason": health["message"]
        }
    )


@router.get("/health/live")
async def liveness_check():
    """
    @brief Kubernetes liveness probe
    @details Returns 200 as long as application is running.
    """
    return {"alive": True, "status": "Application is running"}
