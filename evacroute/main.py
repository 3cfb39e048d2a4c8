"""
@file main.py
@brief FastAPI application factory and root endpoint.
@details
Initializes the EvacRoute FastAPI application with:
- Logging configuration
- Road network warm-up
- Middleware setup (CORS, data source error handling)
- Router registration (evacuation API, health)
- Routing error handlers

@author EvacRoute Project
@date 2026-10-18
@version 1.0
@license AGPL-3.0
"""

from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import HTMLResponse
from starlette.concurrency import run_in_threadpool
from starlette.exceptions import HTTPException

from evacroute.api import routes
from evacroute.api.endpoints import health
from evacroute.core import docs, exceptions
from evacroute.core.cache import cache
from evacroute.core.logging import setup_logging
from evacroute.core.middleware import DataSourceErrorMiddleware
from evacroute.models.exceptions import (
    InvalidCoordinateError,
    InvalidRouteRequestError,
    RoadDataUnavailableError,
    RouteComputationTimeoutError,
    RouteNotFoundError,
)

# Configure logging
logger = setup_logging()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    @brief Application lifecycle manager
    @details
    Handles startup and shutdown events:
    - Road network loading (so the first route request is fast)
    - Redis connection
    """
    logger.info("Starting EvacRoute API...")

    try:
        network = await run_in_threadpool(routes.get_evacuation_service().get_base_network)
        logger.info(
            f"Road network ready: {len(network.segments)} segments, "
            f"{network.graph.node_count} nodes"
        )
    except RoadDataUnavailableError as e:
        logger.error(f"Road network not loaded at startup: {e}")

    await cache.connect()

    yield

    await cache.close()
    logger.info("EvacRoute API shutdown completed")


## @brief FastAPI application instance
app = FastAPI(
    title="EvacRoute API - Flood-Aware Evacuation Routing",
    lifespan=lifespan,
    docs_url="/api/docs",
    redoc_url=None
)

# --------------------------------------------------------------------------
# Middleware
# --------------------------------------------------------------------------

# Production Note: Restrict allow_origins in production
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.add_middleware(DataSourceErrorMiddleware)


# --------------------------------------------------------------------------
# Routers
# --------------------------------------------------------------------------

app.include_router(health.router)
app.include_router(routes.router)


# --------------------------------------------------------------------------
# Exception Handlers
# --------------------------------------------------------------------------

app.add_exception_handler(HTTPException, exceptions.http_exception_handler)
app.add_exception_handler(RequestValidationError, exceptions.validation_exception_handler)
app.add_exception_handler(InvalidCoordinateError, exceptions.invalid_request_handler)
app.add_exception_handler(InvalidRouteRequestError, exceptions.invalid_request_handler)
app.add_exception_handler(RouteNotFoundError, exceptions.route_not_found_handler)
app.add_exception_handler(RouteComputationTimeoutError, exceptions.service_unavailable_handler)
app.add_exception_handler(RoadDataUnavailableError, exceptions.service_unavailable_handler)
app.add_exception_handler(Exception, exceptions.general_exception_handler)


@app.get("/", response_class=HTMLResponse)
def read_root():
    """
    @brief Serve root documentation page
    """
    return docs.get_root_documentation()
