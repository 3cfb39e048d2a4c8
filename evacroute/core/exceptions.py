"""
@file exceptions.py
@brief Centralized exception handlers
@details
Provides consistent JSON error responses for HTTP exceptions, request
validation errors, routing errors and unexpected server errors.

Routing errors map to:
- request validation errors / InvalidCoordinateError / InvalidRouteRequestError -> 400
- RouteNotFoundError -> 404
- RouteComputationTimeoutError / RoadDataUnavailableError -> 503
- anything else -> 500

Every routing error body carries a request_id that is also written to the
log, so clients can quote it in support requests.

@author EvacRoute Project
@date 2026-10-18
@version 1.0
@license AGPL-3.0
"""

import logging
import uuid
from datetime import datetime, timezone

from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException

from evacroute.models.exceptions import (
    RoadDataUnavailableError,
    RouteComputationTimeoutError,
    RouteNotFoundError,
)

logger = logging.getLogger(__name__)

VALIDATION_ERROR = "VALIDATION_ERROR"
ROUTE_NOT_FOUND = "ROUTE_NOT_FOUND"
SERVICE_UNAVAILABLE = "SERVICE_UNAVAILABLE"
INTERNAL_ERROR = "INTERNAL_ERROR"


def error_response(status_code: int, error: str, message: str, request_id: str) -> JSONResponse:
    """
    @brief Build the JSON body shared by all routing error handlers
    """
    return JSONResponse(
        status_code=status_code,
        content={
            "error": error,
            "status_code": status_code,
            "message": message,
            "request_id": request_id,
            "timestamp": datetime.now(timezone.utc).isoformat(),
        }
    )


async def http_exception_handler(request: Request, exc: HTTPException):
    """
    @brief Custom HTTP exception handler
    @details Provides consistent error responses across the API.
    """
    return JSONResponse(
        status_code=exc.status_code,
        content={
            "error": str(exc.detail),
            "status_code": exc.status_code,
            "message": f"Request failed with HTTP {exc.status_code}"
        }
    )


async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """
    @brief Request validation error handler (400)
    @details
    Malformed or missing query parameters are rejected the same way as
    out-of-range coordinates: 400 VALIDATION_ERROR with a request_id.
    """
    request_id = str(uuid.uuid4())
    message = "; ".join(
        f"{error['loc'][-1] if error['loc'] else 'request'}: {error['msg']}"
        for error in exc.errors()
    ) or "Request validation failed"
    logger.warning(f"Invalid request parameters [requestId={request_id}]: {message}")
    return error_response(400, VALIDATION_ERROR, message, request_id)


async def invalid_request_handler(request: Request, exc: ValueError):
    """
    @brief Handler for invalid coordinates and rejected route requests (400)
    """
    request_id = str(uuid.uuid4())
    logger.warning(f"Invalid request [requestId={request_id}]: {exc}")
    return error_response(400, VALIDATION_ERROR, str(exc), request_id)


async def route_not_found_handler(request: Request, exc: RouteNotFoundError):
    """
    @brief Handler for well-formed requests the network cannot answer (404)
    """
    request_id = str(uuid.uuid4())
    logger.warning(f"Route not found [requestId={request_id}]: {exc}")
    return error_response(404, ROUTE_NOT_FOUND, str(exc), request_id)


async def service_unavailable_handler(request: Request, exc: Exception):
    """
    @brief Handler for timeouts and missing road data (503)
    """
    request_id = str(uuid.uuid4())
    if isinstance(exc, RouteComputationTimeoutError):
        logger.warning(f"Route computation timeout [requestId={request_id}]")
    elif isinstance(exc, RoadDataUnavailableError):
        logger.error(f"Road data unavailable [requestId={request_id}]: {exc}")
    return error_response(503, SERVICE_UNAVAILABLE, str(exc), request_id)


async def general_exception_handler(request: Request, exc: Exception):
    """
    @brief Catch-all exception handler
    @details
    Handles unexpected exceptions gracefully.
    Logs full error for debugging while returning safe message to client.
    """
    request_id = str(uuid.uuid4())
    logger.exception(f"Unexpected error handling {request.url} [requestId={request_id}]: {exc}")

    return error_response(
        500,
        INTERNAL_ERROR,
        f"An unexpected error occurred. Please contact support with request ID: {request_id}",
        request_id,
    )
