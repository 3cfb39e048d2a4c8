"""
@file middleware.py
@brief Custom middleware for error handling and request processing

@details
Provides centralized middleware for:
- Catching data source failures (unreadable GeoJSON, missing road data)
- Providing consistent error responses
- Request logging and monitoring

@author EvacRoute Project
@date 2026-10-18
@version 1.0
@license AGPL-3.0
"""

import logging
import time
import uuid

from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware

from evacroute.core.exceptions import INTERNAL_ERROR, SERVICE_UNAVAILABLE, error_response
from evacroute.models.exceptions import RoadDataUnavailableError

logger = logging.getLogger(__name__)


class DataSourceErrorMiddleware(BaseHTTPMiddleware):
    """
    @brief Middleware to catch data source errors and return proper status messages

    @details
    Intercepts exceptions that escape the registered exception handlers.
    I/O failures while reading road or flood zone data become 503 responses;
    anything else becomes a 500 with a request id for support.
    """

    async def dispatch(self, request: Request, call_next):
        """
        @brief Process request and catch data source errors

        @param request The HTTP request
        @param call_next The next middleware/route handler
        @return Response or error response
        """
        started = time.perf_counter()
        try:
            response = await call_next(request)
        except (RoadDataUnavailableError, OSError) as e:
            logger.error(f"Data source error handling {request.method} {request.url.path}: {e}")
            return error_response(
                503,
                SERVICE_UNAVAILABLE,
                "Road or flood zone data could not be read. Please try again later.",
                str(uuid.uuid4()),
            )
        except Exception as e:
            request_id = str(uuid.uuid4())
            logger.exception(
                f"Unexpected error handling {request.method} {request.url.path} "
                f"[requestId={request_id}]: {e}"
            )
            return error_response(
                500,
                INTERNAL_ERROR,
                f"An unexpected error occurred. Please contact support with request ID: {request_id}",
                request_id,
            )

        duration_ms = (time.perf_counter() - started) * 1000
        logger.debug(
            f"{request.method} {request.url.path} -> {response.status_code} "
            f"({duration_ms:.1f} ms)"
        )
        return response
