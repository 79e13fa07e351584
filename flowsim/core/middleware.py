"""Middleware for error handling and logging."""

import time
import uuid
from datetime import datetime, timezone
from typing import Callable
from fastapi import Request, Response
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware

from .exceptions import (
    WorkflowEngineError,
    WorkflowPayloadError,
    AutomationNotFoundError,
    SimulationTimeoutError,
    create_error_response
)
from .logging import get_logger, set_logging_context, reset_logging_context


logger = get_logger(__name__)


def get_status_code_for_error(error: WorkflowEngineError) -> int:
    """Determine the HTTP status code for a workflow engine error."""
    if isinstance(error, WorkflowPayloadError):
        return 400
    elif isinstance(error, AutomationNotFoundError):
        return 404
    elif isinstance(error, SimulationTimeoutError):
        return 504
    else:
        return 500


class ErrorHandlingMiddleware(BaseHTTPMiddleware):
    """Middleware for request tracing and error handling."""

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        """Process request with error handling."""
        request_id = str(uuid.uuid4())
        start_time = time.time()

        context_token = set_logging_context(
            request_id=request_id,
            method=request.method,
            path=request.url.path,
            client_ip=request.client.host if request.client else "unknown"
        )

        try:
            logger.info(f"Request started: {request.method} {request.url.path}")

            response = await call_next(request)

            duration = time.time() - start_time
            logger.info(
                f"Request completed: {request.method} {request.url.path} - "
                f"Status: {response.status_code} - Duration: {duration:.3f}s"
            )

            response.headers["X-Request-ID"] = request_id
            return response

        except WorkflowEngineError as e:
            duration = time.time() - start_time
            logger.warning(
                f"Workflow engine error: {request.method} {request.url.path} - "
                f"Error: {e.error_code} - Duration: {duration:.3f}s",
                extra={"extra_fields": {"error_details": e.to_dict()}}
            )

            return JSONResponse(
                status_code=get_status_code_for_error(e),
                content=create_error_response(e),
                headers={"X-Request-ID": request_id}
            )

        except Exception as e:
            duration = time.time() - start_time
            logger.error(
                f"Unexpected error: {request.method} {request.url.path} - "
                f"Error: {str(e)} - Duration: {duration:.3f}s",
                exc_info=True
            )

            return JSONResponse(
                status_code=500,
                content={
                    "error": "InternalServerError",
                    "message": "An unexpected error occurred",
                    "details": {
                        "error_type": type(e).__name__,
                        "timestamp": datetime.now(timezone.utc).isoformat()
                    },
                    "request_id": request_id
                },
                headers={"X-Request-ID": request_id}
            )

        finally:
            reset_logging_context(context_token)


class PerformanceMonitoringMiddleware(BaseHTTPMiddleware):
    """Middleware for slow request detection and timing headers."""

    def __init__(self, app, slow_request_threshold: float = 5.0):
        super().__init__(app)
        self.slow_request_threshold = slow_request_threshold

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        """Monitor request performance."""
        start_time = time.time()

        response = await call_next(request)

        duration = time.time() - start_time
        if duration > self.slow_request_threshold:
            logger.warning(
                f"Slow request detected: {request.method} {request.url.path} - "
                f"Duration: {duration:.3f}s (threshold: {self.slow_request_threshold}s)"
            )

        response.headers["X-Response-Time"] = f"{duration:.3f}s"
        return response
