"""
Request/response logging middleware

Assigns a request ID (or reuses the caller's X-Request-ID), binds it into
structlog contextvars for every log line in the request, and logs one line
per request.
"""

import time
import uuid

import structlog
from fastapi import Request

from config import get_logger

logger = get_logger(__name__).bind(component="http")


async def log_requests(request: Request, call_next):
    """Log incoming requests and responses"""
    request_id = request.headers.get("X-Request-ID") or str(uuid.uuid4())
    request.state.request_id = request_id
    structlog.contextvars.bind_contextvars(request_id=request_id)

    start_time = time.time()
    try:
        response = await call_next(request)
        duration = time.time() - start_time

        logger.info(
            "request completed",
            method=request.method,
            path=request.url.path,
            status=response.status_code,
            duration=round(duration, 3),
        )
        response.headers["X-Request-ID"] = request_id
        return response

    except Exception as e:
        duration = time.time() - start_time
        logger.error(
            "request failed",
            method=request.method,
            path=request.url.path,
            duration=round(duration, 3),
            error=str(e),
        )
        raise

    finally:
        structlog.contextvars.clear_contextvars()
