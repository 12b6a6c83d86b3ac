"""
Request ID middleware for log correlation.

- Accepts X-Request-ID from the client or generates one
- Exposes it on request.state and in the response headers
- Sets the request_id context var read by the logging filter
"""

import time
import uuid
from typing import Callable

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

from src.logging_config import get_logger, request_id_var

logger = get_logger(__name__)

REQUEST_ID_HEADER = "X-Request-ID"

# Remote operations legitimately take long; only flag requests slower than this
SLOW_REQUEST_MS = 30_000


class RequestIdMiddleware(BaseHTTPMiddleware):
    """Tag every request (and every log line it produces) with an id."""

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        request_id = request.headers.get(REQUEST_ID_HEADER) or uuid.uuid4().hex
        request.state.request_id = request_id
        token = request_id_var.set(request_id)

        try:
            start = time.perf_counter()
            response = await call_next(request)
            elapsed_ms = (time.perf_counter() - start) * 1000
            response.headers[REQUEST_ID_HEADER] = request_id

            if elapsed_ms > SLOW_REQUEST_MS:
                logger.warning(
                    "Slow request",
                    extra={
                        "path": request.url.path,
                        "method": request.method,
                        "duration_ms": round(elapsed_ms, 1),
                    },
                )
            else:
                logger.debug(
                    "%s %s -> %s", request.method, request.url.path, response.status_code,
                )
            return response
        finally:
            request_id_var.reset(token)
