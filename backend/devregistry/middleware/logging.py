"""
Developer Registry — Request Logging Middleware
=================================================

What:  One access-log line per HTTP request.
How:   Measures the time around call_next and logs method, path, status,
       duration, request ID and client IP on the "devregistry.access" logger.

Level by status:
    5xx → ERROR, 4xx → WARNING (e.g. a refused level deletion), else INFO.

Request bodies are never logged: developer records carry personal data
(name, sex, birth date).
"""

import logging
import time

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from devregistry.middleware.request_id import request_id_var

logger = logging.getLogger("devregistry.access")

# Polled by monitors every few seconds; not worth a log line each time
QUIET_PATHS = {"/healthcheck"}


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Logs method, path, status and duration of each request."""

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        path = request.url.path
        if path in QUIET_PATHS:
            return await call_next(request)

        start_time = time.perf_counter()
        response = await call_next(request)
        duration_ms = (time.perf_counter() - start_time) * 1000

        client_ip = request.client.host if request.client else "unknown"
        status = response.status_code
        if status >= 500:
            log_level = logging.ERROR
        elif status >= 400:
            log_level = logging.WARNING
        else:
            log_level = logging.INFO

        logger.log(
            log_level,
            "%s %s %d %.1fms from %s",
            request.method,
            path,
            status,
            duration_ms,
            client_ip,
            extra={
                "method": request.method,
                "path": path,
                "status": status,
                "duration_ms": round(duration_ms, 2),
                "client_ip": client_ip,
            },
        )
        return response
