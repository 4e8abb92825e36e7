"""
Portfolio API — Request Logging Middleware
============================================

What:  One structured log line per HTTP request/response pair.
How:   Measures the time spent downstream and logs method, path, status,
       duration, request ID and client IP. This is the only place access
       logging happens; route handlers do not log per-request lines.
When:  Inside RequestIDMiddleware, so the request ID is already assigned.

Log levels by status:
    5xx → ERROR, 4xx → WARNING, everything else → INFO

What we log vs what we DON'T log:
    ✅ method, path, status, duration, IP, request ID
    ❌ request bodies (contact messages contain personal data), query strings
"""

import logging
import time

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from portfolio_api.middleware.request_id import request_id_var

logger = logging.getLogger("portfolio_api.access")

# Probed every few seconds by monitors
QUIET_PATHS = frozenset({"/health"})


def level_for_status(status: int) -> int:
    if status >= 500:
        return logging.ERROR
    if status >= 400:
        return logging.WARNING
    return logging.INFO


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """
    Logs structured information about each HTTP request and response.

    An exception escaping the handlers is logged as a 500 and re-raised for
    the server-error handler to turn into a response.
    """

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        path = request.url.path
        if path in QUIET_PATHS:
            return await call_next(request)

        start_time = time.perf_counter()
        client_ip = request.client.host if request.client else "unknown"
        method = request.method
        status = 500

        try:
            response = await call_next(request)
            status = response.status_code
        finally:
            duration_ms = (time.perf_counter() - start_time) * 1000
            rid = request_id_var.get("")
            logger.log(
                level_for_status(status),
                "%s %s %d %.1fms [%s] from %s",
                method,
                path,
                status,
                duration_ms,
                rid,
                client_ip,
                extra={
                    "request_id": rid,
                    "method": method,
                    "path": path,
                    "status": status,
                    "duration_ms": round(duration_ms, 2),
                    "client_ip": client_ip,
                },
            )

        return response
