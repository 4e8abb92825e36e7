"""
Portfolio API — Unexpected Error Middleware
=============================================

What:  Turns exceptions no exception handler claimed into the generic
       500 JSON body.
How:   Starlette runs the `Exception` handler in ServerErrorMiddleware, which
       sits outside every user middleware, so its response would never get
       the X-Request-ID or CORS headers. Catching here, innermost, lets the
       500 travel back out through CORS, logging and request ID like any
       other response.
"""

import logging

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import JSONResponse, Response

from portfolio_api.middleware.request_id import request_id_var

logger = logging.getLogger(__name__)


def unexpected_error_response(request: Request, exc: Exception) -> JSONResponse:
    """500 {"message", "error", "request_id"} for an unhandled exception."""
    rid = request_id_var.get("") or getattr(request.state, "request_id", "")
    logger.error("[%s] Unexpected error: %s", rid, str(exc), exc_info=exc)
    return JSONResponse(
        status_code=500,
        content={
            "message": "Internal server error",
            "error": str(exc),
            "request_id": rid,
        },
    )


class UnexpectedErrorMiddleware(BaseHTTPMiddleware):
    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        try:
            return await call_next(request)
        except Exception as e:
            return unexpected_error_response(request, e)
