# Middleware package init
"""
Portfolio API — Middleware Package
====================================

What:  Cross-cutting concerns applied to every request.

Middleware Chain (outermost first):
    Request → [Request ID] → [Logging] → [GZip] → [CORS] → [Errors] → Route Handler

    - Request ID runs first so the logging middleware and the exception
      handlers can read the correlation ID.
    - Logging captures the final status and duration of the inner chain.
    - Errors is innermost so an unhandled exception becomes a 500 that still
      passes back through CORS and gets its X-Request-ID header.
"""
