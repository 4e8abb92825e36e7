"""
Portfolio API — Custom Exception Hierarchy
============================================

What:  Application-specific exceptions for each failure the gateway reports.
How:   Each exception carries a client-facing message and an optional context
       dict. Global exception handlers (registered in main.py) map them to
       HTTP status codes and JSON bodies.
Who:   Raised by services, routes and the startup path; caught by handlers.

Exception Hierarchy:
    PortfolioError (base)
    ├── ValidationError     → 400 Bad Request     {message}
    ├── NotFoundError       → 404 Not Found       {message}
    ├── RouteNotFoundError  → 404 Not Found       {message}
    ├── StoreError          → 500 Internal Error  {message, error}
    └── StartupError        → fatal, process exits non-zero
"""

from typing import Any, Dict, Optional


class PortfolioError(Exception):
    """
    Base exception for all Portfolio API errors.

    Attributes:
        message:  Client-facing error description (returned in the response)
        context:  Additional debug info (logged, not returned)
    """

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


class ValidationError(PortfolioError):
    """
    Raised when client input fails validation.

    When:    Missing contact fields, missing search query, malformed identifier.
    HTTP:    400 Bad Request

    Example response:
        {"message": "Invalid project ID format", "request_id": "1a2b3c4d"}
    """

    def __init__(
        self,
        message: str = "Validation failed",
        field: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        if field:
            ctx["field"] = field
        super().__init__(message=message, context=ctx)
        self.field = field


class NotFoundError(PortfolioError):
    """
    Raised when a requested document does not exist.

    When:    GET /articles/{id} or /projects/{id} with a well-formed but unknown id.
    HTTP:    404 Not Found

    The message follows the "<Resource> not found" form the frontend expects,
    e.g. "Project not found".
    """

    def __init__(
        self,
        resource: str = "resource",
        resource_id: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        message = f"{resource.capitalize()} not found"
        ctx = context or {}
        ctx["resource"] = resource
        if resource_id:
            ctx["resource_id"] = resource_id
        super().__init__(message=message, context=ctx)
        self.resource = resource
        self.resource_id = resource_id


class RouteNotFoundError(PortfolioError):
    """Raised when no handler matches the request path. HTTP 404."""

    def __init__(self, path: str = "", context: Optional[Dict[str, Any]] = None):
        ctx = context or {}
        if path:
            ctx["path"] = path
        super().__init__(message="Route not found", context=ctx)
        self.path = path


class StoreError(PortfolioError):
    """
    Raised when a call against the document store fails.

    What:    A query or insert raised (connection lost, constraint violation, ...).
    HTTP:    500 Internal Server Error

    The response carries both the operation-level message
    ("Failed to fetch articles") and the underlying error text under `error`.

    Attributes:
        error: String form of the exception raised by the store driver
    """

    def __init__(
        self,
        message: str = "Server error",
        error: str = "",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)
        self.error = error


class StartupError(PortfolioError):
    """
    Raised when the process cannot start safely.

    When:    DATABASE_URL is missing, or the initial store connection fails.
    Effect:  The lifespan startup aborts, so uvicorn never binds the listener;
             the entry point exits with a non-zero status.
    """

    def __init__(
        self,
        message: str = "Application startup failed",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)
