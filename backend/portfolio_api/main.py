"""
Portfolio API — FastAPI Application Factory
=============================================

What:  Creates and configures the FastAPI application, and runs it.
How:   Factory pattern: create_app(settings, database) returns a configured
       FastAPI instance. The Database handle is constructed once and injected;
       handlers reach it through app.state, never through a global.
Who:   run() (console script `portfolio-api`, `python -m portfolio_api`), or
       `uvicorn portfolio_api.main:create_app --factory`.

Application Architecture:
    ┌─────────────────────────────────────────────────────┐
    │                   FastAPI App                       │
    │                                                     │
    │  Middleware Chain:                                  │
    │ ┌────────┐ ┌─────────┐ ┌──────┐ ┌──────┐ ┌────────┐ │
    │ │ Req ID │→│ Logging │→│ GZip │→│ CORS │→│ Errors │ │
    │ └────────┘ └─────────┘ └──────┘ └──────┘ └────────┘ │
    │                                                     │
    │  Routes:                                            │
    │  /articles  /projects  /search  /contact  /health   │
    │  /images (static)   /  and catch-all (SPA / 404)    │
    │                                                     │
    │  Exception Handlers:                                │
    │  Validation→400 │ NotFound→404 │ Store→500          │
    └─────────────────────────────────────────────────────┘

Lifecycle:
    Startup:
    1. Configure logging
    2. Build the Database from settings (unless one was injected)
    3. SELECT 1 against the store; failure raises StartupError, which aborts
       the lifespan so uvicorn never binds the listener
    Shutdown:
    1. Dispose the engine (close pooled connections)
"""

import logging
import sys
from contextlib import asynccontextmanager
from pathlib import Path
from typing import AsyncGenerator, Optional

import pydantic
import uvicorn
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles
from starlette.exceptions import HTTPException as StarletteHTTPException

from portfolio_api import __version__
from portfolio_api.config import Settings, get_settings
from portfolio_api.database import Database
from portfolio_api.exceptions import (
    NotFoundError,
    RouteNotFoundError,
    StartupError,
    StoreError,
    ValidationError,
)
from portfolio_api.middleware.errors import UnexpectedErrorMiddleware, unexpected_error_response
from portfolio_api.middleware.logging import RequestLoggingMiddleware
from portfolio_api.middleware.request_id import RequestIDMiddleware, request_id_var
from portfolio_api.routes import articles, contact, health, projects, search, site

logger = logging.getLogger(__name__)


# ══════════════════════════════════════════════════════════════════════════
# Logging Configuration
# ══════════════════════════════════════════════════════════════════════════

def setup_logging(log_level: str = "INFO") -> None:
    """
    Configure logging for the entire application.

    Format: 2024-01-15T12:00:00 [INFO] portfolio_api.access: GET /articles 200 3.1ms [1a2b3c4d] from 10.0.0.1
    """
    logging.basicConfig(
        level=getattr(logging, log_level, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
        handlers=[logging.StreamHandler(sys.stdout)],
        force=True,
    )

    # Access lines come from RequestLoggingMiddleware instead
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)


# ══════════════════════════════════════════════════════════════════════════
# Application Lifespan (Startup & Shutdown)
# ══════════════════════════════════════════════════════════════════════════

@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Connect to the store before serving; dispose it on shutdown.

    Raises:
        StartupError: the initial store connection failed. No request is
            ever accepted in that case.
    """
    settings: Settings = app.state.settings
    setup_logging(settings.log_level)
    logger.info("=" * 60)
    logger.info("Portfolio API %s starting up...", __version__)

    database: Optional[Database] = app.state.database
    if database is None:
        database = Database.from_settings(settings)
        app.state.database = database

    try:
        await database.ping()
    except Exception as e:
        logger.critical("Failed to connect to the database: %s", e)
        await database.dispose()
        raise StartupError(
            message="Could not connect to the database",
            context={"error": str(e)},
        ) from e

    logger.info("Connected to database")
    logger.info("Server ready at http://%s:%d", settings.host, settings.port)
    logger.info("=" * 60)

    yield

    logger.info("Portfolio API shutting down...")
    await database.dispose()
    logger.info("Shutdown complete.")


# ══════════════════════════════════════════════════════════════════════════
# Exception Handlers
# ══════════════════════════════════════════════════════════════════════════

def current_request_id(request: Request) -> str:
    # The catch-all handler runs outside RequestIDMiddleware, where the
    # ContextVar is already reset; request.state survives.
    return request_id_var.get("") or getattr(request.state, "request_id", "")


def error_response(request: Request, status_code: int, message: str, **extra) -> JSONResponse:
    content = {"message": message, **extra, "request_id": current_request_id(request)}
    return JSONResponse(status_code=status_code, content=content)


def register_exception_handlers(app: FastAPI) -> None:
    """
    Map the exception taxonomy to HTTP responses.

    Handler hierarchy:
        ValidationError          → 400 {message}
        RequestValidationError   → 400 {message}  (malformed body)
        NotFoundError            → 404 {message}
        RouteNotFoundError       → 404 {message}
        StarletteHTTPException   → its status {message}
        StoreError               → 500 {message, error}
        Exception (fallback)     → 500 {message, error}
    """

    @app.exception_handler(ValidationError)
    async def handle_validation_error(request: Request, exc: ValidationError):
        logger.warning("[%s] Validation error: %s", current_request_id(request), exc.message)
        return error_response(request, 400, exc.message)

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation_error(request: Request, exc: RequestValidationError):
        logger.warning("[%s] Malformed request: %s", current_request_id(request), exc.errors())
        return error_response(request, 400, "Invalid request body")

    @app.exception_handler(NotFoundError)
    async def handle_not_found(request: Request, exc: NotFoundError):
        return error_response(request, 404, exc.message)

    @app.exception_handler(RouteNotFoundError)
    async def handle_route_not_found(request: Request, exc: RouteNotFoundError):
        return error_response(request, 404, exc.message)

    @app.exception_handler(StarletteHTTPException)
    async def handle_http_exception(request: Request, exc: StarletteHTTPException):
        message = "Route not found" if exc.status_code == 404 else str(exc.detail)
        return error_response(request, exc.status_code, message)

    @app.exception_handler(StoreError)
    async def handle_store_error(request: Request, exc: StoreError):
        logger.error(
            "[%s] Store error: %s (%s) | Context: %s",
            current_request_id(request), exc.message, exc.error, exc.context,
        )
        return error_response(request, 500, exc.message, error=exc.error)

    # Only reached for failures in the middleware chain itself; route errors
    # are answered by UnexpectedErrorMiddleware.
    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception):
        return unexpected_error_response(request, exc)


# ══════════════════════════════════════════════════════════════════════════
# Application Factory
# ══════════════════════════════════════════════════════════════════════════

def create_app(
    settings: Optional[Settings] = None,
    database: Optional[Database] = None,
) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        settings: Loaded configuration; read from the environment when omitted.
        database: Store handle to use. When omitted, the lifespan builds one
                  from settings at startup.

    Returns:
        Fully configured FastAPI instance.
    """
    settings = settings or get_settings()

    app = FastAPI(
        title="Portfolio API",
        description="Articles, projects, search and contact form for a personal portfolio site.",
        version=__version__,
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.database = database

    # ── Register Middleware ───────────────────────────────────────────────
    # Last added runs first: RequestID → Logging → GZip → CORS → Errors
    app.add_middleware(UnexpectedErrorMiddleware)
    origins = settings.cors_origins_list
    app.add_middleware(
        CORSMiddleware,
        allow_origins=origins,
        allow_credentials="*" not in origins,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["X-Request-ID"],
    )
    app.add_middleware(GZipMiddleware, minimum_size=500)
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(RequestIDMiddleware)

    # ── Register Exception Handlers ───────────────────────────────────────
    register_exception_handlers(app)

    # ── Register Routes ───────────────────────────────────────────────────
    app.include_router(articles.router)
    app.include_router(projects.router)
    app.include_router(search.router)
    app.include_router(contact.router)
    app.include_router(health.router)

    images_dir = Path(settings.images_dir)
    if images_dir.is_dir():
        app.mount("/images", StaticFiles(directory=str(images_dir)), name="images")
    else:
        logger.warning("Images directory %s not found; /images is disabled", images_dir)

    # Catch-all; must stay last
    app.include_router(site.router)

    return app


def run() -> None:
    """
    Process entry point: load settings, build the app, serve it with uvicorn.

    Exits non-zero when DATABASE_URL is missing/invalid, and (via uvicorn)
    when the lifespan startup fails to reach the store.
    """
    try:
        settings = get_settings()
    except pydantic.ValidationError as e:
        setup_logging()
        logger.critical("Configuration error: %s", e)
        logger.critical("Set DATABASE_URL and restart the server.")
        sys.exit(1)

    setup_logging(settings.log_level)
    uvicorn.run(
        create_app(settings),
        host=settings.host,
        port=settings.port,
        lifespan="on",
        log_level=settings.log_level.lower(),
    )
