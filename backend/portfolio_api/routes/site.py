"""
Portfolio API — Root and Fallback Routes
==========================================

What:  GET / and the catch-all route for requests no API handler matched.
How:   In development mode the root returns a plain-text status line. In
       production mode (PRODUCTION=true) the root and every unmatched non-API
       path serve the pre-built frontend: a built asset when the path names
       one, otherwise index.html so the client-side router can take over
       (SPA fallback).

Unmatched paths under an API collection (e.g. /articles/1/comments) never
fall back to the SPA; they raise RouteNotFoundError (→ 404 JSON), as does any
non-GET request to an unknown path.

This router must be included last: its catch-all pattern matches everything.
"""

from pathlib import Path

from fastapi import APIRouter, Request
from fastapi.responses import FileResponse, PlainTextResponse
from starlette.responses import Response

from portfolio_api.config import Settings
from portfolio_api.exceptions import RouteNotFoundError

router = APIRouter(tags=["Site"], include_in_schema=False)

STATUS_MESSAGE = "Portfolio API is running"

# First path segments owned by the API; never served the SPA entry page
API_PREFIXES = frozenset({"articles", "projects", "search", "contact", "health", "images"})


def is_api_path(path: str) -> bool:
    first_segment = path.lstrip("/").split("/", 1)[0]
    return first_segment in API_PREFIXES


def spa_response(settings: Settings, path: str) -> Response:
    """
    Serve a built frontend asset if `path` names one, else the SPA entry file.

    Raises:
        RouteNotFoundError: the build has no index.html (→ 404 JSON)
    """
    build_root = Path(settings.client_build_dir).resolve()
    relative = path.lstrip("/")
    if relative:
        candidate = (build_root / relative).resolve()
        # Paths escaping the build directory (../) fall through to index.html
        if candidate.is_file() and candidate.is_relative_to(build_root):
            return FileResponse(str(candidate))

    index = settings.spa_index_path
    if not index.is_file():
        raise RouteNotFoundError(path=path, context={"missing": str(index)})
    return FileResponse(str(index), media_type="text/html")


@router.api_route("/", methods=["GET", "HEAD"])
async def root(request: Request) -> Response:
    settings: Settings = request.app.state.settings
    if settings.production:
        return spa_response(settings, "/")
    return PlainTextResponse(STATUS_MESSAGE)


@router.api_route("/{full_path:path}", methods=["GET", "HEAD", "POST", "PUT", "PATCH", "DELETE"])
async def fallback(full_path: str, request: Request) -> Response:
    settings: Settings = request.app.state.settings
    path = "/" + full_path
    if request.method in ("GET", "HEAD") and settings.production and not is_api_path(path):
        return spa_response(settings, path)
    raise RouteNotFoundError(path=path)
