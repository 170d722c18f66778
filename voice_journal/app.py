"""FastAPI application for the voice journal server.

``create_app`` loads the static resources, wires the API router and error
handlers, and (when a built client exists) serves it as a single-page app.
Runtime startup lives in ``voice_journal/main.py`` so this module can be
imported by tests without side-effects.
"""
from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import FileResponse, JSONResponse
from fastapi.routing import APIRoute
from fastapi.staticfiles import StaticFiles
from starlette.exceptions import HTTPException as StarletteHTTPException

from voice_journal import __version__, config
from voice_journal.exceptions import (
    ConfigurationError,
    InvalidRequestError,
    UpstreamServiceError,
)
from voice_journal.resources import Resources, load_resources
from voice_journal.routes import router

# Set up logging
logging.basicConfig(
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    level=config.LOG_LEVEL,
)
logger = logging.getLogger(__name__)

_INTERNAL_ERROR = {"message": "Internal server error."}


def _has_route(app: FastAPI, path: str) -> bool:
    return any(isinstance(r, APIRoute) and r.path == path for r in app.routes)


def _register_error_handlers(app: FastAPI, static_dir: Optional[Path]) -> None:
    @app.exception_handler(InvalidRequestError)
    async def invalid_request_handler(request: Request, exc: InvalidRequestError):
        logger.info("Rejected %s %s: %s", request.method, request.url.path, exc)
        return JSONResponse(status_code=400, content={"message": str(exc)})

    @app.exception_handler(RequestValidationError)
    async def validation_handler(request: Request, exc: RequestValidationError):
        logger.info("Invalid body for %s %s: %s", request.method, request.url.path, exc)
        return JSONResponse(status_code=400, content={"message": "Invalid request body."})

    @app.exception_handler(ConfigurationError)
    async def configuration_handler(request: Request, exc: ConfigurationError):
        logger.error("Refusing %s %s: %s", request.method, request.url.path, exc)
        return JSONResponse(
            status_code=503, content={"message": "Service unavailable."}
        )

    @app.exception_handler(UpstreamServiceError)
    async def upstream_handler(request: Request, exc: UpstreamServiceError):
        logger.error(
            "Upstream failure on %s %s: %s",
            request.method,
            request.url.path,
            exc,
            exc_info=exc,
        )
        return JSONResponse(status_code=500, content=_INTERNAL_ERROR)

    @app.exception_handler(Exception)
    async def unhandled_handler(request: Request, exc: Exception):
        logger.exception("Error handling %s %s: %s", request.method, request.url.path, exc)
        return JSONResponse(status_code=500, content=_INTERNAL_ERROR)

    @app.exception_handler(StarletteHTTPException)
    async def not_found_handler(request: Request, exc: StarletteHTTPException):
        path = request.url.path
        # StaticFiles answers 405 for non-GET requests on paths no route claims
        if path.startswith("/api") and (
            exc.status_code == 404
            or (exc.status_code == 405 and not _has_route(request.app, path))
        ):
            return JSONResponse(status_code=404, content={"error": "API route not found"})
        if exc.status_code != 404:
            return JSONResponse(status_code=exc.status_code, content={"message": exc.detail})
        index = static_dir / "index.html" if static_dir else None
        if index is not None and index.is_file():
            # SPA fallback: client-side routes are resolved by index.html
            return FileResponse(index)
        return JSONResponse(status_code=404, content={"message": "Not found"})


def create_app(
    resources: Optional[Resources] = None,
    static_dir: Optional[Path] = config.STATIC_DIR,
) -> FastAPI:
    """Build the application.

    *resources* defaults to :func:`load_resources`; a resource that fails to
    load disables only the endpoints that depend on it.
    """

    app = FastAPI(title="voice-journal", version=__version__)
    app.state.resources = resources if resources is not None else load_resources()
    if app.state.resources.errors:
        logger.error(
            "Started with unavailable resources: %s",
            ", ".join(sorted(app.state.resources.errors)),
        )

    app.include_router(router)

    if static_dir is not None and Path(static_dir).is_dir():
        app.mount("/", StaticFiles(directory=str(static_dir), html=True), name="client")
        logger.info("Serving client from %s", static_dir)
    else:
        static_dir = None

    _register_error_handlers(app, static_dir)
    return app
