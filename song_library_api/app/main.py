"""
Main entrypoint for the Song Library API.

This module assembles the FastAPI application, sets up logging,
registers error handlers and includes the versioned routers.
``create_app`` builds and configures the app, which is then
instantiated at module import time as ``app``, e.g.::

    uvicorn song_library_api.app.main:app --reload

Interactive API documentation is served at ``/docs``.
"""

import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from .api.v1.router import router as v1_router
from .core.config import settings
from .core.db import init_db
from .core.errors import (
    EnrichmentError,
    NotFoundError,
    SongLibraryError,
    StorageError,
    ValidationError,
)
from .core.logging_config import setup_logging
from .schemas.song import ErrorResponse
from .services.enrichment_client import EnrichmentClient

logger = logging.getLogger(__name__)

ERROR_STATUS_CODES = {
    ValidationError: 400,
    NotFoundError: 404,
    StorageError: 500,
    EnrichmentError: 502,
}


async def song_library_error_handler(request: Request, exc: SongLibraryError) -> JSONResponse:
    """Translate a core error kind into its status code and error envelope."""
    status_code = ERROR_STATUS_CODES.get(type(exc), 500)
    if status_code >= 500:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc.message)
    body = ErrorResponse(code=status_code, message=exc.message)
    return JSONResponse(status_code=status_code, content=body.model_dump())


def create_app() -> FastAPI:
    """Create and configure a FastAPI application.

    Returns
    -------
    FastAPI
        A configured FastAPI application instance.
    """
    setup_logging(settings.log_level, settings.log_file)

    app = FastAPI(title=settings.project_name, version=settings.api_version, debug=settings.debug)

    app.add_exception_handler(SongLibraryError, song_library_error_handler)

    # One provider client per application, closed on shutdown.
    app.state.enrichment_client = EnrichmentClient(
        settings.external_api_url,
        timeout=settings.enrichment_timeout,
    )

    # Routes are served at the root (``/songs``) for existing clients; the same
    # endpoints are also reachable under the versioned prefix.
    app.include_router(v1_router)
    app.include_router(v1_router, prefix="/api/v1")

    @app.get("/health", tags=["health"])
    async def health() -> dict:
        return {"status": "ok"}

    @app.on_event("startup")
    async def startup_event() -> None:
        # Creates the database file on first start and applies migrations.
        init_db()

    @app.on_event("shutdown")
    async def shutdown_event() -> None:
        app.state.enrichment_client.close()

    return app


# Create the application instance at import time so that tools such as
# uvicorn can discover it without calling create_app manually.
app = create_app()
