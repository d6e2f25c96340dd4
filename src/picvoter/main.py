# src/picvoter/main.py
"""Main entry point for the picvoter application."""

from __future__ import annotations

import logging
import random
from collections.abc import Callable

from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import JSONResponse

from picvoter.api.v1 import images_router, system_router, votes_router
from picvoter.core.context import AppContext
from picvoter.core.errors import (
    EmptyPoolError,
    InvalidValueError,
    NotFoundError,
    StoreError,
)
from picvoter.core.logging_setup import configure_logging
from picvoter.core.settings import Settings
from picvoter.db.session import create_tables
from picvoter.services.import_watcher import ImportWatcher

logger = logging.getLogger(__name__)


def _error_response(status_code: int, exc: Exception) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"detail": str(exc)})


def _register_exception_handlers(app: FastAPI) -> None:
    @app.exception_handler(NotFoundError)
    async def _not_found(request: Request, exc: NotFoundError) -> JSONResponse:
        return _error_response(status.HTTP_404_NOT_FOUND, exc)

    @app.exception_handler(EmptyPoolError)
    async def _empty_pool(request: Request, exc: EmptyPoolError) -> JSONResponse:
        return _error_response(status.HTTP_404_NOT_FOUND, exc)

    @app.exception_handler(InvalidValueError)
    async def _invalid_value(request: Request, exc: InvalidValueError) -> JSONResponse:
        return _error_response(status.HTTP_400_BAD_REQUEST, exc)

    @app.exception_handler(StoreError)
    async def _store_error(request: Request, exc: StoreError) -> JSONResponse:
        logger.error("Store failure on %s: %s", request.url.path, exc.__cause__ or exc)
        return _error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, exc)


def create_app(
    settings: Settings | None = None,
    *,
    context: AppContext | None = None,
    draw: Callable[[], float] = random.random,
) -> FastAPI:
    """Build the FastAPI application around an explicit context.

    Args:
        settings: Configuration; read from the environment when omitted.
        context: Prebuilt context (tests pass one bound to their own engine).
        draw: Uniform ``[0, 1)`` source for the image selector.
    """
    if context is None:
        context = AppContext.from_settings(settings or Settings())
    settings = context.settings

    app = FastAPI(
        title="picvoter API",
        description="Content-addressed image ingestion and confidence-ranked voting",
        version=settings.app_version,
    )
    app.state.context = context
    app.state.draw = draw
    app.state.import_watcher = None

    # Add CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_methods=settings.cors_allow_methods,
        allow_headers=settings.cors_allow_headers,
    )
    app.add_middleware(GZipMiddleware)

    app.include_router(images_router, prefix="/api/v1")
    app.include_router(votes_router, prefix="/api/v1")
    app.include_router(system_router, prefix="/api/v1")
    _register_exception_handlers(app)

    @app.on_event("startup")
    async def on_startup() -> None:
        configure_logging(settings.log_level)
        settings.ensure_storage_dirs()
        create_tables(context.engine)
        if settings.import_enabled:
            watcher = ImportWatcher(context)
            await watcher.start()
            app.state.import_watcher = watcher
        logger.info("Storage at %s", settings.storage_dir.resolve())

    @app.on_event("shutdown")
    async def on_shutdown() -> None:
        watcher: ImportWatcher | None = app.state.import_watcher
        if watcher:
            await watcher.stop()
            app.state.import_watcher = None

    @app.get("/health")
    async def health_check() -> dict[str, str]:
        """Health check endpoint to verify the service is running."""
        return {"status": "ok"}

    @app.get("/")
    async def root() -> dict[str, str]:
        """Root endpoint with basic information about the API."""
        return {
            "name": settings.app_name,
            "version": settings.app_version,
            "docs": "/docs",
            "redoc": "/redoc",
        }

    return app


app = create_app()

if __name__ == "__main__":
    import uvicorn

    uvicorn.run("picvoter.main:app", host="0.0.0.0", port=8000, reload=app.state.context.settings.debug)
