"""
FastAPI application factory and configuration.

This module creates the FastAPI application instance, wires the
repository and request logger onto app.state, registers the error
pipeline, and mounts the pie routes under the configured prefix.
"""

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI

from src.adapters.logger import LoggingRequestLogger
from src.api.dependencies import build_repository
from src.api.errors import build_error_pipeline, register_error_handlers
from src.api.routes import health_router
from src.api.routes import router as pies_router
from src.config.observability import setup_logging
from src.config.settings import Settings, get_settings
from src.domain.ports import PieRepository, RequestLogger

logger = logging.getLogger(__name__)

# OpenAPI tags for documentation grouping
tags_metadata = [
    {
        "name": "pies",
        "description": "Create, read, search, update and delete pie records",
    },
    {
        "name": "health",
        "description": "Service and repository health",
    },
]


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    FastAPI lifespan context manager.

    Manages application startup and shutdown:
    - Configures logging on startup
    - Closes the error log file on shutdown
    """
    settings: Settings = app.state.settings
    setup_logging(settings.log_level, settings.log_format)

    logger.info("Starting application...")
    logger.info("Pie storage: %s", settings.data_file or "in-memory")
    logger.info("Routes mounted at %s", settings.api_prefix)

    yield

    logger.info("Shutting down application...")
    app.state.error_pipeline.close()
    logger.info("Error log closed")


def create_app(
    settings: Settings | None = None,
    repository: PieRepository | None = None,
    request_logger: RequestLogger | None = None,
) -> FastAPI:
    """
    Build a fully wired application.

    Args:
        settings: Configuration; defaults to get_settings()
        repository: Pie storage; defaults to the adapter chosen by settings
        request_logger: Request log sink; defaults to LoggingRequestLogger

    Returns:
        FastAPI application holding its collaborators on app.state
    """
    settings = settings or get_settings()

    app = FastAPI(
        title="pie-api",
        description="Pie API - CRUD over pie records with a uniform JSON response envelope",
        version="0.1.0",
        openapi_tags=tags_metadata,
        lifespan=lifespan,
    )

    app.state.settings = settings
    app.state.repository = repository if repository is not None else build_repository(settings)
    app.state.request_logger = request_logger if request_logger is not None else LoggingRequestLogger()

    register_error_handlers(app, build_error_pipeline(settings))

    app.include_router(pies_router, prefix=settings.api_prefix)
    app.include_router(health_router)

    return app


app = create_app()


def run() -> None:
    """Serve the default application with uvicorn on the configured port."""
    settings = get_settings()
    uvicorn.run(app, host=settings.host, port=settings.port, log_level=settings.log_level.lower())


if __name__ == "__main__":
    run()
