"""FastAPI application factory and lifespan management."""

import logging
import sys
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from src.api.dependencies import get_settings, init_services, shutdown_services
from src.api.middleware.error_handler import error_handler_middleware
from src.api.middleware.logging import LoggingMiddleware
from src.api.openapi.routes import health, uploads, videos
from src.commons.settings.models import Settings
from src.commons.telemetry import configure_logging
from src.commons.telemetry.logger import JsonFormatter, TextFormatter

UVICORN_LOGGERS = ("uvicorn", "uvicorn.error", "uvicorn.access")


def _log_level(settings: Settings) -> str:
    return (settings.telemetry.log_level or settings.app.log_level).upper()


def _setup_logging(settings: Settings) -> None:
    """Configure the application loggers.

    Runs when the app is created so our formatters are in place before
    uvicorn starts serving.
    """
    log_level = _log_level(settings)
    configure_logging(
        level=log_level,
        format_type=settings.telemetry.log_format,
        logger_name="src",
    )
    logging.getLogger().setLevel(getattr(logging, log_level))


def _configure_uvicorn_logging(settings: Settings) -> None:
    """Route uvicorn's loggers through our formatter.

    Called during lifespan, once uvicorn has installed its handlers.
    """
    level = getattr(logging, _log_level(settings))
    formatter: logging.Formatter = (
        JsonFormatter() if settings.telemetry.log_format == "json" else TextFormatter()
    )

    for logger_name in UVICORN_LOGGERS:
        uv_logger = logging.getLogger(logger_name)
        uv_logger.setLevel(level)
        if not uv_logger.handlers:
            uv_logger.addHandler(logging.StreamHandler(sys.stdout))
            uv_logger.propagate = False
        for handler in uv_logger.handlers:
            handler.setFormatter(formatter)
            handler.setLevel(level)


@asynccontextmanager
async def lifespan(_app: FastAPI) -> AsyncGenerator[None, None]:
    """Manage application lifespan - startup and shutdown.

    Creates the storage and database clients on startup (and the videos
    bucket when configured to) and closes them on shutdown.
    """
    settings = get_settings()
    _configure_uvicorn_logging(settings)

    await init_services(settings)

    yield

    await shutdown_services()


def create_app(settings: Settings | None = None) -> FastAPI:
    """Create and configure the FastAPI application.

    Args:
        settings: Settings to build the app from. Loaded from config and
            environment when omitted.

    Returns:
        Configured FastAPI application instance.
    """
    settings = settings or get_settings()
    _setup_logging(settings)

    app = FastAPI(
        title=settings.app.name,
        version=settings.app.version,
        description="Tubely - video hosting with fast-start uploads to object storage",
        docs_url="/docs" if settings.server.docs_enabled else None,
        redoc_url="/redoc" if settings.server.docs_enabled else None,
        openapi_url="/openapi.json" if settings.server.docs_enabled else None,
        lifespan=lifespan,
    )

    _configure_middleware(app, settings)
    _register_routes(app, settings)

    return app


def _configure_middleware(app: FastAPI, settings: Settings) -> None:
    """Configure application middleware."""
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.server.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_middleware(LoggingMiddleware)

    # Outermost, so errors raised anywhere below become JSON error bodies
    app.middleware("http")(error_handler_middleware)


def _register_routes(app: FastAPI, settings: Settings) -> None:
    """Register API routes."""
    prefix = settings.server.api_prefix

    # Health routes (no prefix for standard health checks)
    app.include_router(health.router, tags=["Health"])

    app.include_router(videos.router, prefix=prefix, tags=["Videos"])
    app.include_router(uploads.router, prefix=prefix, tags=["Uploads"])


def run() -> None:
    """Serve the API with uvicorn using the server settings."""
    settings = get_settings()
    uvicorn.run(
        "src.api.main:app",
        host=settings.server.host,
        port=settings.server.port,
        workers=settings.server.workers,
        reload=settings.server.reload,
        log_config=None,
    )


# Create default app instance
app = create_app()
