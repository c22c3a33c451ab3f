"""
Product Service FastAPI Application
==================================

Main application entry point for the Product Service.
Serves the catalog GraphQL API (queries, admin mutations and subscriptions),
the server-rendered catalog pages and the health endpoint, and publishes
product change events to Kafka.
"""

import time
from contextlib import asynccontextmanager
from typing import Any

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .api.v1.health import router as health_router
from .api.web import router as web_router
from .core.data_initializer import initialize_sample_data
from .core.database import get_database_manager
from .core.event_management import close_events, init_events
from .core.setting import get_settings
from .graphql_api import create_graphql_router
from .middleware.error.error_handler import setup_product_error_handling
from .utils.logging import setup_product_logging

settings = get_settings()
enable_file_logging = settings.ENVIRONMENT.lower() in ["production", "staging"]

logger = setup_product_logging(
    "product_service",
    log_level=settings.LOG_LEVEL,
    enable_file_logging=enable_file_logging,
)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan context manager for startup and shutdown."""
    startup_start = time.time()

    try:
        await _initialize_services()
    except Exception as e:
        logger.error(
            "Failed to start product service",
            exc_info=True,
            extra={
                "startup_duration_ms": int((time.time() - startup_start) * 1000),
                "error_type": type(e).__name__,
            },
        )
        raise

    logger.info(
        "Product service started successfully",
        extra={"total_startup_duration_ms": int((time.time() - startup_start) * 1000)},
    )

    yield

    await _shutdown_services()


async def _initialize_services() -> None:
    """Create tables, seed the sample catalog and start event publishing."""
    logger.info(
        "Starting product service initialization",
        extra={
            "environment": settings.ENVIRONMENT,
            "debug_mode": settings.DEBUG,
            "file_logging_enabled": enable_file_logging,
            "service_version": settings.APP_VERSION,
        },
    )

    database_manager = get_database_manager()
    await database_manager.create_tables()

    if settings.SEED_SAMPLE_DATA:
        async with database_manager.async_session_maker() as session:
            await initialize_sample_data(session)

    await init_events()


async def _shutdown_services() -> None:
    """Shutdown all application services gracefully."""
    shutdown_start = time.time()
    logger.info("Starting product service shutdown")

    try:
        await close_events()
    finally:
        await get_database_manager().close()

    logger.info(
        "Product service shutdown completed",
        extra={"shutdown_duration_ms": int((time.time() - shutdown_start) * 1000)},
    )


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""
    app = FastAPI(
        title=settings.APP_NAME,
        version=settings.APP_VERSION,
        debug=settings.DEBUG,
        lifespan=lifespan,
        openapi_url="/openapi.json" if settings.DEBUG else None,
        docs_url="/docs" if settings.DEBUG else None,
        redoc_url=None,
    )

    setup_product_error_handling(app)
    _setup_cors(app)
    _setup_routers(app)

    return app


def _setup_cors(app: FastAPI) -> None:
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=settings.CORS_CREDENTIALS,
        allow_methods=settings.CORS_METHODS,
        allow_headers=settings.CORS_HEADERS,
    )

    logger.info(
        "CORS middleware configured",
        extra={
            "allowed_origins": len(settings.CORS_ORIGINS),
            "credentials_allowed": settings.CORS_CREDENTIALS,
        },
    )


def _setup_routers(app: FastAPI) -> None:
    """Configure all application routers."""
    routers_info: list[dict[str, Any]] = []

    app.include_router(health_router, tags=["Health"])
    routers_info.append({"router": "health", "prefix": "", "tags": ["Health"]})

    app.include_router(web_router, tags=["Web"])
    routers_info.append({"router": "web", "prefix": "", "tags": ["Web"]})

    app.include_router(
        create_graphql_router(settings), prefix=settings.GRAPHQL_PATH, tags=["GraphQL"]
    )
    routers_info.append(
        {"router": "graphql", "prefix": settings.GRAPHQL_PATH, "tags": ["GraphQL"]}
    )

    logger.info(
        "API routes configured",
        extra={"total_routers": len(routers_info), "routers": routers_info},
    )


app = create_app()
