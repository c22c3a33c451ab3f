"""
Kafka Service FastAPI Application
=================================

Consumes product change events and fans them out to the Kafka dashboard
over WebSocket. Also serves the dashboard page and the topic listing.
"""

import time
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .api.kafka_ui import router as kafka_ui_router
from .api.v1.health import router as health_router
from .api.websocket import router as websocket_router
from .core.kafka_management import close_kafka, init_kafka
from .core.setting import get_settings
from .middleware.error_handler import setup_kafka_error_handling
from .utils.logging import setup_kafka_logging

settings = get_settings()
logger = setup_kafka_logging(
    "kafka_service",
    log_level=settings.LOG_LEVEL,
    enable_file_logging=settings.ENVIRONMENT.lower() in ["production", "staging"],
)


@asynccontextmanager
async def lifespan(app: FastAPI):
    startup_start = time.time()
    logger.info(
        "Starting kafka service",
        extra={"environment": settings.ENVIRONMENT, "version": settings.APP_VERSION},
    )
    await init_kafka()
    logger.info(
        "Kafka service started successfully",
        extra={"total_startup_duration_ms": int((time.time() - startup_start) * 1000)},
    )

    yield

    logger.info("Starting kafka service shutdown")
    await close_kafka()
    logger.info("Kafka service shutdown completed")


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""
    app = FastAPI(
        title=settings.APP_NAME,
        version=settings.APP_VERSION,
        debug=settings.DEBUG,
        lifespan=lifespan,
        docs_url="/docs" if settings.DEBUG else None,
        redoc_url=None,
    )

    setup_kafka_error_handling(app)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=settings.CORS_CREDENTIALS,
        allow_methods=settings.CORS_METHODS,
        allow_headers=settings.CORS_HEADERS,
    )

    app.include_router(health_router, tags=["Health"])
    app.include_router(kafka_ui_router, tags=["Kafka UI"])
    app.include_router(websocket_router, tags=["WebSocket"])
    return app


app = create_app()
