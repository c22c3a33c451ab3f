"""
User Service FastAPI Application
================================

Owns the user and role records. On startup the tables are created and the
roles and sample accounts are seeded.
"""

from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .api.v1.health import router as health_router
from .core.data_initializer import initialize_roles_and_users
from .core.database import get_database_manager
from .core.password_security import PasswordEncoder
from .core.settings import get_settings
from .middleware.error_handler import setup_user_error_handling
from .utils.logging import setup_user_logging

settings = get_settings()
logger = setup_user_logging(
    "user_service",
    log_level=settings.LOG_LEVEL,
    enable_file_logging=settings.ENVIRONMENT.lower() in ["production", "staging"],
)


@asynccontextmanager
async def lifespan(app: FastAPI):
    database_manager = get_database_manager()
    try:
        await database_manager.create_tables()
        if settings.SEED_SAMPLE_DATA:
            async with database_manager.async_session_maker() as session:
                await initialize_roles_and_users(session, PasswordEncoder())
    except Exception:
        logger.error("Failed to start user service", exc_info=True)
        raise
    logger.info("User service started", extra={"version": settings.APP_VERSION})

    yield

    await database_manager.close()
    logger.info("User service shutdown completed")


def create_app() -> FastAPI:
    app = FastAPI(
        title=settings.APP_NAME,
        version=settings.APP_VERSION,
        debug=settings.DEBUG,
        lifespan=lifespan,
    )
    setup_user_error_handling(app)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=settings.CORS_CREDENTIALS,
        allow_methods=settings.CORS_METHODS,
        allow_headers=settings.CORS_HEADERS,
    )
    app.include_router(health_router, tags=["Health"])
    return app


app = create_app()
