from typing import Any, AsyncGenerator, Dict, Optional

from sqlalchemy import event
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from ..models.base import ProductServiceBase
from ..utils.logging import setup_product_logging as setup_logging
from .setting import get_settings

# Setup structured logging for database operations
logger = setup_logging("product_service.database", log_level=get_settings().LOG_LEVEL)


def _enable_sqlite_foreign_keys(dbapi_connection: Any, _connection_record: Any) -> None:
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


class ProductServiceDatabaseManager:
    """Custom database manager for Product Service with optimized settings."""

    def __init__(self, database_url: str, echo: bool = False) -> None:
        logger.info(
            "Initializing Product Service database manager",
            extra={
                "operation": "database_manager_init",
                "database_url": database_url.split("@")[-1],  # Mask credentials
                "echo": echo,
                "service": "product_service",
            },
        )

        engine_kwargs: Dict[str, Any] = {"echo": echo}

        is_sqlite = "sqlite" in database_url
        if is_sqlite:
            # SQLite configuration for development and tests
            engine_kwargs["connect_args"] = {
                "timeout": 60,
                "check_same_thread": False,
            }
        else:
            settings = get_settings()
            engine_kwargs.update(
                {
                    "pool_size": settings.DATABASE_POOL_SIZE,
                    "max_overflow": settings.DATABASE_MAX_OVERFLOW,
                    "pool_timeout": 45,
                    "pool_recycle": 3600,
                    "pool_pre_ping": True,
                }
            )

        self.async_engine = create_async_engine(database_url, **engine_kwargs)
        if is_sqlite:
            # Referential integrity is the only invariant of the catalog
            event.listen(
                self.async_engine.sync_engine, "connect", _enable_sqlite_foreign_keys
            )

        self.async_session_maker = async_sessionmaker(
            bind=self.async_engine,
            class_=AsyncSession,
            expire_on_commit=False,
            autoflush=False,
        )

        logger.info(
            "Product Service database manager initialized successfully",
            extra={
                "operation": "database_manager_init_complete",
                "database_type": "sqlite" if is_sqlite else "postgresql",
                "service": "product_service",
            },
        )

    async def create_tables(self) -> None:
        """Create all Product Service database tables."""
        async with self.async_engine.begin() as conn:
            await conn.run_sync(ProductServiceBase.metadata.create_all, checkfirst=True)
        logger.info(
            "Database tables created successfully",
            extra={"operation": "create_tables", "service": "product_service"},
        )

    async def get_async_session(self) -> AsyncGenerator[AsyncSession, None]:
        """Get async database session for Product Service."""
        async with self.async_session_maker() as session:
            yield session

    async def close(self) -> None:
        """Properly close the Product Service database engine and connections."""
        await self.async_engine.dispose()
        logger.info(
            "Product Service database connections closed",
            extra={"operation": "database_close", "service": "product_service"},
        )


_database_manager: Optional[ProductServiceDatabaseManager] = None


def get_database_manager() -> ProductServiceDatabaseManager:
    """Return the process-wide database manager, creating it on first use."""
    global _database_manager
    if _database_manager is None:
        settings = get_settings()
        if not settings.PRODUCT_DATABASE_URL:
            error_msg = "PRODUCT_DATABASE_URL is required for Product Service"
            logger.error(error_msg, extra={"operation": "global_database_init"})
            raise ValueError(error_msg)
        _database_manager = ProductServiceDatabaseManager(
            database_url=settings.PRODUCT_DATABASE_URL, echo=settings.DEBUG
        )
    return _database_manager


def set_database_manager(manager: Optional[ProductServiceDatabaseManager]) -> None:
    """Replace the process-wide database manager (used by tests)."""
    global _database_manager
    _database_manager = manager


# Dependency injection function for FastAPI
async def get_db_session() -> AsyncGenerator[AsyncSession, None]:
    """Get database session for dependency injection."""
    async for session in get_database_manager().get_async_session():
        yield session
