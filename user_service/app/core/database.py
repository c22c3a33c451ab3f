from typing import Any, AsyncGenerator, Dict, Optional

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from ..models.base import UserServiceBase
from ..utils.logging import setup_user_logging
from .settings import get_settings

logger = setup_user_logging("user_service.database", log_level=get_settings().LOG_LEVEL)


class UserServiceDatabaseManager:
    """Engine and session factory for the user store."""

    def __init__(self, database_url: str, echo: bool = False) -> None:
        engine_kwargs: Dict[str, Any] = {"echo": echo}
        if database_url.startswith("sqlite"):
            engine_kwargs["connect_args"] = {"timeout": 60, "check_same_thread": False}
        else:
            engine_kwargs.update(
                {
                    "pool_size": 10,
                    "max_overflow": 20,
                    "pool_recycle": 3600,
                    "pool_pre_ping": True,
                }
            )

        self.async_engine = create_async_engine(database_url, **engine_kwargs)
        self.async_session_maker = async_sessionmaker(
            bind=self.async_engine,
            class_=AsyncSession,
            expire_on_commit=False,
            autoflush=False,
        )
        logger.info(
            "User Service database manager initialized",
            extra={
                "operation": "database_manager_init",
                "database_url": database_url.split("@")[-1],
            },
        )

    async def create_tables(self) -> None:
        async with self.async_engine.begin() as conn:
            await conn.run_sync(UserServiceBase.metadata.create_all, checkfirst=True)
        logger.info("Database tables created", extra={"operation": "create_tables"})

    async def get_async_session(self) -> AsyncGenerator[AsyncSession, None]:
        async with self.async_session_maker() as session:
            yield session

    async def close(self) -> None:
        await self.async_engine.dispose()
        logger.info("User Service database connections closed")


_database_manager: Optional[UserServiceDatabaseManager] = None


def get_database_manager() -> UserServiceDatabaseManager:
    global _database_manager
    if _database_manager is None:
        settings = get_settings()
        _database_manager = UserServiceDatabaseManager(
            settings.USER_DATABASE_URL, echo=settings.DEBUG
        )
    return _database_manager


def set_database_manager(manager: Optional[UserServiceDatabaseManager]) -> None:
    """Replace the process-wide database manager (used by tests)."""
    global _database_manager
    _database_manager = manager
