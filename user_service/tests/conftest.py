"""
Pytest configuration and fixtures for user service tests.
"""

import os
from typing import Any, AsyncGenerator

import pytest

# Set up test environment variables before importing anything else
os.environ.setdefault("ENVIRONMENT", "test")
os.environ.setdefault("LOG_LEVEL", "WARNING")
os.environ.setdefault("USER_DATABASE_URL", "sqlite+aiosqlite:///./user_test.db")

from user_service.app.core.database import UserServiceDatabaseManager  # noqa: E402
from user_service.app.core.password_security import PasswordEncoder  # noqa: E402


@pytest.fixture
async def test_database_manager(tmp_path) -> AsyncGenerator[UserServiceDatabaseManager, None]:
    manager = UserServiceDatabaseManager(
        database_url=f"sqlite+aiosqlite:///{tmp_path / 'users.db'}"
    )
    await manager.create_tables()
    yield manager
    await manager.close()


@pytest.fixture
async def db_session(test_database_manager) -> AsyncGenerator[Any, None]:
    async with test_database_manager.async_session_maker() as session:
        yield session


@pytest.fixture
def password_encoder() -> PasswordEncoder:
    return PasswordEncoder()
