"""
Pytest configuration and fixtures for product service tests.
"""

import os
from typing import Any, AsyncGenerator, Dict, Iterator

import pytest
from fastapi.testclient import TestClient

# Set up test environment variables before importing anything else
os.environ.setdefault("APP_NAME", "Product Service Test")
os.environ.setdefault("ENVIRONMENT", "test")
os.environ.setdefault("DEBUG", "false")
os.environ.setdefault("LOG_LEVEL", "WARNING")
os.environ.setdefault("PRODUCT_DATABASE_URL", "sqlite+aiosqlite:///./product_test.db")
os.environ.setdefault("SEED_SAMPLE_DATA", "false")
os.environ.setdefault("KAFKA_ENABLED", "false")
os.environ.setdefault("SECRET_KEY", "test-secret-key-for-testing-only")
os.environ.setdefault("ALGORITHM", "HS256")

from product_service.app.core import database as database_module  # noqa: E402
from product_service.app.core.database import (  # noqa: E402
    ProductServiceDatabaseManager,
)
from product_service.app.core.setting import get_settings  # noqa: E402
from product_service.app.main import app  # noqa: E402
from product_service.app.utils.jwt_handler import JWTHandler  # noqa: E402


def _database_url(tmp_path: Any) -> str:
    return f"sqlite+aiosqlite:///{tmp_path / 'catalog.db'}"


@pytest.fixture
async def database_manager(tmp_path) -> AsyncGenerator[ProductServiceDatabaseManager, None]:
    """Fresh SQLite database with the catalog tables created."""
    manager = ProductServiceDatabaseManager(database_url=_database_url(tmp_path))
    await manager.create_tables()
    yield manager
    await manager.close()


@pytest.fixture
async def db_session(database_manager: ProductServiceDatabaseManager) -> AsyncGenerator[Any, None]:
    async with database_manager.async_session_maker() as session:
        yield session


@pytest.fixture
def client(tmp_path, monkeypatch) -> Iterator[TestClient]:
    """Application client running the real lifespan against a seeded database."""
    monkeypatch.setattr(get_settings(), "SEED_SAMPLE_DATA", True)
    database_module.set_database_manager(
        ProductServiceDatabaseManager(database_url=_database_url(tmp_path))
    )
    with TestClient(app) as test_client:
        yield test_client
    database_module.set_database_manager(None)


def make_token(roles: list, user_id: str = "1", username: str = "tester") -> str:
    settings = get_settings()
    return JWTHandler(settings.SECRET_KEY, settings.ALGORITHM).encode_token(
        {"user_id": user_id, "username": username, "roles": roles}
    )


@pytest.fixture
def admin_headers() -> Dict[str, str]:
    return {"Authorization": f"Bearer {make_token(['ROLE_USER', 'ROLE_ADMIN'], '2', 'admin')}"}


@pytest.fixture
def user_headers() -> Dict[str, str]:
    return {"Authorization": f"Bearer {make_token(['ROLE_USER'])}"}
