"""
FastAPI dependency injection for Product Service

Provides database sessions, event publishing, the product/category services
and the caller's identity (decoded from a bearer token, when present).
"""

from typing import AsyncGenerator, Optional

from fastapi import Depends
from fastapi.requests import HTTPConnection
from sqlalchemy.ext.asyncio import AsyncSession

from ..core.database import get_db_session
from ..core.event_management import (
    get_event_producer,
    product_created_sink,
    product_updated_sink,
)
from ..core.setting import get_settings
from ..events.event_producers import ProductEventProducer
from ..services.category_service import CategoryService
from ..services.product_service import ProductService
from ..utils.jwt_handler import JWTHandler, TokenData
from ..utils.logging import setup_product_logging as setup_logging

logger = setup_logging("product_service.dependencies", get_settings().LOG_LEVEL)

# =====================================================
# DATABASE DEPENDENCIES
# =====================================================


async def get_async_session() -> AsyncGenerator[AsyncSession, None]:
    """Provide async database session"""
    async for session in get_db_session():
        yield session


# =====================================================
# EVENT PUBLISHER DEPENDENCIES
# =====================================================


def get_product_event_producer() -> Optional[ProductEventProducer]:
    """Provide ProductEventProducer instance, None when Kafka is disabled"""
    return get_event_producer()


# =====================================================
# SERVICE DEPENDENCIES
# =====================================================


def build_product_service(
    session: AsyncSession, event_producer: Optional[ProductEventProducer]
) -> ProductService:
    return ProductService(
        session,
        event_producer,
        created_sink=product_created_sink,
        updated_sink=product_updated_sink,
    )


def get_product_service(
    session: AsyncSession = Depends(get_async_session),
    event_producer: Optional[ProductEventProducer] = Depends(
        get_product_event_producer
    ),
) -> ProductService:
    """Provide ProductService instance with database and event publishing"""
    return build_product_service(session, event_producer)


def get_category_service(
    session: AsyncSession = Depends(get_async_session),
) -> CategoryService:
    """Provide CategoryService instance"""
    return CategoryService(session)


# =====================================================
# AUTHENTICATION & REQUEST CONTEXT DEPENDENCIES
# =====================================================


def _extract_token(connection: HTTPConnection) -> Optional[str]:
    authorization = connection.headers.get("Authorization", "")
    if authorization.lower().startswith("bearer "):
        return authorization[7:].strip() or None
    return connection.cookies.get("access_token")


def get_optional_principal(connection: HTTPConnection) -> Optional[TokenData]:
    """Decode the caller's token; anonymous callers and bad tokens yield None"""
    token = _extract_token(connection)
    if not token:
        return None

    settings = get_settings()
    try:
        return JWTHandler(settings.SECRET_KEY, settings.ALGORITHM).decode_token(token)
    except ValueError as e:
        logger.warning(
            "Ignoring invalid access token",
            extra={"error": str(e), "path": connection.url.path},
        )
        return None


def is_admin(principal: Optional[TokenData]) -> bool:
    return principal is not None and principal.has_role(get_settings().ADMIN_ROLE)


# =====================================================
# COMMON DEPENDENCY ALIASES
# =====================================================

PrincipalDep = Depends(get_optional_principal)
ProductServiceDep = Depends(get_product_service)
CategoryServiceDep = Depends(get_category_service)
