"""Per-request GraphQL context: database session, services and caller."""

from functools import cached_property
from typing import Optional

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession
from strawberry.fastapi import BaseContext

from ..api.dependencies import (
    PrincipalDep,
    build_product_service,
    get_async_session,
    get_product_event_producer,
    is_admin,
)
from ..events.event_producers import ProductEventProducer
from ..services.category_service import CategoryService
from ..services.product_service import ProductService
from ..utils.jwt_handler import TokenData


class CatalogContext(BaseContext):
    def __init__(
        self,
        session: AsyncSession,
        event_producer: Optional[ProductEventProducer],
        principal: Optional[TokenData],
    ):
        super().__init__()
        self.session = session
        self.event_producer = event_producer
        self.principal = principal

    @property
    def is_admin(self) -> bool:
        return is_admin(self.principal)

    @cached_property
    def product_service(self) -> ProductService:
        return build_product_service(self.session, self.event_producer)

    @cached_property
    def category_service(self) -> CategoryService:
        return CategoryService(self.session)


async def get_context(
    session: AsyncSession = Depends(get_async_session),
    event_producer: Optional[ProductEventProducer] = Depends(
        get_product_event_producer
    ),
    principal: Optional[TokenData] = PrincipalDep,
) -> CatalogContext:
    return CatalogContext(session, event_producer, principal)
