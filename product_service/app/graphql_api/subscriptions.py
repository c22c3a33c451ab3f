from typing import AsyncGenerator

import strawberry
from strawberry.types import Info

from .types import ProductType


@strawberry.type
class Subscription:
    @strawberry.subscription
    async def product_created(self, info: Info) -> AsyncGenerator[ProductType, None]:
        async for product in info.context.product_service.product_created_stream():
            yield ProductType.from_model(product)

    @strawberry.subscription
    async def product_updated(self, info: Info) -> AsyncGenerator[ProductType, None]:
        async for product in info.context.product_service.product_updated_stream():
            yield ProductType.from_model(product)
