from typing import List

import strawberry
from strawberry.types import Info

from .converters import parse_id
from .types import CategoryType, ProductType


@strawberry.type
class Query:
    @strawberry.field
    async def products(self, info: Info) -> List[ProductType]:
        products = await info.context.product_service.find_all_products()
        return [ProductType.from_model(product) for product in products]

    @strawberry.field
    async def product(self, info: Info, id: strawberry.ID) -> ProductType:
        product = await info.context.product_service.find_product_by_id(parse_id(id))
        return ProductType.from_model(product)

    @strawberry.field
    async def products_by_category(
        self, info: Info, category_id: strawberry.ID
    ) -> List[ProductType]:
        service = info.context.product_service
        products = await service.find_products_by_category_id(
            parse_id(category_id, "categoryId")
        )
        return [ProductType.from_model(product) for product in products]

    @strawberry.field
    async def categories(self, info: Info) -> List[CategoryType]:
        categories = await info.context.category_service.find_all_categories()
        return [CategoryType.from_model(category) for category in categories]

    @strawberry.field
    async def category(self, info: Info, id: strawberry.ID) -> CategoryType:
        category = await info.context.category_service.find_category_by_id(
            parse_id(id)
        )
        return CategoryType.from_model(category)
