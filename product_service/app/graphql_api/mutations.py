import strawberry
from strawberry.types import Info

from .converters import (
    parse_id,
    to_category_create,
    to_category_update,
    to_product_create,
    to_product_update,
)
from .permissions import IsAdmin
from .types import (
    CategoryInput,
    CategoryType,
    CategoryUpdateInput,
    ProductInput,
    ProductType,
    ProductUpdateInput,
)


@strawberry.type
class Mutation:
    @strawberry.mutation(permission_classes=[IsAdmin])
    async def create_product(self, info: Info, input: ProductInput) -> ProductType:
        product = await info.context.product_service.create_product(
            to_product_create(input)
        )
        return ProductType.from_model(product)

    @strawberry.mutation(permission_classes=[IsAdmin])
    async def update_product(
        self, info: Info, id: strawberry.ID, input: ProductUpdateInput
    ) -> ProductType:
        product = await info.context.product_service.update_product(
            parse_id(id), to_product_update(input)
        )
        return ProductType.from_model(product)

    @strawberry.mutation(permission_classes=[IsAdmin])
    async def delete_product(self, info: Info, id: strawberry.ID) -> bool:
        return await info.context.product_service.delete_product(parse_id(id))

    @strawberry.mutation(permission_classes=[IsAdmin])
    async def create_category(self, info: Info, input: CategoryInput) -> CategoryType:
        category = await info.context.category_service.create_category(
            to_category_create(input)
        )
        return CategoryType.from_model(category)

    @strawberry.mutation(permission_classes=[IsAdmin])
    async def update_category(
        self, info: Info, id: strawberry.ID, input: CategoryUpdateInput
    ) -> CategoryType:
        category = await info.context.category_service.update_category(
            parse_id(id), to_category_update(input)
        )
        return CategoryType.from_model(category)

    @strawberry.mutation(permission_classes=[IsAdmin])
    async def delete_category(self, info: Info, id: strawberry.ID) -> bool:
        return await info.context.category_service.delete_category(parse_id(id))
