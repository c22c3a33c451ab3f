"""GraphQL object and input types of the catalog schema."""

from datetime import datetime
from typing import List, Optional

import strawberry
from strawberry.types import Info

from ..models.category import Category
from ..models.product import Product


@strawberry.type(name="Category")
class CategoryType:
    id: strawberry.ID
    name: str
    description: Optional[str]
    created_at: datetime
    updated_at: datetime

    @strawberry.field
    async def products(self, info: Info) -> List["ProductType"]:
        products = await info.context.product_service.find_products_by_category_id(
            int(self.id)
        )
        return [ProductType.from_model(product) for product in products]

    @classmethod
    def from_model(cls, category: Category) -> "CategoryType":
        return cls(
            id=strawberry.ID(str(category.id)),
            name=category.name,
            description=category.description,
            created_at=category.created_at,
            updated_at=category.updated_at,
        )


@strawberry.type(name="Product")
class ProductType:
    id: strawberry.ID
    name: str
    description: Optional[str]
    price: float
    stock_quantity: int
    category: Optional[CategoryType]
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_model(cls, product: Product) -> "ProductType":
        return cls(
            id=strawberry.ID(str(product.id)),
            name=product.name,
            description=product.description,
            price=float(product.price),
            stock_quantity=product.stock_quantity,
            category=CategoryType.from_model(product.category)
            if product.category is not None
            else None,
            created_at=product.created_at,
            updated_at=product.updated_at,
        )


@strawberry.input(name="ProductInput")
class ProductInput:
    name: str
    price: float
    stock_quantity: int
    category_id: strawberry.ID
    description: Optional[str] = None


@strawberry.input(name="ProductUpdateInput")
class ProductUpdateInput:
    name: Optional[str] = None
    description: Optional[str] = None
    price: Optional[float] = None
    stock_quantity: Optional[int] = None
    category_id: Optional[strawberry.ID] = None


@strawberry.input(name="CategoryInput")
class CategoryInput:
    name: str
    description: Optional[str] = None


@strawberry.input(name="CategoryUpdateInput")
class CategoryUpdateInput:
    name: Optional[str] = None
    description: Optional[str] = None
