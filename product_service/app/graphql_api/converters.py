"""Conversion of GraphQL inputs into validated service schemas."""

from decimal import Decimal
from typing import Optional

from ..schemas.category import CategoryCreate, CategoryUpdate
from ..schemas.product import ProductCreate, ProductUpdate
from .types import CategoryInput, CategoryUpdateInput, ProductInput, ProductUpdateInput


def parse_id(value: Optional[str], field: str = "id") -> Optional[int]:
    if value is None:
        return None
    try:
        return int(value)
    except (TypeError, ValueError):
        raise ValueError(f"{field} must be a numeric identifier, got {value!r}")


def _decimal(value: Optional[float]) -> Optional[Decimal]:
    # Through str so that 19.99 stays 19.99 instead of its binary expansion
    return Decimal(str(value)) if value is not None else None


def to_product_create(data: ProductInput) -> ProductCreate:
    return ProductCreate(
        name=data.name,
        description=data.description,
        price=_decimal(data.price),
        stock_quantity=data.stock_quantity,
        category_id=parse_id(data.category_id, "categoryId"),
    )


def to_product_update(data: ProductUpdateInput) -> ProductUpdate:
    return ProductUpdate(
        name=data.name,
        description=data.description,
        price=_decimal(data.price),
        stock_quantity=data.stock_quantity,
        category_id=parse_id(data.category_id, "categoryId"),
    )


def to_category_create(data: CategoryInput) -> CategoryCreate:
    return CategoryCreate(name=data.name, description=data.description)


def to_category_update(data: CategoryUpdateInput) -> CategoryUpdate:
    return CategoryUpdate(name=data.name, description=data.description)
