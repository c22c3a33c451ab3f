from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, Field, field_validator


def _clean_name(v: str) -> str:
    if not v or not v.strip():
        raise ValueError("name cannot be empty or whitespace only")
    return v.strip()


class ProductBase(BaseModel):
    name: str = Field(
        ..., min_length=1, max_length=255, description="Product name (required)"
    )
    description: Optional[str] = None
    price: Decimal = Field(..., ge=0, max_digits=10, decimal_places=2)
    stock_quantity: int = Field(default=0, ge=0)
    category_id: int = Field(..., gt=0, description="Category ID (must be positive)")

    @field_validator("name")
    @classmethod
    def validate_name(cls, v):
        return _clean_name(v)


class ProductCreate(ProductBase):
    pass


class ProductUpdate(BaseModel):
    """Partial update; fields left as None keep their stored value."""

    name: Optional[str] = Field(None, min_length=1, max_length=255)
    description: Optional[str] = None
    price: Optional[Decimal] = Field(None, ge=0, max_digits=10, decimal_places=2)
    stock_quantity: Optional[int] = Field(None, ge=0)
    category_id: Optional[int] = Field(None, gt=0)

    @field_validator("name")
    @classmethod
    def validate_name(cls, v):
        return _clean_name(v) if v is not None else v
