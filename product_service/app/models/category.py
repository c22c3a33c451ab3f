from typing import TYPE_CHECKING

from sqlalchemy import TEXT, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from .base import ProductServiceBaseModel

if TYPE_CHECKING:
    from .product import Product


class Category(ProductServiceBaseModel):
    __tablename__ = "categories"

    name: Mapped[str] = mapped_column(String(255), unique=True, nullable=False)
    description: Mapped[str | None] = mapped_column(TEXT, nullable=True)

    # No cascade: deleting a category that still owns products must fail
    products: Mapped[list["Product"]] = relationship(
        "Product",
        back_populates="category",
        passive_deletes="all",
        lazy="raise",
    )
