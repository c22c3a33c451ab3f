"""Product Service Models"""

from .base import ProductServiceBase, ProductServiceBaseModel
from .category import Category
from .product import Product

__all__ = [
    "ProductServiceBase",
    "ProductServiceBaseModel",
    "Category",
    "Product",
]
