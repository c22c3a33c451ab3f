"""
Sample catalog seeding, run once at startup against an empty database.
"""

from decimal import Decimal
from typing import Any, Dict, List

from sqlalchemy.ext.asyncio import AsyncSession

from ..models.category import Category
from ..models.product import Product
from ..repository.category_repository import CategoryRepository
from ..repository.product_repository import ProductRepository
from ..utils.logging import setup_product_logging as setup_logging
from .setting import get_settings

logger = setup_logging("product_service.data_initializer", get_settings().LOG_LEVEL)

SAMPLE_CATEGORIES: List[Dict[str, str]] = [
    {"name": "Electronics", "description": "Electronic equipment and devices"},
    {"name": "Clothing", "description": "Apparel and fashion items"},
    {"name": "Books", "description": "Books, ebooks, and audiobooks"},
]

SAMPLE_PRODUCTS: List[Dict[str, Any]] = [
    {
        "name": "Smartphone X",
        "description": "The latest flagship smartphone with cutting-edge features",
        "price": "999.99",
        "stock_quantity": 50,
        "category": "Electronics",
    },
    {
        "name": "Laptop Pro",
        "description": "High-performance laptop for professionals",
        "price": "1499.99",
        "stock_quantity": 25,
        "category": "Electronics",
    },
    {
        "name": "Wireless Headphones",
        "description": "Premium wireless noise-cancelling headphones",
        "price": "249.99",
        "stock_quantity": 100,
        "category": "Electronics",
    },
    {
        "name": "Cotton T-Shirt",
        "description": "Comfortable 100% cotton t-shirt",
        "price": "19.99",
        "stock_quantity": 200,
        "category": "Clothing",
    },
    {
        "name": "Denim Jeans",
        "description": "Classic denim jeans with modern fit",
        "price": "59.99",
        "stock_quantity": 150,
        "category": "Clothing",
    },
    {
        "name": "JavaScript: The Good Parts",
        "description": "A book focusing on the good features of JavaScript",
        "price": "29.99",
        "stock_quantity": 75,
        "category": "Books",
    },
    {
        "name": "Spring Boot in Action",
        "description": "Learn Spring Boot development by example",
        "price": "39.99",
        "stock_quantity": 60,
        "category": "Books",
    },
    {
        "name": "Effective Java",
        "description": "Best practices for Java programming",
        "price": "44.99",
        "stock_quantity": 40,
        "category": "Books",
    },
]


async def initialize_sample_data(session: AsyncSession) -> bool:
    """
    Seed categories and products when the catalog is empty.

    Returns True when data was inserted, False when the database already
    held categories.
    """
    category_repository = CategoryRepository(session)
    product_repository = ProductRepository(session)

    if await category_repository.count() > 0:
        logger.info("Database already initialized, skipping initialization")
        return False

    logger.info("Initializing database with sample data")

    categories: Dict[str, Category] = {}
    for data in SAMPLE_CATEGORIES:
        categories[data["name"]] = await category_repository.save(Category(**data))

    await product_repository.save_all(
        Product(
            name=data["name"],
            description=data["description"],
            price=Decimal(data["price"]),
            stock_quantity=data["stock_quantity"],
            category_id=categories[data["category"]].id,
        )
        for data in SAMPLE_PRODUCTS
    )

    logger.info(
        "Sample data initialized",
        extra={
            "categories": await category_repository.count(),
            "products": await product_repository.count(),
        },
    )
    return True
