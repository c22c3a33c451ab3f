"""Product repository for database operations"""

from typing import Iterable, List, Optional

from sqlalchemy import delete, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from ..models.product import Product
from ..schemas.product import ProductCreate, ProductUpdate


class ProductRepository:
    """Repository for product database operations"""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def find_all(self) -> List[Product]:
        result = await self.db.execute(select(Product).order_by(Product.id))
        return list(result.scalars().all())

    async def find_by_id(self, product_id: int) -> Optional[Product]:
        """Get product by ID"""
        query = select(Product).where(Product.id == product_id)
        result = await self.db.execute(query)
        return result.scalar_one_or_none()

    async def find_by_category_id(self, category_id: int) -> List[Product]:
        query = (
            select(Product)
            .where(Product.category_id == category_id)
            .order_by(Product.id)
        )
        result = await self.db.execute(query)
        return list(result.scalars().all())

    async def exists_by_id(self, product_id: int) -> bool:
        query = select(Product.id).where(Product.id == product_id)
        result = await self.db.execute(query)
        return result.scalar_one_or_none() is not None

    async def count(self) -> int:
        result = await self.db.execute(select(func.count(Product.id)))
        return result.scalar_one()

    async def create(self, product_data: ProductCreate) -> Product:
        """Create a new product"""
        product = Product(
            name=product_data.name,
            description=product_data.description,
            price=product_data.price,
            stock_quantity=product_data.stock_quantity,
            category_id=product_data.category_id,
        )
        return await self.save(product)

    async def update(self, product: Product, product_data: ProductUpdate) -> Product:
        """Apply the fields that were provided and persist the product"""
        update_data = product_data.model_dump(exclude_none=True)
        for field, value in update_data.items():
            setattr(product, field, value)
        return await self.save(product)

    async def save(self, product: Product) -> Product:
        self.db.add(product)
        await self.db.commit()
        # Reload through the query path so the joined category is populated
        self.db.expunge(product)
        return await self.find_by_id(product.id)  # type: ignore

    async def save_all(self, products: Iterable[Product]) -> List[Product]:
        products = list(products)
        self.db.add_all(products)
        await self.db.commit()
        return products

    async def delete_by_id(self, product_id: int) -> None:
        await self.db.execute(delete(Product).where(Product.id == product_id))
        await self.db.commit()
