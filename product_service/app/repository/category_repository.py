"""Category repository for database operations"""

from typing import List, Optional

from sqlalchemy import delete, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from ..models.category import Category
from ..schemas.category import CategoryCreate, CategoryUpdate


class CategoryRepository:
    """Repository for category database operations"""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def find_all(self) -> List[Category]:
        result = await self.db.execute(select(Category).order_by(Category.id))
        return list(result.scalars().all())

    async def find_by_id(self, category_id: int) -> Optional[Category]:
        """Get category by ID"""
        query = select(Category).where(Category.id == category_id)
        result = await self.db.execute(query)
        return result.scalar_one_or_none()

    async def exists_by_id(self, category_id: int) -> bool:
        query = select(Category.id).where(Category.id == category_id)
        result = await self.db.execute(query)
        return result.scalar_one_or_none() is not None

    async def count(self) -> int:
        result = await self.db.execute(select(func.count(Category.id)))
        return result.scalar_one()

    async def create(self, category_data: CategoryCreate) -> Category:
        """Create a new category"""
        category = Category(
            name=category_data.name,
            description=category_data.description,
        )
        return await self.save(category)

    async def update(
        self, category: Category, category_data: CategoryUpdate
    ) -> Category:
        """Apply the fields that were provided and persist the category"""
        update_data = category_data.model_dump(exclude_none=True)
        for field, value in update_data.items():
            setattr(category, field, value)
        return await self.save(category)

    async def save(self, category: Category) -> Category:
        self.db.add(category)
        await self.db.commit()
        await self.db.refresh(category)
        return category

    async def delete_by_id(self, category_id: int) -> None:
        """Hard delete; the foreign key rejects categories that still own products"""
        await self.db.execute(delete(Category).where(Category.id == category_id))
        await self.db.commit()
