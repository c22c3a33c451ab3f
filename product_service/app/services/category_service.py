"""Category service for business logic"""

from typing import List

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from ..core.exceptions import ResourceNotFoundError
from ..models.category import Category
from ..repository.category_repository import CategoryRepository
from ..schemas.category import CategoryCreate, CategoryUpdate
from ..utils.logging import setup_product_logging as setup_logging

# Setup structured logging for the service
logger = setup_logging("product_service.category_service")


class CategoryService:
    """Service class for category business logic"""

    def __init__(self, db: AsyncSession):
        self.db = db
        self.repository = CategoryRepository(db)

    async def find_all_categories(self) -> List[Category]:
        return await self.repository.find_all()

    async def find_category_by_id(self, category_id: int) -> Category:
        category = await self.repository.find_by_id(category_id)
        if category is None:
            raise ResourceNotFoundError(f"Category not found with id: {category_id}")
        return category

    async def create_category(self, category_data: CategoryCreate) -> Category:
        """Create a new category"""
        category = await self.repository.create(category_data)
        logger.info(
            "Category created successfully",
            extra={"category_id": category.id, "category_name": category.name},
        )
        return category

    async def update_category(
        self, category_id: int, category_data: CategoryUpdate
    ) -> Category:
        """Update the provided fields of an existing category"""
        category = await self.find_category_by_id(category_id)
        category = await self.repository.update(category, category_data)
        logger.info(
            "Category updated successfully",
            extra={
                "category_id": category_id,
                "updated_fields": list(category_data.model_dump(exclude_none=True)),
            },
        )
        return category

    async def delete_category(self, category_id: int) -> bool:
        """
        Delete a category.

        Returns False when products still reference the category, since the
        foreign key forbids removing it.
        """
        if not await self.repository.exists_by_id(category_id):
            raise ResourceNotFoundError(f"Category not found with id: {category_id}")

        try:
            await self.repository.delete_by_id(category_id)
        except IntegrityError:
            await self.db.rollback()
            logger.error(
                f"Failed to delete category with id: {category_id}",
                extra={"category_id": category_id, "reason": "category_in_use"},
                exc_info=True,
            )
            return False

        logger.info("Category deleted successfully", extra={"category_id": category_id})
        return True
