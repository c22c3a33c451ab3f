from decimal import Decimal

import pytest

from product_service.app.core.exceptions import ResourceNotFoundError
from product_service.app.models.product import Product
from product_service.app.repository.product_repository import ProductRepository
from product_service.app.schemas.category import CategoryCreate, CategoryUpdate
from product_service.app.services.category_service import CategoryService


class TestCategoryService:
    """CategoryService against a real SQLite catalog."""

    @pytest.fixture
    def category_service(self, db_session):
        return CategoryService(db_session)

    @pytest.mark.asyncio
    async def test_create_and_find(self, category_service):
        created = await category_service.create_category(
            CategoryCreate(name="Garden", description="Outdoor tools")
        )

        found = await category_service.find_category_by_id(created.id)

        assert found.name == "Garden"
        assert found.description == "Outdoor tools"
        assert [c.name for c in await category_service.find_all_categories()] == [
            "Garden"
        ]

    @pytest.mark.asyncio
    async def test_find_missing_category(self, category_service):
        with pytest.raises(ResourceNotFoundError) as exc_info:
            await category_service.find_category_by_id(404)

        assert exc_info.value.message == "Category not found with id: 404"

    @pytest.mark.asyncio
    async def test_update_changes_only_given_fields(self, category_service):
        created = await category_service.create_category(
            CategoryCreate(name="Toys", description="For kids")
        )

        updated = await category_service.update_category(
            created.id, CategoryUpdate(description="For all ages")
        )

        assert updated.name == "Toys"
        assert updated.description == "For all ages"

    @pytest.mark.asyncio
    async def test_update_missing_category(self, category_service):
        with pytest.raises(ResourceNotFoundError):
            await category_service.update_category(9, CategoryUpdate(name="x"))

    @pytest.mark.asyncio
    async def test_delete_empty_category(self, category_service):
        created = await category_service.create_category(CategoryCreate(name="Empty"))

        assert await category_service.delete_category(created.id) is True
        assert await category_service.find_all_categories() == []

    @pytest.mark.asyncio
    async def test_delete_missing_category(self, category_service):
        with pytest.raises(ResourceNotFoundError):
            await category_service.delete_category(31)

    @pytest.mark.asyncio
    async def test_delete_category_in_use_returns_false(
        self, category_service, db_session
    ):
        category = await category_service.create_category(CategoryCreate(name="Books"))
        category_id = category.id
        await ProductRepository(db_session).save(
            Product(
                name="Effective Java",
                description="Best practices for the Java platform",
                price=Decimal("45.99"),
                stock_quantity=120,
                category_id=category_id,
            )
        )

        assert await category_service.delete_category(category_id) is False

        still_there = await category_service.find_category_by_id(category_id)
        assert still_there.name == "Books"
