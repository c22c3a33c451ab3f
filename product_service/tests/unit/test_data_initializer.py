from decimal import Decimal

import pytest

from product_service.app.core.data_initializer import (
    SAMPLE_CATEGORIES,
    SAMPLE_PRODUCTS,
    initialize_sample_data,
)
from product_service.app.repository.category_repository import CategoryRepository
from product_service.app.repository.product_repository import ProductRepository


class TestDataInitializer:
    @pytest.mark.asyncio
    async def test_seeds_empty_catalog(self, db_session):
        assert await initialize_sample_data(db_session) is True
        db_session.expunge_all()

        categories = await CategoryRepository(db_session).find_all()
        products = await ProductRepository(db_session).find_all()

        assert [c.name for c in categories] == ["Electronics", "Clothing", "Books"]
        assert len(products) == len(SAMPLE_PRODUCTS) == 8

        by_name = {p.name: p for p in products}
        assert by_name["Spring Boot in Action"].category.name == "Books"
        assert by_name["Effective Java"].price == Decimal("44.99")
        assert by_name["Smartphone X"].category.name == "Electronics"

    @pytest.mark.asyncio
    async def test_skips_when_categories_exist(self, db_session):
        await initialize_sample_data(db_session)

        assert await initialize_sample_data(db_session) is False
        assert await CategoryRepository(db_session).count() == len(SAMPLE_CATEGORIES)
        assert await ProductRepository(db_session).count() == len(SAMPLE_PRODUCTS)
