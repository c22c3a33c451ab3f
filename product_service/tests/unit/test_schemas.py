import pytest
from pydantic import ValidationError

from product_service.app.schemas.category import CategoryCreate, CategoryUpdate
from product_service.app.schemas.product import ProductUpdate


class TestNameValidation:
    def test_create_strips_whitespace(self):
        assert CategoryCreate(name="  Garden ").name == "Garden"

    @pytest.mark.parametrize("schema", [CategoryUpdate, ProductUpdate])
    def test_update_rejects_blank_name(self, schema):
        with pytest.raises(ValidationError):
            schema(name="   ")

    @pytest.mark.parametrize("schema", [CategoryUpdate, ProductUpdate])
    def test_update_strips_whitespace(self, schema):
        assert schema(name="  Renamed  ").name == "Renamed"

    @pytest.mark.parametrize("schema", [CategoryUpdate, ProductUpdate])
    def test_update_without_name_keeps_none(self, schema):
        assert schema(description="only this").name is None
