"""Unit tests for the Product aggregate."""

import pytest

from storefront.domain.exceptions import ValidationError
from storefront.domain.model.product import Category, Product
from storefront.domain.model.value_objects import Money


def _create(**overrides) -> Product:
    """Helper to build a valid new product."""
    fields = dict(
        owner_id="user-1",
        name="Laptop",
        price=Money.of("1200"),
        description="A portable computer",
        category="Electronics",
        stock=100,
    )
    fields.update(overrides)
    return Product.create(**fields)


class TestProductCreation:

    def test_happy_path(self):
        product = _create()
        assert product.id is None  # assigned by repository
        assert product.name == "Laptop"
        assert product.category == Category.ELECTRONICS
        assert product.stock == 100
        assert product.owner_id == "user-1"
        assert product.updated_by == "user-1"

    def test_name_and_description_are_trimmed(self):
        product = _create(name="  Laptop  ", description="  A portable computer ")
        assert product.name == "Laptop"
        assert product.description == "A portable computer"

    def test_short_name_rejected(self):
        with pytest.raises(ValidationError, match="at least 3 characters"):
            _create(name="PC")

    def test_long_name_rejected(self):
        with pytest.raises(ValidationError, match="more than 100 characters"):
            _create(name="x" * 101)

    def test_short_description_rejected(self):
        with pytest.raises(ValidationError, match="at least 10 characters"):
            _create(description="Too short")

    def test_unknown_category_rejected(self):
        with pytest.raises(ValidationError, match="garden is not a supported category"):
            _create(category="garden")

    def test_category_is_case_sensitive(self):
        with pytest.raises(ValidationError, match="not a supported category"):
            _create(category="electronics")

    def test_negative_stock_rejected(self):
        with pytest.raises(ValidationError, match="cannot be negative"):
            _create(stock=-1)

    def test_fractional_stock_rejected(self):
        with pytest.raises(ValidationError, match="must be an integer"):
            _create(stock=1.5)

    def test_owner_required(self):
        with pytest.raises(ValidationError, match="owner is required"):
            _create(owner_id="")


class TestProductChanges:

    def test_apply_changes_updates_fields_and_audit(self):
        product = _create()
        before = product.updated_at

        product.apply_changes({"price": "999.99", "stock": 5}, updated_by="user-2")

        assert product.price == Money.of("999.99")
        assert product.stock == 5
        assert product.updated_by == "user-2"
        assert product.owner_id == "user-1"
        assert product.updated_at >= before

    def test_invalid_change_leaves_product_untouched(self):
        product = _create()
        with pytest.raises(ValidationError):
            product.apply_changes({"name": "Desk", "stock": -4}, updated_by="user-2")
        assert product.name == "Laptop"
        assert product.stock == 100
        assert product.updated_by == "user-1"

    def test_non_editable_field_rejected(self):
        product = _create()
        with pytest.raises(ValidationError, match="Cannot update field"):
            product.apply_changes({"owner_id": "user-3"}, updated_by="user-2")

    def test_updating_user_required(self):
        product = _create()
        with pytest.raises(ValidationError, match="Updating user is required"):
            product.apply_changes({"stock": 1}, updated_by="")


class TestProductStock:

    def test_has_stock_for(self):
        product = _create(stock=3)
        assert product.has_stock_for(3)
        assert not product.has_stock_for(4)
