"""
==============================================================================
Catalog Service Tests
==============================================================================

Tests for product creation, lookup, update and deletion rules.

==============================================================================
"""

from decimal import Decimal

import pytest
from sqlalchemy.orm import Session

from retail_catalog.core.exceptions import (
    ResourceAlreadyExistsException,
    ResourceNotFoundException,
)
from retail_catalog.db.models import Product
from retail_catalog.repositories.product_store import SQLAlchemyProductStore
from retail_catalog.schemas.product import ProductCreate, ProductPatch, ProductReplace
from retail_catalog.services.catalog_service import CatalogService


def _create(catalog: CatalogService, name: str, category: str = "Electronics", quantity: int = 5) -> Product:
    return catalog.create_product(ProductCreate(
        product_name=name,
        category=category,
        price=Decimal("10.00"),
        quantity=quantity
    ))


class TestCreateProduct:
    """Tests for product creation."""

    def test_create_assigns_id_and_timestamps(self, catalog: CatalogService):
        product = catalog.create_product(ProductCreate(
            product_name="Tablet",
            category="Electronics",
            price=Decimal("499.99"),
            quantity=15
        ))

        assert product.id is not None
        assert product.created_at is not None
        assert product.updated_at is not None
        assert product.product_name == "Tablet"
        assert product.price == Decimal("499.99")
        assert product.quantity == 15
        assert product.description is None

    def test_created_product_is_readable(self, catalog: CatalogService, laptop: Product):
        by_id = catalog.get_by_id(laptop.id)
        by_name = catalog.get_by_product_name("Laptop")

        assert by_id.id == by_name.id == laptop.id
        assert by_id.category == "Electronics"
        assert by_id.description == "High-performance laptop"

    def test_duplicate_name_ignoring_case_rejected(self, catalog: CatalogService, laptop: Product):
        with pytest.raises(ResourceAlreadyExistsException) as exc_info:
            _create(catalog, "laptop")

        exc = exc_info.value
        assert exc.entity == "Product"
        assert exc.field == "productName"
        assert exc.value == "laptop"
        assert exc.status_code == 409
        assert "Product" in exc.message
        assert "productName" in exc.message
        assert "laptop" in exc.message
        assert len(catalog.list_products()) == 1

    def test_unique_index_backs_up_precheck(self, db: Session, laptop: Product):
        """A writer that skipped the pre-check still gets AlreadyExists."""

        class RacingStore(SQLAlchemyProductStore):
            def exists_by_name_case_insensitive(self, name, exclude_id=None):
                return False

        catalog = CatalogService(db, store=RacingStore(db))

        with pytest.raises(ResourceAlreadyExistsException):
            _create(catalog, "LAPTOP")

        assert [p.product_name for p in catalog.list_products()] == ["Laptop"]

    def test_duplicate_accented_name_rejected(self, catalog: CatalogService):
        _create(catalog, "Crème Brûlée", category="Desserts")

        with pytest.raises(ResourceAlreadyExistsException):
            _create(catalog, "CRÈME BRÛLÉE", category="Desserts")

        assert len(catalog.list_products()) == 1


class TestReadOperations:
    """Tests for lookups and listings."""

    def test_get_by_id_missing(self, catalog: CatalogService):
        with pytest.raises(ResourceNotFoundException) as exc_info:
            catalog.get_by_id(999)

        assert exc_info.value.field == "id"
        assert exc_info.value.value == 999
        assert exc_info.value.status_code == 404

    def test_get_by_product_name_ignores_case(self, catalog: CatalogService, laptop: Product):
        assert catalog.get_by_product_name("LAPTOP").id == laptop.id

    def test_get_by_product_name_missing(self, catalog: CatalogService):
        with pytest.raises(ResourceNotFoundException) as exc_info:
            catalog.get_by_product_name("Desk")

        assert exc_info.value.field == "productName"
        assert exc_info.value.value == "Desk"

    def test_get_by_accented_product_name_ignores_case(self, catalog: CatalogService):
        product = _create(catalog, "Crème Brûlée", category="Desserts")

        assert catalog.get_by_product_name("crème brûlée").id == product.id
        assert catalog.get_by_product_name("CRÈME BRÛLÉE").id == product.id

    def test_get_by_product_name_does_not_trim(self, catalog: CatalogService, laptop: Product):
        with pytest.raises(ResourceNotFoundException):
            catalog.get_by_product_name(" laptop ")

    def test_list_products_in_insertion_order(self, catalog: CatalogService, laptop: Product, smartphone: Product):
        assert [p.id for p in catalog.list_products()] == [laptop.id, smartphone.id]

    def test_list_by_category_ignores_case(self, catalog: CatalogService, laptop: Product, smartphone: Product):
        _create(catalog, "Desk", category="Furniture")

        electronics = catalog.list_by_category("electronics")

        assert [p.product_name for p in electronics] == ["Laptop", "Smartphone"]

    def test_list_by_category_without_matches(self, catalog: CatalogService, laptop: Product):
        assert catalog.list_by_category("Garden") == []

    def test_list_by_accented_category(self, catalog: CatalogService):
        _create(catalog, "Baguette", category="Épicerie")
        _create(catalog, "Croissant", category="épicerie", quantity=0)

        assert [p.product_name for p in catalog.list_by_category("Épicerie")] == ["Baguette", "Croissant"]
        assert [p.product_name for p in catalog.list_by_category("ÉPICERIE")] == ["Baguette", "Croissant"]
        assert [p.product_name for p in catalog.list_in_stock_by_category("ÉPICERIE")] == ["Baguette"]

    def test_list_by_category_does_not_trim(self, catalog: CatalogService, laptop: Product):
        assert catalog.list_by_category(" Electronics ") == []

    def test_list_in_stock_by_category(self, catalog: CatalogService, laptop: Product, smartphone: Product):
        _create(catalog, "Charger", quantity=0)

        assert [p.product_name for p in catalog.list_in_stock_by_category("Electronics")] == [
            "Laptop",
            "Smartphone",
        ]
        assert [p.product_name for p in catalog.list_in_stock_by_category("electronics", 10)] == [
            "Smartphone",
        ]

    def test_exists_by_id(self, catalog: CatalogService, laptop: Product):
        assert catalog.exists_by_id(laptop.id) is True
        assert catalog.exists_by_id(laptop.id + 100) is False


class TestReplaceProduct:
    """Tests for full updates."""

    def test_replace_overwrites_every_field(self, catalog: CatalogService, laptop: Product):
        created_at = laptop.created_at

        updated = catalog.replace_product(laptop.id, ProductReplace(
            product_name="Gaming Laptop",
            category="Computers",
            price=Decimal("1299.00"),
            quantity=3
        ))

        assert updated.id == laptop.id
        assert updated.product_name == "Gaming Laptop"
        assert updated.category == "Computers"
        assert updated.price == Decimal("1299.00")
        assert updated.quantity == 3
        assert updated.description is None
        assert updated.created_at == created_at
        assert updated.updated_at >= created_at

    def test_replace_with_same_name_different_case(self, catalog: CatalogService, laptop: Product):
        updated = catalog.replace_product(laptop.id, ProductReplace(
            product_name="LAPTOP",
            category="Electronics",
            price=Decimal("999.99"),
            quantity=10
        ))

        assert updated.product_name == "LAPTOP"
        assert catalog.get_by_product_name("laptop").id == laptop.id

    def test_replace_rename_collision(self, catalog: CatalogService, laptop: Product, smartphone: Product):
        with pytest.raises(ResourceAlreadyExistsException) as exc_info:
            catalog.replace_product(smartphone.id, ProductReplace(
                product_name="laptop",
                category="Electronics",
                price=Decimal("1.00"),
                quantity=1
            ))

        assert exc_info.value.value == "laptop"
        unchanged = catalog.get_by_id(smartphone.id)
        assert unchanged.product_name == "Smartphone"
        assert unchanged.quantity == 20

    def test_replace_missing_product(self, catalog: CatalogService):
        with pytest.raises(ResourceNotFoundException):
            catalog.replace_product(42, ProductReplace(
                product_name="Ghost",
                category="None",
                price=Decimal("0"),
                quantity=0
            ))

        assert catalog.list_products() == []


class TestMergeUpdate:
    """Tests for partial updates."""

    def test_merge_updates_only_supplied_fields(self, catalog: CatalogService, laptop: Product):
        updated = catalog.merge_update(laptop.id, ProductPatch(price=Decimal("899.99")))

        assert updated.price == Decimal("899.99")
        assert updated.product_name == "Laptop"
        assert updated.category == "Electronics"
        assert updated.quantity == 10
        assert updated.description == "High-performance laptop"

    def test_merge_treats_null_as_absent(self, catalog: CatalogService, laptop: Product):
        patch = ProductPatch.model_validate({"description": None, "quantity": 4})

        updated = catalog.merge_update(laptop.id, patch)

        assert updated.quantity == 4
        assert updated.description == "High-performance laptop"

    def test_merge_rename(self, catalog: CatalogService, laptop: Product):
        updated = catalog.merge_update(laptop.id, ProductPatch(product_name="Notebook"))

        assert updated.product_name == "Notebook"
        assert catalog.get_by_product_name("notebook").id == laptop.id
        with pytest.raises(ResourceNotFoundException):
            catalog.get_by_product_name("Laptop")

    def test_merge_rename_collision(self, catalog: CatalogService, laptop: Product, smartphone: Product):
        with pytest.raises(ResourceAlreadyExistsException):
            catalog.merge_update(smartphone.id, ProductPatch(product_name="LAPTOP", quantity=1))

        unchanged = catalog.get_by_id(smartphone.id)
        assert unchanged.product_name == "Smartphone"
        assert unchanged.quantity == 20

    def test_merge_missing_product(self, catalog: CatalogService):
        with pytest.raises(ResourceNotFoundException):
            catalog.merge_update(7, ProductPatch(quantity=1))


class TestDeleteOperations:
    """Tests for deletion."""

    def test_delete_product(self, catalog: CatalogService, laptop: Product):
        catalog.delete_product(laptop.id)

        with pytest.raises(ResourceNotFoundException) as exc_info:
            catalog.get_by_id(laptop.id)
        assert exc_info.value.field == "id"
        assert exc_info.value.value == laptop.id

    def test_delete_missing_product(self, catalog: CatalogService, laptop: Product):
        with pytest.raises(ResourceNotFoundException):
            catalog.delete_product(laptop.id + 1)

        assert len(catalog.list_products()) == 1

    def test_deleted_name_can_be_reused(self, catalog: CatalogService, laptop: Product):
        catalog.delete_product(laptop.id)

        recreated = _create(catalog, "LAPTOP")

        assert recreated.id != laptop.id

    def test_delete_all(self, catalog: CatalogService, laptop: Product, smartphone: Product):
        known_ids = [laptop.id, smartphone.id]

        assert catalog.delete_all() == 2

        assert catalog.list_products() == []
        assert not any(catalog.exists_by_id(product_id) for product_id in known_ids)

    def test_delete_all_on_empty_catalog(self, catalog: CatalogService):
        assert catalog.delete_all() == 0

    def test_ids_are_not_reused(self, catalog: CatalogService, laptop: Product, smartphone: Product):
        catalog.delete_all()

        product = _create(catalog, "Monitor")

        assert product.id > smartphone.id
