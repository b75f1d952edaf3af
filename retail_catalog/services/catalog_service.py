"""
==============================================================================
Catalog Service Module
==============================================================================

Business logic for the retail product catalog.

This module implements:
- CatalogService: create, lookup, replace, merge-update and delete
  operations for product records

Business Rules:
--------------
- Product names are unique ignoring case. The check runs before every
  create and every rename; the unique index on product_name_key backs
  it up when two writers race.
- A partial update only touches the fields the caller supplied. A null
  value counts as "not supplied".
- Every write runs as one transaction: it either fully commits or
  leaves the catalog unchanged.

Error Handling:
--------------
- ResourceNotFoundException (404) for lookups by id or name that miss
- ResourceAlreadyExistsException (409) for name collisions
- Storage errors roll back and propagate unchanged

==============================================================================
"""

from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import Any, Dict, Generator, List, Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from retail_catalog.core import exceptions
from retail_catalog.db.models import MUTABLE_FIELDS, Product, normalize_name
from retail_catalog.repositories.product_store import (
    ProductStore,
    SQLAlchemyProductStore,
)
from retail_catalog.schemas.product import ProductCreate, ProductPatch, ProductReplace


# Module logger
logger = logging.getLogger(__name__)


class CatalogService:
    """
    Product catalog management service.

    Attributes:
        _db: Database session owning the transaction
        _store: ProductStore used for every read and write

    Example:
        >>> catalog = CatalogService(db_session)
        >>> laptop = catalog.create_product(ProductCreate(
        ...     product_name="Laptop",
        ...     category="Electronics",
        ...     price=Decimal("999.99"),
        ...     quantity=10
        ... ))
        >>> catalog.merge_update(laptop.id, ProductPatch(price=Decimal("899.99")))
        >>> catalog.get_by_product_name("LAPTOP").price
        Decimal('899.99')
    """

    def __init__(
        self,
        db: Session,
        store: Optional[ProductStore] = None
    ) -> None:
        """
        Initialize the catalog service.

        Args:
            db: SQLAlchemy database session
            store: Optional ProductStore (defaults to one bound to `db`)
        """
        self._db = db
        self._store = store or SQLAlchemyProductStore(db)

    # =========================================================================
    # TRANSACTIONS
    # =========================================================================

    @contextmanager
    def _unit_of_work(self, product_name: Optional[str] = None) -> Generator[None, None, None]:
        """
        Run a write as one transaction.

        A unique-index violation on the name key is reported as
        ResourceAlreadyExistsException for `product_name`.
        """
        try:
            yield
            self._db.commit()
        except IntegrityError as e:
            self._db.rollback()
            if product_name is not None and "product_name_key" in str(e.orig):
                logger.warning(f"Duplicate product name rejected by database: {product_name}")
                raise exceptions.product_already_exists(product_name) from e
            raise
        except Exception:
            self._db.rollback()
            raise

    # =========================================================================
    # CREATE OPERATIONS
    # =========================================================================

    def create_product(self, data: ProductCreate) -> Product:
        """
        Create a new product.

        Args:
            data: ProductCreate schema

        Returns:
            Persisted Product with id and timestamps assigned

        Raises:
            ResourceAlreadyExistsException: name already used (ignoring case)
        """
        with self._unit_of_work(data.product_name):
            if self._store.exists_by_name_case_insensitive(data.product_name):
                logger.warning(f"Product creation failed: name exists - {data.product_name}")
                raise exceptions.product_already_exists(data.product_name)

            product = self._store.insert(Product(
                product_name=data.product_name,
                category=data.category,
                price=data.price,
                quantity=data.quantity,
                description=data.description,
            ))

        logger.info(f"✅ Product created: {product.product_name} (id: {product.id})")
        return product

    # =========================================================================
    # READ OPERATIONS
    # =========================================================================

    def get_by_id(self, product_id: int) -> Product:
        """
        Get product by ID.

        Raises:
            ResourceNotFoundException: no product with this id
        """
        product = self._store.find_by_id(product_id)

        if product is None:
            logger.warning(f"Product not found: id={product_id}")
            raise exceptions.product_not_found("id", product_id)

        return product

    def get_by_product_name(self, product_name: str) -> Product:
        """
        Get product by name, ignoring case.

        Raises:
            ResourceNotFoundException: no product with this name
        """
        product = self._store.find_by_name_case_insensitive(product_name)

        if product is None:
            logger.warning(f"Product not found: productName={product_name}")
            raise exceptions.product_not_found("productName", product_name)

        return product

    def list_products(self) -> List[Product]:
        """List every product in insertion order."""
        return self._store.find_all()

    def list_by_category(self, category: str) -> List[Product]:
        """List products in a category (ignoring case). Empty if none match."""
        return self._store.find_by_category_case_insensitive(category)

    def list_in_stock_by_category(self, category: str, min_quantity: int = 0) -> List[Product]:
        """List products in a category whose quantity exceeds `min_quantity`."""
        return self._store.find_by_category_and_quantity_greater_than(category, min_quantity)

    def exists_by_id(self, product_id: int) -> bool:
        """Check whether a product exists."""
        return self._store.exists_by_id(product_id)

    # =========================================================================
    # UPDATE OPERATIONS
    # =========================================================================

    def replace_product(self, product_id: int, data: ProductReplace) -> Product:
        """
        Overwrite every mutable field of a product.

        Raises:
            ResourceNotFoundException: no product with this id
            ResourceAlreadyExistsException: new name used by another product
        """
        values = {field: getattr(data, field) for field in MUTABLE_FIELDS}
        return self._update(product_id, values)

    def merge_update(self, product_id: int, data: ProductPatch) -> Product:
        """
        Overwrite only the fields supplied in `data`.

        Supplied values are merged over the stored record and the result
        goes through the same uniqueness check and save as a full replace.

        Raises:
            ResourceNotFoundException: no product with this id
            ResourceAlreadyExistsException: new name used by another product
        """
        existing = self.get_by_id(product_id)

        merged = {field: getattr(existing, field) for field in MUTABLE_FIELDS}
        merged.update(data.supplied_fields())

        return self._update(product_id, merged)

    def _update(self, product_id: int, values: Dict[str, Any]) -> Product:
        new_name = values.get("product_name")

        with self._unit_of_work(new_name):
            product = self.get_by_id(product_id)

            # No name means no rename
            if new_name is None:
                new_name = product.product_name

            renamed = normalize_name(new_name) != normalize_name(product.product_name)
            if renamed and self._store.exists_by_name_case_insensitive(new_name, exclude_id=product.id):
                logger.warning(f"Product rename failed: name exists - {new_name}")
                raise exceptions.product_already_exists(new_name)

            old_name = product.product_name
            product.product_name = new_name
            product.category = values["category"]
            product.price = values["price"]
            product.quantity = values["quantity"]
            product.description = values["description"]

            product = self._store.save(product)

        if renamed:
            logger.info(f"Product renamed: {old_name} → {product.product_name} (id: {product.id})")
        logger.info(f"✅ Product updated: {product.product_name} (id: {product.id})")
        return product

    # =========================================================================
    # DELETE OPERATIONS
    # =========================================================================

    def delete_product(self, product_id: int) -> None:
        """
        Delete a product.

        Raises:
            ResourceNotFoundException: no product with this id
        """
        with self._unit_of_work():
            product = self.get_by_id(product_id)
            product_name = product.product_name
            self._store.delete(product)

        logger.info(f"🗑️ Product deleted: {product_name} (id: {product_id})")

    def delete_all(self) -> int:
        """
        Delete every product.

        Returns:
            Number of products removed
        """
        with self._unit_of_work():
            removed = self._store.delete_all()

        logger.warning(f"⚠️ Catalog cleared: {removed} products deleted")
        return removed
