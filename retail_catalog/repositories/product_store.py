"""
==============================================================================
Product Store Module
==============================================================================

Keyed storage for product records.

This module implements:
- ProductStore: Abstract store contract used by the catalog service
- SQLAlchemyProductStore: Store backed by a SQLAlchemy session

Responsibilities owned by the store:
-----------------------------------
- Assigning id, created_at and updated_at
- Maintaining product_name_key and category_key (lowercased name and
  category) on every write
- Case-insensitive lookups by name and category

The store flushes but never commits. Transaction boundaries belong to
the caller.

==============================================================================
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from datetime import datetime, timezone
from typing import List, Optional

from sqlalchemy.orm import Session

from retail_catalog.db.models import Product, normalize_name


# Module logger
logger = logging.getLogger(__name__)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class ProductStore(ABC):
    """Storage contract for product records."""

    @abstractmethod
    def insert(self, product: Product) -> Product:
        """Persist a new product, assigning id and timestamps."""

    @abstractmethod
    def save(self, product: Product) -> Product:
        """Persist changes to a product (upsert by id), refreshing updated_at."""

    @abstractmethod
    def find_by_id(self, product_id: int) -> Optional[Product]:
        """Return the product with this id, or None."""

    @abstractmethod
    def find_by_name_case_insensitive(self, name: str) -> Optional[Product]:
        """Return the product whose name matches ignoring case, or None."""

    @abstractmethod
    def find_by_category_case_insensitive(self, category: str) -> List[Product]:
        """Return products whose category matches ignoring case."""

    @abstractmethod
    def find_by_category_and_quantity_greater_than(
        self,
        category: str,
        quantity: int
    ) -> List[Product]:
        """Return products in a category holding more than `quantity` units."""

    @abstractmethod
    def exists_by_name_case_insensitive(
        self,
        name: str,
        exclude_id: Optional[int] = None
    ) -> bool:
        """Check whether another product already uses this name."""

    @abstractmethod
    def exists_by_id(self, product_id: int) -> bool:
        """Check whether a product with this id exists."""

    @abstractmethod
    def find_all(self) -> List[Product]:
        """Return every product in insertion order."""

    @abstractmethod
    def delete(self, product: Product) -> None:
        """Remove a single product."""

    @abstractmethod
    def delete_all(self) -> int:
        """Remove every product, returning how many were removed."""


class SQLAlchemyProductStore(ProductStore):
    """
    Product store backed by a SQLAlchemy session.

    Attributes:
        _db: Database session shared with the caller's unit of work

    Example:
        >>> store = SQLAlchemyProductStore(session)
        >>> product = store.insert(Product(product_name="Laptop", ...))
        >>> session.commit()
        >>> store.find_by_name_case_insensitive("LAPTOP").id == product.id
        True
    """

    def __init__(self, db: Session) -> None:
        self._db = db

    # =========================================================================
    # WRITE OPERATIONS
    # =========================================================================

    def insert(self, product: Product) -> Product:
        now = _utcnow()
        product.id = None
        product.product_name_key = normalize_name(product.product_name)
        product.category_key = normalize_name(product.category)
        product.created_at = now
        product.updated_at = now

        self._db.add(product)
        self._db.flush()

        logger.debug(f"Inserted product id={product.id}")
        return product

    def save(self, product: Product) -> Product:
        product.product_name_key = normalize_name(product.product_name)
        product.category_key = normalize_name(product.category)
        product.updated_at = _utcnow()
        if product.created_at is None:
            product.created_at = product.updated_at

        product = self._db.merge(product)
        self._db.flush()

        logger.debug(f"Saved product id={product.id}")
        return product

    def delete(self, product: Product) -> None:
        self._db.delete(product)
        self._db.flush()

    def delete_all(self) -> int:
        removed = self._db.query(Product).delete(synchronize_session=False)
        self._db.expunge_all()
        return removed

    # =========================================================================
    # READ OPERATIONS
    # =========================================================================

    def find_by_id(self, product_id: int) -> Optional[Product]:
        return self._db.get(Product, product_id)

    def find_by_name_case_insensitive(self, name: str) -> Optional[Product]:
        return self._db.query(Product).filter(
            Product.product_name_key == normalize_name(name)
        ).first()

    def find_by_category_case_insensitive(self, category: str) -> List[Product]:
        return self._db.query(Product).filter(
            Product.category_key == normalize_name(category)
        ).order_by(Product.id).all()

    def find_by_category_and_quantity_greater_than(
        self,
        category: str,
        quantity: int
    ) -> List[Product]:
        return self._db.query(Product).filter(
            Product.category_key == normalize_name(category),
            Product.quantity > quantity
        ).order_by(Product.id).all()

    def exists_by_name_case_insensitive(
        self,
        name: str,
        exclude_id: Optional[int] = None
    ) -> bool:
        query = self._db.query(Product.id).filter(
            Product.product_name_key == normalize_name(name)
        )
        if exclude_id is not None:
            query = query.filter(Product.id != exclude_id)
        return bool(self._db.query(query.exists()).scalar())

    def exists_by_id(self, product_id: int) -> bool:
        query = self._db.query(Product.id).filter(Product.id == product_id)
        return bool(self._db.query(query.exists()).scalar())

    def find_all(self) -> List[Product]:
        return self._db.query(Product).order_by(Product.id).all()
