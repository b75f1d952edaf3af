"""
==============================================================================
SQLAlchemy ORM Models Module
==============================================================================

ORM model for the retail product catalog.

Database Schema:
---------------

    ┌─────────────────────────────────────────────────────────────────┐
    │                          products                               │
    ├─────────────────────────────────────────────────────────────────┤
    │ id (INTEGER, PK, AUTOINCREMENT, never reused)                   │
    │ product_name (VARCHAR, NOT NULL)                                │
    │ product_name_key (VARCHAR, UNIQUE, NOT NULL) lowercased name    │
    │ category (VARCHAR, NOT NULL)                                    │
    │ category_key (VARCHAR, NOT NULL, INDEX) lowercased category     │
    │ price (NUMERIC(10,2), NOT NULL, CHECK >= 0)                     │
    │ quantity (INTEGER, NOT NULL, CHECK >= 0)                        │
    │ description (TEXT, NULLABLE)                                    │
    │ created_at (DATETIME, NOT NULL) UTC                             │
    │ updated_at (DATETIME, NOT NULL) UTC                             │
    └─────────────────────────────────────────────────────────────────┘

The unique index on product_name_key is what keeps product names unique
regardless of case. Both keys are lowercased in Python rather than with
SQL LOWER(), which only folds ASCII on SQLite. The keys, id and
timestamps are written by the product store, never by callers.

=============================================================================
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Optional

from sqlalchemy import (
    CheckConstraint,
    Column,
    DateTime,
    Integer,
    Numeric,
    String,
    Text,
)
from sqlalchemy.types import TypeDecorator

from retail_catalog.db.database import Base


# Fields a caller may change on an existing product
MUTABLE_FIELDS = ("product_name", "category", "price", "quantity", "description")


def normalize_name(value: str) -> str:
    """
    Key used for case-insensitive comparison of names and categories.

    Only case is folded. Surrounding whitespace is significant here; the
    request schemas trim it before a value is ever stored.
    """
    return value.lower()


class UTCDateTime(TypeDecorator):
    """
    Timezone-aware UTC datetime stored as naive UTC.

    SQLite keeps no zone information, so values are written without
    tzinfo and come back with UTC re-attached.
    """

    impl = DateTime
    cache_ok = True

    def process_bind_param(self, value: Optional[datetime], dialect) -> Optional[datetime]:
        if value is None:
            return None
        if value.tzinfo is None:
            raise ValueError("UTCDateTime requires a timezone-aware datetime")
        return value.astimezone(timezone.utc).replace(tzinfo=None)

    def process_result_value(self, value: Optional[datetime], dialect) -> Optional[datetime]:
        if value is None:
            return None
        return value.replace(tzinfo=timezone.utc)


class Product(Base):
    """
    Retail product record.

    Attributes:
        id: Store-assigned identifier
        product_name: Display name, unique ignoring case
        product_name_key: Lowercased product_name (unique index)
        category: Free-form classification
        category_key: Lowercased category used by category lookups
        price: Unit price, non-negative
        quantity: Units on hand, non-negative
        description: Optional free text
        created_at: Insert timestamp
        updated_at: Last save timestamp
    """

    __tablename__ = "products"
    __table_args__ = (
        CheckConstraint("price >= 0", name="ck_products_price_non_negative"),
        CheckConstraint("quantity >= 0", name="ck_products_quantity_non_negative"),
        {"sqlite_autoincrement": True},
    )

    id = Column(
        Integer,
        primary_key=True,
        autoincrement=True,
        doc="Store-assigned product identifier"
    )

    product_name = Column(
        String(255),
        nullable=False,
        doc="Product display name"
    )

    product_name_key = Column(
        String(255),
        unique=True,
        nullable=False,
        index=True,
        doc="Lowercased product name backing the uniqueness rule"
    )

    category = Column(
        String(100),
        nullable=False,
        doc="Product category"
    )

    category_key = Column(
        String(100),
        nullable=False,
        index=True,
        doc="Lowercased category used for case-insensitive lookups"
    )

    price = Column(
        Numeric(10, 2),
        nullable=False,
        doc="Unit price"
    )

    quantity = Column(
        Integer,
        nullable=False,
        default=0,
        doc="Units on hand"
    )

    description = Column(
        Text,
        nullable=True,
        doc="Optional product description"
    )

    created_at = Column(
        UTCDateTime(),
        nullable=False,
        doc="Insert timestamp"
    )

    updated_at = Column(
        UTCDateTime(),
        nullable=False,
        doc="Last modification timestamp"
    )

    def __repr__(self) -> str:
        """Detailed string representation for debugging."""
        return (
            f"Product(id={self.id!r}, "
            f"product_name={self.product_name!r}, "
            f"category={self.category!r}, "
            f"quantity={self.quantity!r})"
        )

    def __str__(self) -> str:
        return f"{self.product_name} ({self.category})"
