"""
==============================================================================
Repositories Package - Data Access Layer
==============================================================================

Storage contracts and their SQLAlchemy implementations.

==============================================================================
"""

from .product_store import ProductStore, SQLAlchemyProductStore

__all__ = [
    "ProductStore",
    "SQLAlchemyProductStore",
]
