"""
==============================================================================
Schemas Package - Pydantic Models
==============================================================================

Request and response schemas using Pydantic for validation.

==============================================================================
"""

from .product import ProductCreate, ProductReplace, ProductPatch, ProductDetail

__all__ = [
    "ProductCreate",
    "ProductReplace",
    "ProductPatch",
    "ProductDetail",
]
