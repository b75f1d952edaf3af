"""
==============================================================================
Services Package - Business Logic Layer
==============================================================================

Service classes implementing catalog business logic.

Architecture Pattern: Service Layer
----------------------------------
    ┌─────────────────┐
    │   API Router    │
    └────────┬────────┘
             │
    ┌────────▼────────┐
    │ CatalogService  │  ← Business Logic
    └────────┬────────┘
             │
    ┌────────▼────────┐
    │  ProductStore   │  ← Data Access
    └─────────────────┘

Usage:
------
    from retail_catalog.services import CatalogService

    catalog = CatalogService(db_session)
    product = catalog.get_by_product_name("laptop")

==============================================================================
"""

from .catalog_service import CatalogService

__all__ = [
    "CatalogService",
]
