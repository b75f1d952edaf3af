"""
==============================================================================
FastAPI Dependencies Module
==============================================================================

Dependency injection for request-scoped database sessions and the
catalog service.

Dependency Hierarchy:
--------------------
    ┌─────────────────────┐
    │      get_db()       │
    └──────────┬──────────┘
               │
    ┌──────────▼──────────┐
    │ get_catalog_service │
    └─────────────────────┘

==============================================================================
"""

from __future__ import annotations

from typing import Generator

from fastapi import Depends
from sqlalchemy.orm import Session

from retail_catalog.db.database import get_database_manager
from retail_catalog.services.catalog_service import CatalogService


def get_db() -> Generator[Session, None, None]:
    """
    FastAPI dependency that provides a database session.

    Yields a SQLAlchemy session and ensures it's closed after the request.
    """
    db = get_database_manager().get_session()
    try:
        yield db
    finally:
        db.close()


def get_catalog_service(db: Session = Depends(get_db)) -> CatalogService:
    """Build a CatalogService bound to the request's session."""
    return CatalogService(db)
