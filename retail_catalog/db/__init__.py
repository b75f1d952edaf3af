"""
==============================================================================
Database Package
==============================================================================

SQLAlchemy database infrastructure and ORM models.

Architecture:
------------
├── database.py   - DatabaseManager class, session factory
├── models.py     - Product ORM model
└── init_db.py    - DatabaseInitializer for setup and seeding

==============================================================================
"""

from .database import Base, DatabaseManager, get_database_manager
from .models import Product

__all__ = [
    "Base",
    "DatabaseManager",
    "get_database_manager",
    "Product",
]
