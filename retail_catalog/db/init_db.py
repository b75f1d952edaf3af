"""
==============================================================================
Database Initialization Module
==============================================================================

Database setup and catalog seeding utilities.

Initialization Flow:
-------------------
1. Create all tables from ORM models
2. If a seed file is configured and the catalog is empty, load it
3. Log initialization status

Seed File Format:
----------------
A JSON array of products using the API field names:

    [
      {"productName": "Laptop", "category": "Electronics",
       "price": 999.99, "quantity": 10, "description": "..."}
    ]

Seed entries go through CatalogService, so duplicate names (ignoring
case) are skipped rather than inserted twice.

==============================================================================
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Optional

from pydantic import ValidationError
from sqlalchemy.orm import Session

from retail_catalog.config import get_settings
from retail_catalog.core.exceptions import ResourceAlreadyExistsException
from retail_catalog.db.database import DatabaseManager, get_database_manager
from retail_catalog.schemas.product import ProductCreate
from retail_catalog.services.catalog_service import CatalogService


# Module logger
logger = logging.getLogger(__name__)


class DatabaseInitializer:
    """
    Database initialization manager.

    Example:
        >>> initializer = DatabaseInitializer()
        >>> initializer.initialize()
    """

    def __init__(
        self,
        db_manager: Optional[DatabaseManager] = None,
        session: Optional[Session] = None
    ) -> None:
        """
        Args:
            db_manager: Optional DatabaseManager (uses the global one if None)
            session: Optional existing session (creates new if None)
        """
        self._db_manager = db_manager or get_database_manager()
        self._settings = get_settings()
        self._session = session

    def _get_session(self) -> Session:
        if self._session is not None:
            return self._session
        return self._db_manager.get_session()

    # =========================================================================
    # TABLE OPERATIONS
    # =========================================================================

    def create_tables(self) -> None:
        """Create all database tables (idempotent)."""
        logger.info("Creating database tables...")
        self._db_manager.create_tables()
        logger.info("✅ Database tables created successfully")

    # =========================================================================
    # SEEDING
    # =========================================================================

    def seed_catalog(self, seed_path: Path) -> int:
        """
        Load products from a JSON file into an empty catalog.

        Args:
            seed_path: Path to the seed JSON array

        Returns:
            Number of products created (0 when the catalog already has data)

        Raises:
            ValueError: if the file is not a JSON array of products
        """
        with seed_path.open(encoding="utf-8") as handle:
            entries = json.load(handle)

        if not isinstance(entries, list):
            raise ValueError(f"Seed file must contain a JSON array: {seed_path}")

        session = self._get_session()
        try:
            catalog = CatalogService(session)

            if catalog.list_products():
                logger.info("Catalog already populated, skipping seed")
                return 0

            created = 0
            for index, entry in enumerate(entries):
                try:
                    catalog.create_product(ProductCreate.model_validate(entry))
                    created += 1
                except ValidationError as e:
                    raise ValueError(f"Invalid seed entry #{index} in {seed_path}: {e}") from e
                except ResourceAlreadyExistsException as e:
                    logger.warning(f"Skipping seed entry #{index}: {e.message}")

            logger.info(f"✅ Seeded {created} products from {seed_path}")
            return created
        finally:
            if self._session is None:
                session.close()

    # =========================================================================
    # FULL INITIALIZATION
    # =========================================================================

    def initialize(self) -> None:
        """
        Verify the connection, create tables and seed the catalog if configured.

        Raises:
            RuntimeError: if the database cannot be reached
        """
        if not self._db_manager.verify_connection():
            raise RuntimeError(f"Database unavailable: {self._settings.database_url}")

        self.create_tables()

        seed_path = self._settings.seed_path
        if seed_path is None:
            return

        if seed_path.exists():
            self.seed_catalog(seed_path)
        else:
            logger.warning(f"⚠️ Seed file not found: {seed_path}")


def init_db() -> None:
    """Initialize the database using the global DatabaseManager."""
    DatabaseInitializer().initialize()
