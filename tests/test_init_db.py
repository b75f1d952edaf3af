"""
==============================================================================
Database Initialization Tests
==============================================================================

Tests for catalog seeding from a JSON file.

==============================================================================
"""

import json
from pathlib import Path

import pytest
from sqlalchemy import create_engine, inspect
from sqlalchemy.orm import Session

from retail_catalog.db.database import get_database_manager
from retail_catalog.db.init_db import DatabaseInitializer
from retail_catalog.services.catalog_service import CatalogService


SEED_PRODUCTS = [
    {"productName": "Laptop", "category": "Electronics", "price": 999.99, "quantity": 10},
    {"productName": "Desk", "category": "Furniture", "price": 150, "quantity": 2,
     "description": "Oak desk"},
    {"productName": "LAPTOP", "category": "Electronics", "price": 1, "quantity": 1},
]


@pytest.fixture
def seed_file(tmp_path: Path) -> Path:
    path = tmp_path / "products.json"
    path.write_text(json.dumps(SEED_PRODUCTS), encoding="utf-8")
    return path


class TestSeedCatalog:
    """Tests for DatabaseInitializer.seed_catalog."""

    def test_seed_skips_duplicate_names(self, db: Session, seed_file: Path):
        initializer = DatabaseInitializer(session=db)

        created = initializer.seed_catalog(seed_file)

        assert created == 2
        names = [p.product_name for p in CatalogService(db).list_products()]
        assert names == ["Laptop", "Desk"]

    def test_seed_only_into_empty_catalog(self, db: Session, seed_file: Path):
        initializer = DatabaseInitializer(session=db)
        initializer.seed_catalog(seed_file)

        assert initializer.seed_catalog(seed_file) == 0
        assert len(CatalogService(db).list_products()) == 2

    def test_seed_rejects_non_array(self, db: Session, tmp_path: Path):
        path = tmp_path / "bad.json"
        path.write_text(json.dumps({"productName": "Laptop"}), encoding="utf-8")

        with pytest.raises(ValueError):
            DatabaseInitializer(session=db).seed_catalog(path)

    def test_seed_rejects_invalid_entry(self, db: Session, tmp_path: Path):
        path = tmp_path / "invalid.json"
        path.write_text(json.dumps([{"category": "Electronics", "price": 1, "quantity": 1}]), encoding="utf-8")

        with pytest.raises(ValueError, match="Invalid seed entry #0"):
            DatabaseInitializer(session=db).seed_catalog(path)


class TestInitialize:
    """Tests for DatabaseInitializer.initialize."""

    def test_initialize_creates_tables(self):
        manager = get_database_manager()

        assert manager.verify_connection() is True
        DatabaseInitializer(db_manager=manager).initialize()

        assert "products" in inspect(manager.engine).get_table_names()

    def test_initialize_fails_when_database_unreachable(self, monkeypatch, tmp_path: Path):
        manager = get_database_manager()
        unreachable = create_engine(f"sqlite:///{tmp_path / 'missing' / 'retail.db'}")
        monkeypatch.setattr(manager, "_engine", unreachable)

        assert manager.verify_connection() is False
        with pytest.raises(RuntimeError, match="Database unavailable"):
            DatabaseInitializer(db_manager=manager).initialize()
