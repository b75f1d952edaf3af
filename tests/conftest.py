"""
==============================================================================
Pytest Configuration and Fixtures
==============================================================================

Provides test database, client, service and sample product fixtures.

==============================================================================
"""

import os

# Keep the application's own engine in memory during tests
os.environ.setdefault("DATABASE_URL", "sqlite://")

from decimal import Decimal
from typing import Generator

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from retail_catalog.main import app
from retail_catalog.db.database import Base
from retail_catalog.db.models import Product
from retail_catalog.core.dependencies import get_db
from retail_catalog.schemas.product import ProductCreate
from retail_catalog.services.catalog_service import CatalogService


# ============================================================================
# DATABASE FIXTURES
# ============================================================================

# In-memory SQLite for testing
SQLALCHEMY_TEST_DATABASE_URL = "sqlite://"

engine = create_engine(
    SQLALCHEMY_TEST_DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)

TestingSessionLocal = sessionmaker(
    autocommit=False,
    autoflush=False,
    expire_on_commit=False,
    bind=engine,
)


@pytest.fixture(scope="function")
def db() -> Generator[Session, None, None]:
    """Create a fresh database for each test."""
    Base.metadata.create_all(bind=engine)

    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture(scope="function")
def client(db: Session) -> Generator[TestClient, None, None]:
    """Create test client with database override."""
    def override_get_db():
        try:
            yield db
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()


# ============================================================================
# SERVICE FIXTURES
# ============================================================================

@pytest.fixture
def catalog(db: Session) -> CatalogService:
    """Catalog service bound to the test session."""
    return CatalogService(db)


@pytest.fixture
def laptop(catalog: CatalogService) -> Product:
    """A persisted laptop product."""
    return catalog.create_product(ProductCreate(
        product_name="Laptop",
        category="Electronics",
        price=Decimal("999.99"),
        quantity=10,
        description="High-performance laptop"
    ))


@pytest.fixture
def smartphone(catalog: CatalogService) -> Product:
    """A persisted smartphone product."""
    return catalog.create_product(ProductCreate(
        product_name="Smartphone",
        category="Electronics",
        price=Decimal("699.99"),
        quantity=20,
        description="Latest smartphone model"
    ))


@pytest.fixture
def laptop_payload() -> dict:
    """JSON body for creating the laptop through the API."""
    return {
        "productName": "Laptop",
        "category": "Electronics",
        "price": 999.99,
        "quantity": 10,
        "description": "High-performance laptop"
    }
