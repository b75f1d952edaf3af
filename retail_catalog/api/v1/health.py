"""
==============================================================================
Health Check Endpoints
==============================================================================

System health status endpoints for monitoring and orchestration.

==============================================================================
"""

from fastapi import APIRouter, Depends
from sqlalchemy import func, text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from retail_catalog.core.dependencies import get_db
from retail_catalog.db.models import Product


router = APIRouter(prefix="/health", tags=["Health"])


class HealthController:
    """Controller for health check operations."""

    def __init__(self, db: Session):
        self._db = db

    def check_database(self) -> str:
        """Check database connectivity."""
        try:
            self._db.execute(text("SELECT 1"))
            return "healthy"
        except SQLAlchemyError:
            return "unhealthy"

    def count_products(self) -> int:
        """Number of products in the catalog, 0 if the database is unreachable."""
        try:
            return self._db.query(func.count(Product.id)).scalar() or 0
        except SQLAlchemyError:
            return 0

    def get_health(self) -> dict:
        """Get full health status."""
        db_status = self.check_database()
        overall = "healthy" if db_status == "healthy" else "degraded"

        return {
            "status": overall,
            "components": {
                "api": "healthy",
                "database": db_status,
            },
            "details": {
                "products": self.count_products() if db_status == "healthy" else 0
            }
        }


@router.get("")
def health_check(db: Session = Depends(get_db)):
    """
    Health check endpoint.

    Returns API and database status plus the catalog size.
    """
    return HealthController(db).get_health()


@router.get("/ready")
async def readiness_check():
    """Readiness probe for container orchestration."""
    return {"ready": True}


@router.get("/live")
async def liveness_check():
    """Liveness probe for container orchestration."""
    return {"alive": True}
