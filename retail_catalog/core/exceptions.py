"""
Application Exception Handling

AppException base class for all application errors, the two catalog
domain errors built on it, and FastAPI integration.
"""

from datetime import datetime, timezone
from typing import Any, Dict, Optional

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse


class AppException(Exception):
    """
    Unified application exception for all error scenarios.

    Provides consistent error response format across the entire API.

    Usage:
        raise ResourceNotFoundException("Product", "id", 42)

    Error Codes:
        Catalog:
            - RESOURCE_NOT_FOUND (404)
            - RESOURCE_ALREADY_EXISTS (409)
    """

    def __init__(
        self,
        message: str,
        code: str,
        status_code: int = 400,
        details: Optional[Dict[str, Any]] = None
    ):
        """
        Initialize application exception.

        Args:
            message: Human-readable error message
            code: Machine-readable error code (e.g., "RESOURCE_NOT_FOUND")
            status_code: HTTP status code (default: 400)
            details: Additional error context (optional)
        """
        self.message = message
        self.code = code
        self.status_code = status_code
        self.details = details or {}
        self.timestamp = datetime.now(timezone.utc).isoformat()
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary for JSON response."""
        error_dict = {
            "success": False,
            "error": {
                "code": self.code,
                "message": self.message,
                "timestamp": self.timestamp
            }
        }

        if self.details:
            error_dict["error"]["details"] = self.details

        return error_dict


class ResourceNotFoundException(AppException):
    """
    Raised when a lookup by a given field finds no record.

    Attributes:
        entity: Entity kind (e.g. "Product")
        field: Field used for the lookup
        value: Value that was looked up
    """

    def __init__(self, entity: str, field: str, value: Any):
        self.entity = entity
        self.field = field
        self.value = value
        super().__init__(
            f"{entity} not found with {field}: '{value}'",
            "RESOURCE_NOT_FOUND",
            404,
            {"entity": entity, "field": field, "value": value}
        )


class ResourceAlreadyExistsException(AppException):
    """
    Raised when a write would violate a uniqueness rule.

    Attributes:
        entity: Entity kind (e.g. "Product")
        field: Field carrying the uniqueness rule
        value: Conflicting value
    """

    def __init__(self, entity: str, field: str, value: Any):
        self.entity = entity
        self.field = field
        self.value = value
        super().__init__(
            f"{entity} already exists with {field}: '{value}'",
            "RESOURCE_ALREADY_EXISTS",
            409,
            {"entity": entity, "field": field, "value": value}
        )


async def app_exception_handler(request: Request, exc: AppException) -> JSONResponse:
    """
    FastAPI exception handler for AppException.

    Converts AppException to consistent JSON error response.
    """
    return JSONResponse(
        status_code=exc.status_code,
        content=exc.to_dict()
    )


def register_exception_handlers(app: FastAPI) -> None:
    """
    Register all exception handlers with FastAPI app.

    Args:
        app: FastAPI application instance
    """
    app.add_exception_handler(AppException, app_exception_handler)


# ============================================
# CONVENIENCE FACTORY FUNCTIONS
# ============================================

def product_not_found(field: str, value: Any) -> ResourceNotFoundException:
    """Create product not found exception."""
    return ResourceNotFoundException("Product", field, value)


def product_already_exists(product_name: str) -> ResourceAlreadyExistsException:
    """Create duplicate product name exception."""
    return ResourceAlreadyExistsException("Product", "productName", product_name)
