"""
==============================================================================
Core Package
==============================================================================

Core utilities and infrastructure for the application.

Modules:
--------
- exceptions: AppException, catalog domain errors, handler registration
- dependencies: FastAPI dependency injection functions

Usage:
------
    from retail_catalog.core import ResourceNotFoundException

    # Or use exception factory functions via module
    from retail_catalog.core import exceptions
    raise exceptions.product_not_found("id", 42)

==============================================================================
"""

from .exceptions import (
    AppException,
    ResourceAlreadyExistsException,
    ResourceNotFoundException,
    register_exception_handlers,
)

__all__ = [
    "AppException",
    "ResourceAlreadyExistsException",
    "ResourceNotFoundException",
    "register_exception_handlers",
]
