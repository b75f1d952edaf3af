"""
==============================================================================
Product Catalog Endpoints
==============================================================================

CRUD endpoints for retail product records.

Status Codes:
------------
- 201 on create, 204 on delete, 200 otherwise
- 404 when an id or product name does not exist
- 409 when a product name is already taken (ignoring case)
- HEAD /{id} answers 200 or 404 with an empty body

==============================================================================
"""

from typing import List

from fastapi import APIRouter, Depends, Query, Response, status

from retail_catalog.core.dependencies import get_catalog_service
from retail_catalog.services.catalog_service import CatalogService
from retail_catalog.schemas.product import (
    ProductCreate,
    ProductDetail,
    ProductPatch,
    ProductReplace,
)


router = APIRouter(prefix="/products", tags=["Products"])


class ProductController:
    """Controller for product catalog operations."""

    def __init__(self, service: CatalogService):
        self._service = service

    def create(self, data: ProductCreate) -> ProductDetail:
        """Create product."""
        return ProductDetail.model_validate(self._service.create_product(data))

    def list_all(self) -> List[ProductDetail]:
        """List every product."""
        return [ProductDetail.model_validate(p) for p in self._service.list_products()]

    def get(self, product_id: int) -> ProductDetail:
        """Get product by ID."""
        return ProductDetail.model_validate(self._service.get_by_id(product_id))

    def get_by_name(self, product_name: str) -> ProductDetail:
        """Get product by name."""
        return ProductDetail.model_validate(self._service.get_by_product_name(product_name))

    def list_by_category(self, category: str) -> List[ProductDetail]:
        """List products in a category."""
        return [ProductDetail.model_validate(p) for p in self._service.list_by_category(category)]

    def list_in_stock(self, category: str, min_quantity: int) -> List[ProductDetail]:
        """List products in a category with stock above a threshold."""
        products = self._service.list_in_stock_by_category(category, min_quantity)
        return [ProductDetail.model_validate(p) for p in products]

    def replace(self, product_id: int, data: ProductReplace) -> ProductDetail:
        """Full update."""
        return ProductDetail.model_validate(self._service.replace_product(product_id, data))

    def patch(self, product_id: int, data: ProductPatch) -> ProductDetail:
        """Partial update."""
        return ProductDetail.model_validate(self._service.merge_update(product_id, data))

    def delete(self, product_id: int) -> Response:
        """Delete product."""
        self._service.delete_product(product_id)
        return Response(status_code=status.HTTP_204_NO_CONTENT)

    def delete_all(self) -> Response:
        """Delete every product."""
        self._service.delete_all()
        return Response(status_code=status.HTTP_204_NO_CONTENT)

    def exists(self, product_id: int) -> Response:
        """Existence check with an empty body."""
        if self._service.exists_by_id(product_id):
            return Response(status_code=status.HTTP_200_OK)
        return Response(status_code=status.HTTP_404_NOT_FOUND)


@router.post("", response_model=ProductDetail, status_code=status.HTTP_201_CREATED)
def create_product(
    request: ProductCreate,
    service: CatalogService = Depends(get_catalog_service)
):
    """Create a new product."""
    return ProductController(service).create(request)


@router.get("", response_model=List[ProductDetail])
def list_products(service: CatalogService = Depends(get_catalog_service)):
    """List all products."""
    return ProductController(service).list_all()


@router.delete("", status_code=status.HTTP_204_NO_CONTENT, response_class=Response)
def delete_all_products(service: CatalogService = Depends(get_catalog_service)):
    """Delete all products."""
    return ProductController(service).delete_all()


@router.get("/product/{product_name}", response_model=ProductDetail)
def get_product_by_name(
    product_name: str,
    service: CatalogService = Depends(get_catalog_service)
):
    """Get product by name (case-insensitive)."""
    return ProductController(service).get_by_name(product_name)


@router.get("/category/{category}", response_model=List[ProductDetail])
def list_products_by_category(
    category: str,
    service: CatalogService = Depends(get_catalog_service)
):
    """List products in a category (case-insensitive)."""
    return ProductController(service).list_by_category(category)


@router.get("/category/{category}/in-stock", response_model=List[ProductDetail])
def list_in_stock_products(
    category: str,
    min_quantity: int = Query(0, ge=0, alias="minQuantity"),
    service: CatalogService = Depends(get_catalog_service)
):
    """List products in a category with quantity above minQuantity."""
    return ProductController(service).list_in_stock(category, min_quantity)


@router.get("/{product_id}", response_model=ProductDetail)
def get_product(
    product_id: int,
    service: CatalogService = Depends(get_catalog_service)
):
    """Get product by ID."""
    return ProductController(service).get(product_id)


@router.head("/{product_id}", response_class=Response)
def product_exists(
    product_id: int,
    service: CatalogService = Depends(get_catalog_service)
):
    """Check if a product exists."""
    return ProductController(service).exists(product_id)


@router.put("/{product_id}", response_model=ProductDetail)
def replace_product(
    product_id: int,
    request: ProductReplace,
    service: CatalogService = Depends(get_catalog_service)
):
    """Replace every mutable field of a product."""
    return ProductController(service).replace(product_id, request)


@router.patch("/{product_id}", response_model=ProductDetail)
def update_product(
    product_id: int,
    request: ProductPatch,
    service: CatalogService = Depends(get_catalog_service)
):
    """Update only the supplied fields of a product."""
    return ProductController(service).patch(product_id, request)


@router.delete("/{product_id}", status_code=status.HTTP_204_NO_CONTENT, response_class=Response)
def delete_product(
    product_id: int,
    service: CatalogService = Depends(get_catalog_service)
):
    """Delete a product."""
    return ProductController(service).delete(product_id)
