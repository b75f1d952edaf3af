"""
==============================================================================
Product Schemas Module
==============================================================================

Request and response schemas for the product catalog.

Field names are camelCase on the wire (productName, createdAt, ...);
snake_case names are accepted on input as well.

==============================================================================
"""

from datetime import datetime
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_serializer, field_validator
from pydantic.alias_generators import to_camel


def _clean_text(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    value = value.strip()
    if not value:
        raise ValueError("must not be blank")
    return value


class _CamelModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
    )


class ProductCreate(_CamelModel):
    """Product creation request."""
    product_name: str = Field(..., min_length=1, max_length=255)
    category: str = Field(..., min_length=1, max_length=100)
    price: Decimal = Field(..., ge=0)
    quantity: int = Field(..., ge=0)
    description: Optional[str] = Field(default=None)

    @field_validator("product_name", "category")
    @classmethod
    def validate_text(cls, v: str) -> str:
        return _clean_text(v)


class ProductReplace(ProductCreate):
    """Full update request. Every mutable field is overwritten."""


class ProductPatch(_CamelModel):
    """
    Partial update request.

    Omitted fields and fields sent as null are both left untouched.
    """
    product_name: Optional[str] = Field(default=None, min_length=1, max_length=255)
    category: Optional[str] = Field(default=None, min_length=1, max_length=100)
    price: Optional[Decimal] = Field(default=None, ge=0)
    quantity: Optional[int] = Field(default=None, ge=0)
    description: Optional[str] = Field(default=None)

    @field_validator("product_name", "category")
    @classmethod
    def validate_text(cls, v: Optional[str]) -> Optional[str]:
        return _clean_text(v)

    def supplied_fields(self) -> dict:
        """Fields the caller actually provided with a non-null value."""
        return {
            name: value
            for name, value in self.model_dump(exclude_unset=True).items()
            if value is not None
        }


class ProductDetail(_CamelModel):
    """Product as returned by the API."""
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )

    id: int
    product_name: str
    category: str
    price: Decimal
    quantity: int
    description: Optional[str] = None
    created_at: datetime
    updated_at: datetime

    @field_serializer("price")
    def serialize_price(self, price: Decimal) -> float:
        """Emit price as a JSON number rather than a string."""
        return float(price)
