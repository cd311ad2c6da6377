"""
Catalog Schemas
Pydantic models for product categories and products.
"""

from datetime import datetime
from decimal import Decimal
from typing import Optional
from pydantic import BaseModel, ConfigDict, Field


class CategoryBase(BaseModel):
    name: str = Field(..., min_length=1, max_length=100)
    description: Optional[str] = None


class CategoryCreate(CategoryBase):
    # Accepted for compatibility, never trusted: the caller becomes the owner
    owner_id: Optional[str] = None


class CategoryUpdate(CategoryBase):
    id: int


class CategoryResponse(CategoryBase):
    id: int
    owner_id: str
    is_deleted: bool
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class ProductBase(BaseModel):
    name: str = Field(..., min_length=1, max_length=100)
    description: Optional[str] = None
    price: Decimal = Field(..., ge=0, max_digits=18, decimal_places=2)
    image_url: Optional[str] = Field(None, max_length=512)
    is_active: bool = True
    category_id: int


class ProductCreate(ProductBase):
    owner_id: Optional[str] = None


class ProductUpdate(ProductBase):
    id: int


class ProductResponse(ProductBase):
    id: int
    owner_id: str
    is_deleted: bool
    created_at: datetime
    category: Optional[CategoryResponse] = None

    model_config = ConfigDict(from_attributes=True)
