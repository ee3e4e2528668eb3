"""
Inkwell Backend — Category Request/Response Schemas
=====================================================

What:  Pydantic models for the /categories API contract.
How:   Request models validate bodies before the service is called; the
       response model has every field optional so projected rows serialize
       with only the fields that were selected (routes use
       response_model_exclude_unset).
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field


class CategoryCreate(BaseModel):
    """Body of POST /categories."""
    category_name: str = Field(min_length=1, max_length=255, description="Category name")


class CategoryUpdate(BaseModel):
    """Body of PATCH /categories/{category_id}."""
    category_name: str = Field(min_length=1, max_length=255, description="New category name")


class CategoryResponse(BaseModel):
    """A category, or the projected subset of one."""
    id: Optional[int] = None
    category_name: Optional[str] = None
    created_at: Optional[datetime] = Field(default=None, alias="createdAt")
    updated_at: Optional[datetime] = Field(default=None, alias="updatedAt")

    model_config = {"from_attributes": True, "populate_by_name": True}
