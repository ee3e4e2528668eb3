"""
Inkwell Backend — Post Request/Response Schemas
=================================================

What:  Pydantic models for the /posts API contract.

Wire names:
    The JSON API uses categoryId, userId, createdAt and updatedAt next to
    featured_image. Aliases map them onto the snake_case attributes; both
    spellings are accepted on input.

Ownership:
    PostCreate has no user field. A userId sent by the client is ignored;
    the owner is always the authenticated requester.
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field

from app.database import MAX_ID


class PostCreate(BaseModel):
    """Body of POST /posts."""
    title: str = Field(min_length=1, max_length=255)
    content: str = Field(min_length=1)
    featured_image: Optional[str] = Field(default=None, max_length=1024)
    category_id: Optional[int] = Field(default=None, ge=1, le=MAX_ID, alias="categoryId")

    model_config = {"populate_by_name": True}


class PostUpdate(BaseModel):
    """
    Body of PATCH /posts/{post_id}.

    title, content and categoryId are required; featured_image may be omitted,
    in which case it is left untouched.
    """
    title: str = Field(min_length=1, max_length=255)
    content: str = Field(min_length=1)
    featured_image: Optional[str] = Field(default=None, max_length=1024)
    category_id: int = Field(ge=1, le=MAX_ID, alias="categoryId")

    model_config = {"populate_by_name": True}


class PostResponse(BaseModel):
    """A post, or the projected subset of one."""
    id: Optional[int] = None
    title: Optional[str] = None
    content: Optional[str] = None
    featured_image: Optional[str] = None
    category_id: Optional[int] = Field(default=None, alias="categoryId")
    user_id: Optional[int] = Field(default=None, alias="userId")
    created_at: Optional[datetime] = Field(default=None, alias="createdAt")
    updated_at: Optional[datetime] = Field(default=None, alias="updatedAt")

    model_config = {"from_attributes": True, "populate_by_name": True}
