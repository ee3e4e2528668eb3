"""
Inkwell Backend — Category Route Handlers
===========================================

What:  CRUD endpoints under /categories.
How:   Each handler validates input through its schema, makes one
       CategoryService call, and maps the result to a status code.
Who:   Any authenticated user; categories have no ownership rules.
"""

import logging
from typing import List, Literal, Optional

from fastapi import APIRouter, Depends, Query, Response
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import get_db_session
from app.dependencies import auth
from app.exceptions import NotFoundError
from app.models.user import User
from app.schemas.category import CategoryCreate, CategoryResponse, CategoryUpdate
from app.schemas.common import ErrorResponse, attribute_name
from app.services.category_service import category_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/categories", tags=["Categories"])

COMMON_ERRORS = {
    400: {"description": "Invalid input", "model": ErrorResponse},
    401: {"description": "Missing or invalid token", "model": ErrorResponse},
}


@router.post(
    "",
    status_code=201,
    response_model=CategoryResponse,
    responses=COMMON_ERRORS,
    summary="Create a category",
)
async def create_category(
    body: CategoryCreate,
    user: User = Depends(auth()),
    db: AsyncSession = Depends(get_db_session),
) -> CategoryResponse:
    category = await category_service.create_category(db, body.category_name)
    return CategoryResponse.model_validate(category)


@router.get(
    "",
    response_model=List[CategoryResponse],
    response_model_exclude_unset=True,
    responses=COMMON_ERRORS,
    summary="List all categories",
    description="Returns every category. `sortBy` picks the ordering field; "
                "`sortType` defaults to desc.",
)
async def list_categories(
    sort_by: Optional[str] = Query(default=None, alias="sortBy"),
    sort_type: Literal["asc", "desc"] = Query(default="desc", alias="sortType"),
    user: User = Depends(auth()),
    db: AsyncSession = Depends(get_db_session),
):
    return await category_service.query_categories(
        db,
        sort_by=attribute_name(CategoryResponse, sort_by) if sort_by else None,
        sort_type=sort_type,
    )


@router.get(
    "/{category_id}",
    response_model=CategoryResponse,
    response_model_exclude_unset=True,
    responses={**COMMON_ERRORS, 404: {"description": "Category not found", "model": ErrorResponse}},
    summary="Get a category by id",
)
async def get_category(
    category_id: int,
    user: User = Depends(auth()),
    db: AsyncSession = Depends(get_db_session),
):
    category = await category_service.get_category_by_id(db, category_id)
    if category is None:
        raise NotFoundError(resource="category", resource_id=str(category_id))
    return category


@router.patch(
    "/{category_id}",
    response_model=CategoryResponse,
    response_model_exclude_unset=True,
    responses={**COMMON_ERRORS, 404: {"description": "Category not found", "model": ErrorResponse}},
    summary="Rename a category",
)
async def update_category(
    category_id: int,
    body: CategoryUpdate,
    user: User = Depends(auth()),
    db: AsyncSession = Depends(get_db_session),
):
    return await category_service.update_category_by_id(
        db, category_id, body.model_dump(exclude_unset=True)
    )


@router.delete(
    "/{category_id}",
    status_code=204,
    response_class=Response,
    responses={**COMMON_ERRORS, 404: {"description": "Category not found", "model": ErrorResponse}},
    summary="Delete a category",
)
async def delete_category(
    category_id: int,
    user: User = Depends(auth()),
    db: AsyncSession = Depends(get_db_session),
) -> Response:
    await category_service.delete_category_by_id(db, category_id)
    return Response(status_code=204)
