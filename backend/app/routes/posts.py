"""
Inkwell Backend — Post Route Handlers
=======================================

What:  CRUD endpoints under /posts.
How:   One PostService call per handler, followed by the matching PostPolicy
       rule applied to the returned row.

Authorization order:
    GET    fetch → 404 if absent → read rule
    PATCH  existence check → UPDATE → update rule
           (a denied update raises after the UPDATE; the request transaction
           is rolled back so nothing is committed)
    DELETE no rule
"""

import logging
from typing import List, Literal, Optional

from fastapi import APIRouter, Depends, Query, Response
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import get_db_session
from app.dependencies import auth
from app.exceptions import NotFoundError
from app.models.user import User
from app.schemas.common import ErrorResponse, attribute_name
from app.schemas.post import PostCreate, PostResponse, PostUpdate
from app.services.post_policy import post_policy
from app.services.post_service import OWNED_UPDATE_FIELDS, post_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/posts", tags=["Posts"])

COMMON_ERRORS = {
    400: {"description": "Invalid input or authorization rule failed", "model": ErrorResponse},
    401: {"description": "Missing or invalid token", "model": ErrorResponse},
}
NOT_FOUND = {404: {"description": "Post not found", "model": ErrorResponse}}


@router.post(
    "",
    status_code=201,
    response_model=PostResponse,
    responses={**COMMON_ERRORS, 409: {"description": "Unknown category", "model": ErrorResponse}},
    summary="Create a post owned by the requester",
)
async def create_post(
    body: PostCreate,
    user: User = Depends(auth()),
    db: AsyncSession = Depends(get_db_session),
) -> PostResponse:
    post = await post_service.create_post(
        db,
        title=body.title,
        content=body.content,
        featured_image=body.featured_image,
        category_id=body.category_id,
        user_id=user.id,
    )
    return PostResponse.model_validate(post)


@router.get(
    "",
    response_model=List[PostResponse],
    response_model_exclude_unset=True,
    responses=COMMON_ERRORS,
    summary="List all posts",
    description="Returns every post. `sortBy` picks the ordering field; "
                "`sortType` defaults to desc. No filtering or pagination.",
)
async def list_posts(
    sort_by: Optional[str] = Query(default=None, alias="sortBy"),
    sort_type: Literal["asc", "desc"] = Query(default="desc", alias="sortType"),
    user: User = Depends(auth()),
    db: AsyncSession = Depends(get_db_session),
):
    return await post_service.query_posts(
        db,
        sort_by=attribute_name(PostResponse, sort_by) if sort_by else None,
        sort_type=sort_type,
    )


@router.get(
    "/{post_id}",
    response_model=PostResponse,
    response_model_exclude_unset=True,
    responses={**COMMON_ERRORS, **NOT_FOUND},
    summary="Get one of the requester's posts",
)
async def get_post(
    post_id: int,
    user: User = Depends(auth()),
    db: AsyncSession = Depends(get_db_session),
):
    post = await post_service.get_post_by_id(db, post_id)
    if post is None:
        raise NotFoundError(resource="post", resource_id=str(post_id))
    post_policy.authorize_read(post, user)
    return post


@router.patch(
    "/{post_id}",
    response_model=PostResponse,
    response_model_exclude_unset=True,
    responses={**COMMON_ERRORS, **NOT_FOUND},
    summary="Update a post (owner with ADMIN role only)",
)
async def update_post(
    post_id: int,
    body: PostUpdate,
    user: User = Depends(auth()),
    db: AsyncSession = Depends(get_db_session),
):
    post = await post_service.update_post_by_id(
        db,
        post_id,
        body.model_dump(exclude_unset=True),
        fields=OWNED_UPDATE_FIELDS,
    )
    post_policy.authorize_update(post, user)
    return post


@router.delete(
    "/{post_id}",
    status_code=204,
    response_class=Response,
    responses={**COMMON_ERRORS, **NOT_FOUND},
    summary="Delete a post",
)
async def delete_post(
    post_id: int,
    user: User = Depends(auth()),
    db: AsyncSession = Depends(get_db_session),
) -> Response:
    post_policy.authorize_delete(post_id, user)
    await post_service.delete_post_by_id(db, post_id)
    return Response(status_code=204)
