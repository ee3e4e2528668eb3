"""
Inkwell Backend — Post Service
================================

What:  CRUD for posts on top of EntityService.
How:   Thin, typed wrappers around the generic operations with the post
       projection presets.
Who:   Called by the /posts route handlers, which apply PostPolicy to the
       results before returning them.

Projection presets:
    default   id, title, content, featured_image, category_id, user_id,
              created_at, updated_at
    identity  id, title, content          (update existence check)
    update    id, title, content, featured_image

The update preset does not include user_id. Callers that need to check
ownership on the updated row must ask for it explicitly (the PATCH route
passes OWNED_UPDATE_FIELDS).
"""

from typing import Any, Dict, List, Literal, Mapping, Optional, Sequence

from sqlalchemy.ext.asyncio import AsyncSession

from app.models.post import Post
from app.services.base import EntityService

PostField = Literal[
    "id",
    "title",
    "content",
    "featured_image",
    "category_id",
    "user_id",
    "created_at",
    "updated_at",
]


class PostService(EntityService[Post]):
    """Create/query/get/update/delete for Post rows."""

    model = Post
    resource = "post"
    fields = (
        "id",
        "title",
        "content",
        "featured_image",
        "category_id",
        "user_id",
        "created_at",
        "updated_at",
    )
    default_fields = fields
    identity_fields = ("id", "title", "content")
    update_fields = ("id", "title", "content", "featured_image")
    writable_fields = ("title", "content", "featured_image", "category_id")

    async def create_post(
        self,
        db: AsyncSession,
        title: str,
        content: str,
        featured_image: Optional[str],
        category_id: Optional[int],
        user_id: int,
    ) -> Post:
        """Persist a post owned by `user_id`."""
        return await self.create(
            db,
            title=title,
            content=content,
            featured_image=featured_image,
            category_id=category_id,
            user_id=user_id,
        )

    async def query_posts(
        self,
        db: AsyncSession,
        sort_by: Optional[PostField] = None,
        sort_type: Literal["asc", "desc"] = "desc",
        fields: Optional[Sequence[PostField]] = None,
    ) -> List[Dict[str, Any]]:
        return await self.query(db, sort_by=sort_by, sort_type=sort_type, fields=fields)

    async def get_post_by_id(
        self,
        db: AsyncSession,
        post_id: int,
        fields: Optional[Sequence[PostField]] = None,
    ) -> Optional[Dict[str, Any]]:
        return await self.get_by_id(db, post_id, fields)

    async def update_post_by_id(
        self,
        db: AsyncSession,
        post_id: int,
        update_body: Mapping[str, Any],
        fields: Optional[Sequence[PostField]] = None,
    ) -> Dict[str, Any]:
        return await self.update_by_id(db, post_id, update_body, fields)

    async def delete_post_by_id(self, db: AsyncSession, post_id: int) -> Dict[str, Any]:
        return await self.delete_by_id(db, post_id)


# Update projection plus the owner, for routes that authorize on the result
OWNED_UPDATE_FIELDS = PostService.update_fields + ("user_id",)

# ── Singleton Instance ────────────────────────────────────────────────────
post_service = PostService()
