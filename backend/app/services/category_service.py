"""
Inkwell Backend — Category Service
====================================

What:  CRUD for categories on top of EntityService.
Who:   Called by the /categories route handlers.

Categories carry no ownership, so there is no policy layer: every
authenticated caller may create, read, rename and delete any category.
"""

from typing import Any, Dict, List, Literal, Mapping, Optional, Sequence

from sqlalchemy.ext.asyncio import AsyncSession

from app.models.category import Category
from app.services.base import EntityService

CategoryField = Literal["id", "category_name", "created_at", "updated_at"]


class CategoryService(EntityService[Category]):
    """Create/query/get/update/delete for Category rows."""

    model = Category
    resource = "category"
    fields = ("id", "category_name", "created_at", "updated_at")
    default_fields = fields
    identity_fields = ("id", "category_name")
    update_fields = ("id", "category_name")
    writable_fields = ("category_name",)

    async def create_category(self, db: AsyncSession, category_name: str) -> Category:
        return await self.create(db, category_name=category_name)

    async def query_categories(
        self,
        db: AsyncSession,
        sort_by: Optional[CategoryField] = None,
        sort_type: Literal["asc", "desc"] = "desc",
        fields: Optional[Sequence[CategoryField]] = None,
    ) -> List[Dict[str, Any]]:
        return await self.query(db, sort_by=sort_by, sort_type=sort_type, fields=fields)

    async def get_category_by_id(
        self,
        db: AsyncSession,
        category_id: int,
        fields: Optional[Sequence[CategoryField]] = None,
    ) -> Optional[Dict[str, Any]]:
        return await self.get_by_id(db, category_id, fields)

    async def update_category_by_id(
        self,
        db: AsyncSession,
        category_id: int,
        update_body: Mapping[str, Any],
        fields: Optional[Sequence[CategoryField]] = None,
    ) -> Dict[str, Any]:
        return await self.update_by_id(db, category_id, update_body, fields)

    async def delete_category_by_id(self, db: AsyncSession, category_id: int) -> Dict[str, Any]:
        return await self.delete_by_id(db, category_id)


# ── Singleton Instance ────────────────────────────────────────────────────
category_service = CategoryService()
