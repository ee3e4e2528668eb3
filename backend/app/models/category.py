"""
Inkwell Backend — Category SQLAlchemy Model
=============================================

What:  ORM model representing the `categories` table.
Who:   Used by CategoryService for CRUD operations and by Alembic for schema management.

Lifecycle:
    1. Created with an explicit name
    2. Renamed through PATCH /categories/{id}
    3. Deleted by id; posts that referenced it keep existing with category_id = NULL

Categories have no owner: any authenticated caller may manage any category.
"""

from datetime import datetime, timezone

from sqlalchemy import DateTime, Integer, String, text
from sqlalchemy.orm import Mapped, mapped_column

from app.database import Base


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Category(Base):
    """A named bucket posts can be filed under."""

    __tablename__ = "categories"

    id: Mapped[int] = mapped_column(
        Integer,
        primary_key=True,
        autoincrement=True,
        comment="Generated identifier",
    )

    category_name: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        comment="Display name of the category",
    )

    # ── Timestamps ────────────────────────────────────────────────────────
    # UTC with timezone; updated_at is refreshed by every UPDATE statement,
    # including the bulk UPDATE ... RETURNING the service issues
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=_utcnow,
        server_default=text("CURRENT_TIMESTAMP"),
        comment="When this category was created (UTC)",
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=_utcnow,
        onupdate=_utcnow,
        server_default=text("CURRENT_TIMESTAMP"),
        comment="When this category was last modified (UTC)",
    )

    def __repr__(self) -> str:
        """Developer-friendly string representation for debugging."""
        return f"<Category(id={self.id}, category_name='{self.category_name}')>"
