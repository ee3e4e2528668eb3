"""
Inkwell Backend — Post SQLAlchemy Model
=========================================

What:  ORM model representing the `posts` table.
Who:   Used by PostService for CRUD operations and by Alembic for schema management.

Table Design:
    - user_id: owner of the post; NOT NULL, set from the authenticated requester
      at creation and never taken from the request body
    - category_id: optional; cleared automatically when the category is deleted
    - featured_image: URL or storage key of the header image, optional

Query Patterns:
    - List posts: SELECT <projection> FROM posts [ORDER BY <field> <dir>]
    - Get single post: SELECT <projection> FROM posts WHERE id = :id
    - Posts by owner / category: covered by the FK indexes below
"""

from datetime import datetime, timezone

from sqlalchemy import DateTime, ForeignKey, Index, Integer, String, Text, text
from sqlalchemy.orm import Mapped, mapped_column

from app.database import Base


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Post(Base):
    """
    A blog post owned by exactly one user and filed under at most one category.

    Authorization (enforced by PostPolicy, not here):
        - read:   owner only
        - update: owner AND elevated role
        - delete: any authenticated user
    """

    __tablename__ = "posts"

    id: Mapped[int] = mapped_column(
        Integer,
        primary_key=True,
        autoincrement=True,
        comment="Generated identifier",
    )

    title: Mapped[str] = mapped_column(String(255), nullable=False)

    # TEXT: post bodies have no practical length limit
    content: Mapped[str] = mapped_column(Text, nullable=False)

    featured_image: Mapped[str | None] = mapped_column(
        String(1024),
        nullable=True,
        default=None,
        comment="URL of the header image",
    )

    # ── Relationships ─────────────────────────────────────────────────────
    category_id: Mapped[int | None] = mapped_column(
        Integer,
        ForeignKey("categories.id", ondelete="SET NULL"),
        nullable=True,
        comment="Optional category (many-to-one)",
    )

    user_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        comment="Owning user (many-to-one, required)",
    )

    # ── Timestamps ────────────────────────────────────────────────────────
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=_utcnow,
        server_default=text("CURRENT_TIMESTAMP"),
        comment="When this post was created (UTC)",
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=_utcnow,
        onupdate=_utcnow,
        server_default=text("CURRENT_TIMESTAMP"),
        comment="When this post was last modified (UTC)",
    )

    __table_args__ = (
        Index("idx_posts_user_id", "user_id"),
        Index("idx_posts_category_id", "category_id"),
    )

    def __repr__(self) -> str:
        return f"<Post(id={self.id}, user_id={self.user_id}, title='{self.title}')>"
