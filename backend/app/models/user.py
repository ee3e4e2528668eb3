"""
Inkwell Backend — User SQLAlchemy Model
=========================================

What:  ORM model for the `users` table.
Who:   Loaded by the auth dependency to identify the requester; referenced by
       posts as their owner.

Only the columns authorization needs live here. Account creation, passwords
and token issuance belong to the identity service that shares this table.
"""

from datetime import datetime, timezone

from sqlalchemy import DateTime, Integer, String, text
from sqlalchemy.orm import Mapped, mapped_column

from app.database import Base
from app.roles import DEFAULT_ROLE


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class User(Base):
    """An account that can own posts."""

    __tablename__ = "users"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    name: Mapped[str | None] = mapped_column(String(255), nullable=True)

    email: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        unique=True,
        comment="Login email, unique across accounts",
    )

    # Values: USER | ADMIN (see app.roles.Role)
    role: Mapped[str] = mapped_column(
        String(20),
        nullable=False,
        default=DEFAULT_ROLE.value,
        server_default=text(f"'{DEFAULT_ROLE.value}'"),
        comment="Authorization role: USER or ADMIN",
    )

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=_utcnow,
        server_default=text("CURRENT_TIMESTAMP"),
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=_utcnow,
        onupdate=_utcnow,
        server_default=text("CURRENT_TIMESTAMP"),
    )

    def __repr__(self) -> str:
        return f"<User(id={self.id}, role='{self.role}')>"
