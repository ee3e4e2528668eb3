# Models package init
"""
Importing this package registers every table with `Base.metadata`
(Alembic autogenerate and the test suite rely on that).
"""

from app.models.user import User
from app.models.category import Category
from app.models.post import Post

__all__ = ["User", "Category", "Post"]
