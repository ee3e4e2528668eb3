"""
Inkwell Backend — Request Dependencies
========================================

What:  FastAPI dependencies that resolve the authenticated requester.
How:   HTTPBearer extracts the token, `decode_access_token` verifies it, and
       the user row is loaded through the request's own database session.
Who:   Every blog route depends on `auth()`.

Usage:
    @router.get("/posts")
    async def list_posts(user: User = Depends(auth()), ...): ...

    @router.get("/users")
    async def list_users(user: User = Depends(auth("getUsers")), ...): ...
"""

import logging
from typing import Awaitable, Callable, Optional

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import get_db_session, is_storable_id, run_with_retry
from app.exceptions import AuthenticationError, ForbiddenError
from app.models.user import User
from app.roles import missing_rights
from app.security import decode_access_token

logger = logging.getLogger(__name__)

# auto_error=False: missing credentials go through our AuthenticationError
# handler instead of FastAPI's default 403
bearer_scheme = HTTPBearer(auto_error=False)


async def get_current_user(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    db: AsyncSession = Depends(get_db_session),
) -> User:
    """
    Resolve the bearer token to a User row.

    Raises:
        AuthenticationError: no token, invalid token, or unknown user (→ 401)
    """
    if credentials is None:
        raise AuthenticationError(context={"reason": "missing_token"})

    user_id = decode_access_token(credentials.credentials)
    if not is_storable_id(user_id):
        raise AuthenticationError(context={"reason": "unknown_user"})
    user = await run_with_retry(db, lambda: db.get(User, user_id), f"load user {user_id}")
    if user is None:
        logger.info("Token subject %s does not match any user", user_id)
        raise AuthenticationError(context={"reason": "unknown_user"})

    # Picked up by the access-log middleware
    request.state.user_id = user.id
    return user


def auth(*required_rights: str) -> Callable[..., Awaitable[User]]:
    """
    Build a dependency that requires authentication and, optionally, rights.

    Args:
        required_rights: Rights from app.roles.ROLE_RIGHTS the requester's
                         role must hold. None means "any authenticated user".
    """

    async def dependency(user: User = Depends(get_current_user)) -> User:
        missing = missing_rights(user.role, required_rights)
        if missing:
            raise ForbiddenError(missing_rights=missing)
        return user

    return dependency
