"""
Inkwell Backend — Post Authorization Policy
=============================================

What:  Ownership and role rules applied to posts AFTER the service call that
       fetched or changed them.
Who:   Called by the /posts route handlers.

Rules:
    read    post.user_id == requester.id                      else Unauthorized
    update  updated.user_id == requester.id
            AND requester.role == ADMIN                       else Unauthorized
    delete  none

Behaviour to be aware of:
    - The update rule is an AND: an owner with the USER role cannot update
      their own post.
    - Delete has no ownership or role check.
    - The update rule is evaluated against the already-updated row. The
      request transaction is rolled back when it fails, so the change is not
      committed, but the UPDATE statement itself has run.
"""

import logging
from typing import Any, Mapping, Protocol

from app.exceptions import UnauthorizedError
from app.roles import is_elevated

logger = logging.getLogger(__name__)


class Requester(Protocol):
    id: int
    role: str


class PostPolicy:
    """Post authorization rules. Stateless; raise UnauthorizedError on denial."""

    def authorize_read(self, post: Mapping[str, Any], requester: Requester) -> None:
        if post.get("user_id") != requester.id:
            logger.info("Read of post %s denied for user %s", post.get("id"), requester.id)
            raise UnauthorizedError(context={"post_id": post.get("id"), "rule": "read"})

    def authorize_update(self, post: Mapping[str, Any], requester: Requester) -> None:
        # A projection without user_id never matches, mirroring a missing owner
        if post.get("user_id") != requester.id or not is_elevated(requester.role):
            logger.info("Update of post %s denied for user %s", post.get("id"), requester.id)
            raise UnauthorizedError(context={"post_id": post.get("id"), "rule": "update"})

    def authorize_delete(self, post_id: int, requester: Requester) -> None:
        """
        Deliberately permissive: any authenticated requester may delete any
        post. Deleting has never carried an ownership or role check, and API
        clients rely on that; the call stays in the route so a rule can be
        added here without touching the handler.
        """
        return None


post_policy = PostPolicy()
