"""
Inkwell Backend — Post Policy Unit Tests
==========================================

What:  The ownership and role rules for posts, checked in isolation.
How:   Plain dicts for posts, SimpleNamespace for the requester.

What we test:
    ✅ Read: owner only
    ✅ Update: owner AND ADMIN (both conditions required)
    ✅ Update on a projection without user_id is always denied
    ✅ Delete: never denied
"""

from types import SimpleNamespace

import pytest

from app.exceptions import UnauthorizedError
from app.services.post_policy import PostPolicy


def requester(user_id: int, role: str = "USER") -> SimpleNamespace:
    return SimpleNamespace(id=user_id, role=role)


class TestReadRule:

    def setup_method(self):
        self.policy = PostPolicy()
        self.post = {"id": 10, "title": "t", "user_id": 1}

    def test_owner_may_read(self):
        self.policy.authorize_read(self.post, requester(1))

    def test_admin_non_owner_may_not_read(self):
        with pytest.raises(UnauthorizedError) as exc_info:
            self.policy.authorize_read(self.post, requester(2, "ADMIN"))
        assert exc_info.value.message == "Unauthorized"
        assert exc_info.value.context["rule"] == "read"


class TestUpdateRule:

    def setup_method(self):
        self.policy = PostPolicy()
        self.post = {"id": 10, "title": "t", "user_id": 1}

    def test_owner_admin_may_update(self):
        self.policy.authorize_update(self.post, requester(1, "ADMIN"))

    def test_owner_without_admin_role_is_denied(self):
        with pytest.raises(UnauthorizedError):
            self.policy.authorize_update(self.post, requester(1, "USER"))

    def test_admin_non_owner_is_denied(self):
        with pytest.raises(UnauthorizedError):
            self.policy.authorize_update(self.post, requester(2, "ADMIN"))

    def test_projection_without_owner_is_denied(self):
        projected = {"id": 10, "title": "t", "content": "c", "featured_image": None}
        with pytest.raises(UnauthorizedError):
            self.policy.authorize_update(projected, requester(1, "ADMIN"))


class TestDeleteRule:

    @pytest.mark.parametrize("role", ["USER", "ADMIN"])
    def test_anyone_may_delete(self, role):
        assert PostPolicy().authorize_delete(10, requester(99, role)) is None
