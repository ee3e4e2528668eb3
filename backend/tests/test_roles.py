"""
Inkwell Backend — Role Table Unit Tests
=========================================

What we test:
    ✅ USER and ADMIN grant exactly their rights
    ✅ The role table cannot be modified at runtime
    ✅ missing_rights keeps request order and tolerates unknown roles
"""

import pytest

from app.roles import (
    ELEVATED_ROLE,
    ROLE_RIGHTS,
    ROLES,
    Role,
    is_elevated,
    missing_rights,
    rights_for,
)


class TestRoleRights:

    def test_user_rights(self):
        assert rights_for("USER") == frozenset({"getUsers"})

    def test_admin_rights(self):
        assert rights_for("ADMIN") == frozenset({"getUsers", "manageUsers"})

    def test_unknown_role_has_no_rights(self):
        assert rights_for("EDITOR") == frozenset()

    def test_roles_listing(self):
        assert ROLES == ("USER", "ADMIN")

    def test_table_is_read_only(self):
        with pytest.raises(TypeError):
            ROLE_RIGHTS[Role.USER] = frozenset({"manageUsers"})  # type: ignore[index]

    def test_right_sets_are_frozen(self):
        with pytest.raises(AttributeError):
            ROLE_RIGHTS[Role.USER].add("manageUsers")  # type: ignore[attr-defined]


class TestMissingRights:

    def test_nothing_required(self):
        assert missing_rights("USER", ()) == []

    def test_user_lacks_manage(self):
        assert missing_rights("USER", ["manageUsers", "getUsers"]) == ["manageUsers"]

    def test_admin_has_everything(self):
        assert missing_rights("ADMIN", ["getUsers", "manageUsers"]) == []

    def test_unknown_role_lacks_all(self):
        assert missing_rights("GUEST", ["getUsers"]) == ["getUsers"]


class TestElevatedRole:

    def test_admin_is_elevated(self):
        assert ELEVATED_ROLE is Role.ADMIN
        assert is_elevated("ADMIN")

    def test_user_is_not_elevated(self):
        assert not is_elevated("USER")
        assert not is_elevated("admin")
