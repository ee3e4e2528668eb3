"""
Inkwell Backend — Roles and Role Rights
=========================================

What:  The fixed set of user roles and the rights each role grants.
How:   ROLE_RIGHTS is built once at import time as a read-only mapping of
       frozensets; nothing in the process can add or remove rights afterwards.
Who:   Read by the auth dependency (right checks) and by PostPolicy
       (the elevated-role test on updates).

Role Table:
    USER   → getUsers
    ADMIN  → getUsers, manageUsers   (elevated)
"""

import enum
from types import MappingProxyType
from typing import FrozenSet, Iterable, Mapping, Tuple


class Role(str, enum.Enum):
    """User roles. Values are what the `users.role` column stores."""

    USER = "USER"
    ADMIN = "ADMIN"


# Role granting broader permissions than the default one
ELEVATED_ROLE = Role.ADMIN

DEFAULT_ROLE = Role.USER

ROLE_RIGHTS: Mapping[Role, FrozenSet[str]] = MappingProxyType({
    Role.USER: frozenset({"getUsers"}),
    Role.ADMIN: frozenset({"getUsers", "manageUsers"}),
})

ROLES: Tuple[str, ...] = tuple(role.value for role in ROLE_RIGHTS)


def rights_for(role: str) -> FrozenSet[str]:
    """Rights granted to `role`; unknown roles get none."""
    try:
        return ROLE_RIGHTS[Role(role)]
    except ValueError:
        return frozenset()


def missing_rights(role: str, required: Iterable[str]) -> list:
    """Required rights the role does not hold, in the order they were asked for."""
    granted = rights_for(role)
    return [right for right in required if right not in granted]


def is_elevated(role: str) -> bool:
    return role == ELEVATED_ROLE.value
