"""Domain enumerations for the access-control service.

Enums represent fixed sets of domain values: profile roles, privileged
actions and the reasons the authorization policy gives for a denial.
"""

from enum import Enum
from typing import Any


class _ValuesMixin:
    """Mixin that adds a values() classmethod to str Enums."""

    @classmethod
    def values(cls) -> list[str]:
        """Return all valid values as strings."""
        return [member.value for member in cls]


class Role(_ValuesMixin, str, Enum):
    """Profile role. SUPERADMIN is global; every other role is hotel-scoped."""

    SUPERADMIN = "superadmin"
    ADMIN = "admin"
    MANAGER = "manager"
    AUDITOR = "auditor"

    @classmethod
    def assignable(cls) -> list["Role"]:
        """Roles that may be granted through identity creation."""
        return [cls.ADMIN, cls.MANAGER, cls.AUDITOR]

    @property
    def is_privileged(self) -> bool:
        return self in (Role.ADMIN, Role.SUPERADMIN)


LEAST_PRIVILEGED_ROLE = Role.AUDITOR


def normalize_role(raw: Any) -> Role:
    """Map a raw role value from the store to a Role.

    Lower-cases and trims; anything unrecognized (None, empty, typos,
    unknown strings) becomes the least-privileged role, never an elevated one.
    """
    value = ("" if raw is None else str(raw)).strip().lower()
    try:
        return Role(value)
    except ValueError:
        return LEAST_PRIVILEGED_ROLE


class PrivilegedAction(_ValuesMixin, str, Enum):
    """Actions that require an Allow from the authorization policy."""

    CREATE_IDENTITY = "create-identity"
    DELETE_IDENTITY = "delete-identity"
    LIST_IDENTITIES = "list-identities"
    READ_GRANTS = "read-grants"
    REPLACE_GRANTS = "replace-grants"


class DenyReason(_ValuesMixin, str, Enum):
    """Reason codes returned by the authorization policy."""

    INACTIVE = "inactive"
    INSUFFICIENT_ROLE = "insufficient-role"
    CROSS_TENANT = "cross-tenant"
    SELF_DELETE = "self-delete"
    CANNOT_DELETE_SUPERADMIN = "cannot-delete-superadmin"
    CANNOT_GRANT_SUPERADMIN = "cannot-grant-superadmin"


class IdentityStatus(_ValuesMixin, str, Enum):
    """Display status of a listed identity (from the profile active flag)."""

    ACTIVE = "active"
    INACTIVE = "inactive"
