"""Caller domain entity.

The authenticated principal behind a request, with the tenant and role
read from its profile. Built once per request by the credential resolver.
"""

from dataclasses import dataclass

from app.domain.enums import Role


@dataclass(frozen=True)
class CallerContext:
    """Immutable identity + authorization profile of the caller.

    tenant_id is None only for a superadmin with no selected hotel.
    """

    id: str
    tenant_id: str | None
    role: Role
    active: bool

    @property
    def is_superadmin(self) -> bool:
        return self.role == Role.SUPERADMIN
