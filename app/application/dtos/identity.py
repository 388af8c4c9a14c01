"""DTOs for identity and profile use cases (no dependency on transport)."""

from dataclasses import dataclass

from app.domain.enums import Role


@dataclass(frozen=True)
class ProviderUser:
    """Identity as reported by the identity provider."""

    id: str
    email: str | None = None


@dataclass(frozen=True)
class ProfileResult:
    """Profile read-model. role is already normalized."""

    id: str
    tenant_id: str | None
    role: Role
    active: bool
    full_name: str | None = None


@dataclass(frozen=True)
class NewProfile:
    """Profile row written after the identity is created."""

    id: str
    email: str
    role: Role
    tenant_id: str
    full_name: str | None
    active: bool = True


@dataclass(frozen=True)
class IdentitySummary:
    """One row of the tenant identity listing."""

    id: str
    username: str
    full_name: str
    email: str | None
    role: Role
    status: str
