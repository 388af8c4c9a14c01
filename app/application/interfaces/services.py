"""Service interfaces (ports) for the application layer.

Protocols define contracts for the identity provider and for the two
store gateways: the caller-bound (least privilege) one and the
privileged one. The privileged gateway only opens a session for an
allowed policy decision.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Protocol

from app.application.dtos.identity import ProviderUser
from app.application.interfaces.repositories import (
    IAccessGrantRepository,
    IAreaRepository,
    IProfileRepository,
    IQuestionRepository,
)

if TYPE_CHECKING:
    from app.application.services.authorization_policy import PolicyDecision


class IIdentityProvider(Protocol):
    """Protocol for the external identity provider (credentials live there)."""

    async def get_user(self, access_token: str) -> ProviderUser | None:
        """Validate a bearer credential; None when the provider rejects it."""
        ...

    async def create_user(self, email: str, password: str) -> ProviderUser:
        """Create a pre-confirmed identity and return it."""
        ...

    async def delete_user(self, user_id: str) -> None:
        """Delete the identity (revokes its credential)."""
        ...

    async def list_users(self, page: int, per_page: int) -> list[ProviderUser]:
        """Return one page (1-based) of identities."""
        ...


@dataclass(frozen=True)
class CallerSession:
    """Store access bound to the caller's own credential (row-level rules apply)."""

    identities: IIdentityProvider
    profiles: IProfileRepository
    questions: IQuestionRepository


@dataclass(frozen=True)
class PrivilegedSession:
    """Elevated-trust store access. Only obtainable from an allowed decision."""

    identities: IIdentityProvider
    profiles: IProfileRepository
    areas: IAreaRepository
    grants: IAccessGrantRepository


class ICallerStoreFactory(Protocol):
    """Builds a least-privilege session scoped to one bearer credential."""

    def for_token(self, access_token: str) -> CallerSession:
        ...


class IPrivilegedGateway(Protocol):
    """Hands out privileged sessions to callers the policy has allowed."""

    def open(self, decision: PolicyDecision) -> PrivilegedSession:
        """Return a privileged session; raise AuthorizationException if not allowed."""
        ...
