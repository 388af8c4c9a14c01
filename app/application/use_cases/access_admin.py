"""Privileged access-administration workflows.

Each workflow runs: policy decision -> privileged session -> mutation.
The caller has already been resolved; the tenant a request names is
never trusted on its own and is always checked against the caller's
profile by the policy.
"""

from __future__ import annotations

from typing import Any

from app.application.dtos.identity import IdentitySummary
from app.application.interfaces.services import IPrivilegedGateway, PrivilegedSession
from app.application.services.access_grant_synchronizer import AccessGrantSynchronizer
from app.application.services.authorization_policy import (
    AuthorizationTarget,
    PolicyDecision,
    authorize,
)
from app.application.services.identity_admin_service import IdentityAdminService
from app.domain.entities.caller import CallerContext
from app.domain.enums import (
    LEAST_PRIVILEGED_ROLE,
    DenyReason,
    PrivilegedAction,
    Role,
)
from app.domain.exceptions import AuthorizationException, ValidationException
from app.shared.telemetry.logging import get_logger

logger = get_logger(__name__)


def parse_requested_role(raw: Any) -> Role:
    """Role requested for a new identity; missing means the least privileged.

    Unlike normalize_role, an unknown value is rejected rather than
    downgraded so the admin learns about the typo.
    """
    value = ("" if raw is None else str(raw)).strip().lower()
    if not value:
        return LEAST_PRIVILEGED_ROLE
    if value not in Role.values():
        raise ValidationException(f"Invalid role: {value}", field="role")
    return Role(value)


def _resolve_tenant(caller: CallerContext, hotel_id: str | None) -> str:
    tenant_id = (hotel_id or "").strip() or caller.tenant_id
    if not tenant_id:
        raise ValidationException("No hotel selected", field="hotel_id")
    return tenant_id


class AccessAdminUseCases:
    """Identity lifecycle and grant workflows for admins and superadmins."""

    def __init__(
        self,
        gateway: IPrivilegedGateway,
        list_page_size: int = 1000,
        list_max_pages: int = 50,
        grant_replace_function: str | None = None,
    ) -> None:
        self.gateway = gateway
        self.list_page_size = list_page_size
        self.list_max_pages = list_max_pages
        self.grant_replace_function = grant_replace_function

    def _authorize(
        self,
        caller: CallerContext,
        action: PrivilegedAction,
        target: AuthorizationTarget,
    ) -> PolicyDecision:
        decision = authorize(caller, action, target)
        if not decision.allowed:
            logger.info(
                "Policy denied %s for caller %s: %s",
                action.value,
                caller.id,
                decision.reason.value if decision.reason else "unknown",
            )
            decision.raise_if_denied()
        return decision

    def _identity_admin(self, session: PrivilegedSession) -> IdentityAdminService:
        return IdentityAdminService(
            session,
            list_page_size=self.list_page_size,
            list_max_pages=self.list_max_pages,
        )

    def _synchronizer(self, session: PrivilegedSession) -> AccessGrantSynchronizer:
        return AccessGrantSynchronizer(
            session.areas,
            session.grants,
            replace_function=self.grant_replace_function,
        )

    async def create_identity(
        self,
        caller: CallerContext,
        email: str,
        password: str,
        role: Any = None,
        hotel_id: str | None = None,
        full_name: str | None = None,
    ) -> str:
        """Create an identity in hotel_id (or the caller's hotel); return its id."""
        requested_role = parse_requested_role(role)
        tenant_id = _resolve_tenant(caller, hotel_id)
        decision = self._authorize(
            caller,
            PrivilegedAction.CREATE_IDENTITY,
            AuthorizationTarget(tenant_id=tenant_id, requested_role=requested_role),
        )
        session = self.gateway.open(decision)
        return await self._identity_admin(session).create_identity(
            email=email,
            password=password,
            role=requested_role,
            tenant_id=tenant_id,
            full_name=full_name,
        )

    async def delete_identity(
        self, caller: CallerContext, user_id: str, hotel_id: str
    ) -> None:
        """Delete user_id from hotel_id.

        Authorized twice: first on the request (catches self-delete and
        cross-tenant before any lookup), then on the loaded target profile
        (its real hotel and role).
        """
        decision = self._authorize(
            caller,
            PrivilegedAction.DELETE_IDENTITY,
            AuthorizationTarget(tenant_id=hotel_id, id=user_id),
        )
        session = self.gateway.open(decision)
        admin = self._identity_admin(session)
        target = await admin.load_profile(user_id)

        if not caller.is_superadmin and target.tenant_id != hotel_id:
            logger.info(
                "Policy denied delete-identity for caller %s: target %s not in hotel %s",
                caller.id,
                user_id,
                hotel_id,
            )
            raise AuthorizationException(
                reason=DenyReason.CROSS_TENANT.value,
                action=PrivilegedAction.DELETE_IDENTITY.value,
            )
        self._authorize(
            caller,
            PrivilegedAction.DELETE_IDENTITY,
            AuthorizationTarget(tenant_id=hotel_id, id=user_id, role=target.role),
        )
        await admin.delete_identity(user_id)

    async def list_identities(
        self, caller: CallerContext, hotel_id: str | None
    ) -> list[IdentitySummary]:
        """Identities of hotel_id (or the caller's hotel)."""
        tenant_id = _resolve_tenant(caller, hotel_id)
        decision = self._authorize(
            caller,
            PrivilegedAction.LIST_IDENTITIES,
            AuthorizationTarget(tenant_id=tenant_id),
        )
        session = self.gateway.open(decision)
        return await self._identity_admin(session).list_identities(tenant_id)

    async def _require_grant_holder(
        self,
        session: PrivilegedSession,
        caller: CallerContext,
        action: PrivilegedAction,
        user_id: str,
        hotel_id: str,
    ) -> None:
        """Grants of hotel_id may only reference a profile of hotel_id.

        Profiles with no hotel (superadmins) are not tied to one.
        """
        target = await self._identity_admin(session).load_profile(user_id)
        if target.tenant_id is not None and target.tenant_id != hotel_id:
            logger.info(
                "Policy denied %s for caller %s: profile %s belongs to hotel %s, not %s",
                action.value,
                caller.id,
                user_id,
                target.tenant_id,
                hotel_id,
            )
            raise AuthorizationException(
                reason=DenyReason.CROSS_TENANT.value, action=action.value
            )

    async def get_grants(
        self, caller: CallerContext, user_id: str, hotel_id: str
    ) -> list[str]:
        """Area ids granted to user_id in hotel_id."""
        decision = self._authorize(
            caller,
            PrivilegedAction.READ_GRANTS,
            AuthorizationTarget(tenant_id=hotel_id, id=user_id),
        )
        session = self.gateway.open(decision)
        await self._require_grant_holder(
            session, caller, PrivilegedAction.READ_GRANTS, user_id, hotel_id
        )
        return await self._synchronizer(session).get_grants(user_id, hotel_id)

    async def set_grants(
        self,
        caller: CallerContext,
        user_id: str,
        hotel_id: str,
        area_ids: list[Any],
    ) -> int:
        """Replace the grant set of user_id in hotel_id; return the count in force."""
        decision = self._authorize(
            caller,
            PrivilegedAction.REPLACE_GRANTS,
            AuthorizationTarget(tenant_id=hotel_id, id=user_id),
        )
        session = self.gateway.open(decision)
        await self._require_grant_holder(
            session, caller, PrivilegedAction.REPLACE_GRANTS, user_id, hotel_id
        )
        return await self._synchronizer(session).replace_grants(
            user_id, hotel_id, area_ids
        )
