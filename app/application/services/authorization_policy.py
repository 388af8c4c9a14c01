"""Authorization policy: pure allow/deny decision for privileged actions.

No I/O. Rules are evaluated in a fixed order and the first match wins:

1. inactive caller
2. caller role is not admin or superadmin
3. admin acting outside its own hotel
4. deleting yourself
5. non-superadmin deleting a superadmin
6. creating a superadmin
7. allow

Every privileged handler evaluates this before the privileged gateway
will hand out a session (see PrivilegedGateway.open).
"""

from __future__ import annotations

from dataclasses import dataclass

from app.domain.entities.caller import CallerContext
from app.domain.enums import DenyReason, PrivilegedAction, Role
from app.domain.exceptions import AuthorizationException


@dataclass(frozen=True)
class AuthorizationTarget:
    """What the action is aimed at.

    tenant_id: hotel the action operates in.
    id: target identity (delete only).
    role: current role of the target identity (delete only).
    requested_role: role asked for on identity creation.
    """

    tenant_id: str | None
    id: str | None = None
    role: Role | None = None
    requested_role: Role | None = None


@dataclass(frozen=True)
class PolicyDecision:
    """Result of authorize(). reason is None when allowed."""

    allowed: bool
    action: PrivilegedAction
    caller_id: str
    tenant_id: str | None
    reason: DenyReason | None = None

    def raise_if_denied(self) -> None:
        """Raise AuthorizationException carrying the deny reason."""
        if not self.allowed:
            reason = self.reason.value if self.reason else None
            raise AuthorizationException(reason=reason, action=self.action.value)


def _deny(
    caller: CallerContext,
    action: PrivilegedAction,
    target: AuthorizationTarget,
    reason: DenyReason,
) -> PolicyDecision:
    return PolicyDecision(
        allowed=False,
        action=action,
        caller_id=caller.id,
        tenant_id=target.tenant_id,
        reason=reason,
    )


def authorize(
    caller: CallerContext,
    action: PrivilegedAction,
    target: AuthorizationTarget,
) -> PolicyDecision:
    """Decide whether caller may perform action on target."""
    if not caller.active:
        return _deny(caller, action, target, DenyReason.INACTIVE)
    if not caller.role.is_privileged:
        return _deny(caller, action, target, DenyReason.INSUFFICIENT_ROLE)
    # An admin with no hotel of its own cannot match any target hotel.
    if caller.role == Role.ADMIN and (
        caller.tenant_id is None or target.tenant_id != caller.tenant_id
    ):
        return _deny(caller, action, target, DenyReason.CROSS_TENANT)
    if action == PrivilegedAction.DELETE_IDENTITY:
        if target.id is not None and target.id == caller.id:
            return _deny(caller, action, target, DenyReason.SELF_DELETE)
        if target.role == Role.SUPERADMIN and caller.role != Role.SUPERADMIN:
            return _deny(caller, action, target, DenyReason.CANNOT_DELETE_SUPERADMIN)
    if (
        action == PrivilegedAction.CREATE_IDENTITY
        and target.requested_role == Role.SUPERADMIN
    ):
        return _deny(caller, action, target, DenyReason.CANNOT_GRANT_SUPERADMIN)
    return PolicyDecision(
        allowed=True,
        action=action,
        caller_id=caller.id,
        tenant_id=target.tenant_id,
    )
