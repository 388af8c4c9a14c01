"""Identity lifecycle on the privileged session: create, delete, list.

Only constructed with a PrivilegedSession, which the gateway hands out
for an allowed policy decision. Creation is a two-step saga with one
compensating step (delete the identity when the profile write fails).
"""

from __future__ import annotations

import re

from app.application.dtos.identity import IdentitySummary, NewProfile, ProfileResult
from app.application.interfaces.services import PrivilegedSession
from app.domain.enums import IdentityStatus, Role
from app.domain.exceptions import (
    DependencyException,
    ResourceNotFoundException,
    ValidationException,
)
from app.shared.telemetry.logging import get_logger

logger = get_logger(__name__)

MIN_PASSWORD_LENGTH = 8
_EMAIL_PATTERN = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")


class IdentityAdminService:
    """Creates, deletes and lists identities of a hotel."""

    def __init__(
        self,
        session: PrivilegedSession,
        list_page_size: int = 1000,
        list_max_pages: int = 50,
    ) -> None:
        self.session = session
        self.list_page_size = list_page_size
        self.list_max_pages = list_max_pages

    async def create_identity(
        self,
        email: str,
        password: str,
        role: Role,
        tenant_id: str,
        full_name: str | None = None,
    ) -> str:
        """Create a pre-confirmed identity and its profile; return the identity id.

        If the profile write fails the identity is deleted again before the
        original error is re-raised. A failed deletion is logged as an
        orphaned identity and does not replace the original error.
        """
        email = (email or "").strip().lower()
        if not email or not _EMAIL_PATTERN.match(email):
            raise ValidationException("A valid email is required", field="email")
        if not password or len(password) < MIN_PASSWORD_LENGTH:
            raise ValidationException(
                f"Password must be at least {MIN_PASSWORD_LENGTH} characters",
                field="password",
            )
        if role not in Role.assignable():
            raise ValidationException(f"Role not assignable: {role.value}", field="role")
        full_name = (full_name or "").strip() or None

        user = await self.session.identities.create_user(email, password)
        try:
            await self.session.profiles.upsert(
                NewProfile(
                    id=user.id,
                    email=email,
                    role=role,
                    tenant_id=tenant_id,
                    full_name=full_name,
                )
            )
        except DependencyException:
            logger.error("Profile write failed for new identity %s", user.id)
            await self._compensate_create(user.id)
            raise

        logger.info(
            "Created identity %s with role %s in hotel %s", user.id, role.value, tenant_id
        )
        return user.id

    async def _compensate_create(self, user_id: str) -> None:
        """Delete an identity whose profile could not be written."""
        try:
            await self.session.identities.delete_user(user_id)
        except DependencyException as exc:
            logger.error(
                "Compensation failed: orphaned identity %s left in identity provider (%s)",
                user_id,
                exc.message,
            )
            return
        logger.info("Compensation removed identity %s after profile failure", user_id)

    async def load_profile(self, user_id: str) -> ProfileResult:
        """Return the profile of user_id or raise ResourceNotFoundException."""
        profile = await self.session.profiles.get_by_id(user_id)
        if profile is None:
            raise ResourceNotFoundException("profile", user_id)
        return profile

    async def delete_identity(self, user_id: str) -> None:
        """Delete grants, then profile, then the identity itself.

        A failure at the last step leaves an identity with no profile and
        no grants, never grants pointing at a missing identity.
        """
        await self.session.grants.delete_for_user(user_id)
        await self.session.profiles.delete(user_id)
        await self.session.identities.delete_user(user_id)
        logger.info("Deleted identity %s", user_id)

    async def list_identities(self, tenant_id: str) -> list[IdentitySummary]:
        """Profiles of the hotel joined with best-effort email lookup."""
        profiles = await self.session.profiles.list_by_tenant(tenant_id)
        emails = await self._resolve_emails({p.id for p in profiles})
        summaries: list[IdentitySummary] = []
        for profile in profiles:
            email = emails.get(profile.id)
            summaries.append(
                IdentitySummary(
                    id=profile.id,
                    username=email or profile.id,
                    full_name=profile.full_name or "",
                    email=email,
                    role=profile.role,
                    status=(
                        IdentityStatus.ACTIVE.value
                        if profile.active
                        else IdentityStatus.INACTIVE.value
                    ),
                )
            )
        return summaries

    async def _resolve_emails(self, user_ids: set[str]) -> dict[str, str]:
        """Page through provider identities until every id is resolved.

        Stops at list_max_pages, on a short page, or on a provider error
        (keeping what was resolved so far).
        """
        emails: dict[str, str] = {}
        remaining = set(user_ids)
        page = 1
        while remaining and page <= self.list_max_pages:
            try:
                users = await self.session.identities.list_users(page, self.list_page_size)
            except DependencyException as exc:
                logger.warning(
                    "Email lookup stopped at page %d: %s; %d identities unresolved",
                    page,
                    exc.message,
                    len(remaining),
                )
                break
            for user in users:
                if user.id in remaining and user.email:
                    emails[user.id] = user.email
                    remaining.discard(user.id)
            if len(users) < self.list_page_size:
                break
            page += 1
        return emails
