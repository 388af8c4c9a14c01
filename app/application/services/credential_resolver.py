"""Credential resolver: bearer header -> CallerContext.

Uses a least-privilege session bound to the caller's own credential to
validate it with the identity provider, then reads the caller's profile.
"""

from __future__ import annotations

from app.application.interfaces.services import ICallerStoreFactory
from app.domain.entities.caller import CallerContext
from app.domain.enums import DenyReason
from app.domain.exceptions import (
    AuthenticationException,
    AuthorizationException,
    DependencyException,
)
from app.shared.telemetry.logging import get_logger

logger = get_logger(__name__)

BEARER_PREFIX = "Bearer "


def extract_bearer_token(authorization: str | None) -> str:
    """Return the token from an Authorization header value.

    Raises:
        AuthenticationException: header missing, wrong scheme or empty token.
    """
    if not authorization or not authorization.startswith(BEARER_PREFIX):
        raise AuthenticationException("Missing bearer token")
    token = authorization[len(BEARER_PREFIX):].strip()
    if not token:
        raise AuthenticationException("Missing bearer token")
    return token


class CredentialResolver:
    """Resolves the authenticated caller and its hotel/role profile."""

    def __init__(self, store_factory: ICallerStoreFactory) -> None:
        self.store_factory = store_factory

    async def resolve(self, authorization: str | None) -> CallerContext:
        """Authenticate the header value and load the caller profile.

        Raises:
            AuthenticationException: missing/invalid credential, lookup failure
                or no profile for the identity.
            AuthorizationException: profile exists but is inactive.
        """
        token = extract_bearer_token(authorization)
        session = self.store_factory.for_token(token)

        try:
            user = await session.identities.get_user(token)
        except DependencyException as exc:
            logger.warning("Credential verification failed: %s", exc.message)
            raise AuthenticationException("Unable to verify credential") from exc
        if user is None:
            logger.warning("Credential rejected by identity provider")
            raise AuthenticationException("Invalid or expired token")

        try:
            profile = await session.profiles.get_by_id(user.id)
        except DependencyException as exc:
            logger.warning("Profile lookup failed for user %s: %s", user.id, exc.message)
            raise AuthenticationException("Unable to load caller profile") from exc
        if profile is None:
            logger.warning("No profile for authenticated user %s", user.id)
            raise AuthenticationException("Caller profile not found")

        if not profile.active:
            logger.info("Inactive caller %s rejected", user.id)
            raise AuthorizationException(reason=DenyReason.INACTIVE.value)

        return CallerContext(
            id=user.id,
            tenant_id=profile.tenant_id,
            role=profile.role,
            active=profile.active,
        )
