"""Store session factories: caller-bound and privileged.

CallerStoreFactory binds the anon key plus the caller's own token, so
row-level rules of the store apply. PrivilegedGateway holds the
service-role key and is the only place that builds a client with it;
it does so only for an allowed PolicyDecision.
"""

import httpx

from app.application.interfaces.services import CallerSession, PrivilegedSession
from app.application.services.authorization_policy import PolicyDecision
from app.core.config import Settings
from app.domain.exceptions import AuthorizationException, ConfigurationException
from app.infrastructure.supabase._rest_client import SupabaseRESTClient
from app.infrastructure.supabase.auth_client import SupabaseAuthClient
from app.infrastructure.supabase.repositories import (
    SupabaseAccessGrantRepository,
    SupabaseAreaRepository,
    SupabaseIdentityProvider,
    SupabaseProfileRepository,
    SupabaseQuestionRepository,
)
from app.shared.telemetry.logging import get_logger

logger = get_logger(__name__)


class CallerStoreFactory:
    """Builds least-privilege sessions bound to a caller token (implements ICallerStoreFactory)."""

    def __init__(self, settings: Settings, http_client: httpx.AsyncClient | None = None) -> None:
        self._url = settings.supabase_url
        self._anon_key = settings.supabase_anon_key.get_secret_value()
        self._timeout = settings.http_timeout_seconds
        self._http = http_client

    def for_token(self, access_token: str) -> CallerSession:
        rest = SupabaseRESTClient(
            self._url,
            self._anon_key,
            access_token,
            http_client=self._http,
            timeout=self._timeout,
        )
        auth = SupabaseAuthClient(
            self._url, self._anon_key, http_client=self._http, timeout=self._timeout
        )
        return CallerSession(
            identities=SupabaseIdentityProvider(auth),
            profiles=SupabaseProfileRepository(rest),
            questions=SupabaseQuestionRepository(rest),
        )


class PrivilegedGateway:
    """Hands out service-role sessions for allowed decisions (implements IPrivilegedGateway).

    Construction fails with ConfigurationException when the service-role
    key is not configured; there is no fallback to anon access.
    """

    def __init__(self, settings: Settings, http_client: httpx.AsyncClient | None = None) -> None:
        if not settings.has_service_role_key:
            raise ConfigurationException("SUPABASE_SERVICE_ROLE_KEY")
        self._url = settings.supabase_url
        self._service_key = settings.supabase_service_role_key.get_secret_value()
        self._timeout = settings.http_timeout_seconds
        self._http = http_client

    def open(self, decision: PolicyDecision) -> PrivilegedSession:
        """Return a privileged session; refuse anything but an allowed decision."""
        if not isinstance(decision, PolicyDecision) or not decision.allowed:
            reason = getattr(decision, "reason", None)
            raise AuthorizationException(
                reason=reason.value if reason else None,
                message="Privileged access requires an allowed policy decision",
            )
        logger.debug(
            "Opening privileged session for caller %s (%s)",
            decision.caller_id,
            decision.action.value,
        )
        rest = SupabaseRESTClient(
            self._url,
            self._service_key,
            self._service_key,
            http_client=self._http,
            timeout=self._timeout,
        )
        auth = SupabaseAuthClient(
            self._url, self._service_key, http_client=self._http, timeout=self._timeout
        )
        return PrivilegedSession(
            identities=SupabaseIdentityProvider(auth),
            profiles=SupabaseProfileRepository(rest),
            areas=SupabaseAreaRepository(rest),
            grants=SupabaseAccessGrantRepository(rest),
        )
