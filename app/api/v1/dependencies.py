"""Presentation-layer dependency injection (composition root).

Provides FastAPI Depends() for the caller, the privileged gateway and
the application use cases. All of them are built from infrastructure
implementations here; routes depend only on these dependencies, not on
infra directly. Tests replace them via app.dependency_overrides.

Privileged routes declare the use-case dependency before the caller
dependency so a missing service-role key answers 500 before the
credential is even looked at.
"""

from __future__ import annotations

from typing import Annotated

import httpx
from fastapi import Depends, Header, Request

from app.application.interfaces.services import (
    CallerSession,
    ICallerStoreFactory,
    IPrivilegedGateway,
)
from app.application.services.credential_resolver import (
    CredentialResolver,
    extract_bearer_token,
)
from app.application.services.question_order_normalizer import QuestionOrderNormalizer
from app.application.use_cases.access_admin import AccessAdminUseCases
from app.core.config import Settings, get_settings
from app.domain.entities.caller import CallerContext
from app.infrastructure.supabase.client import CallerStoreFactory, PrivilegedGateway


def get_backend_http_client(request: Request) -> httpx.AsyncClient | None:
    """Shared outbound HTTP client created in lifespan."""
    return getattr(request.app.state, "backend_http_client", None)


def get_caller_store_factory(
    settings: Annotated[Settings, Depends(get_settings)],
    http_client: Annotated[httpx.AsyncClient | None, Depends(get_backend_http_client)],
) -> ICallerStoreFactory:
    """Least-privilege store sessions bound to the caller token."""
    return CallerStoreFactory(settings, http_client)


def get_privileged_gateway(
    settings: Annotated[Settings, Depends(get_settings)],
    http_client: Annotated[httpx.AsyncClient | None, Depends(get_backend_http_client)],
) -> IPrivilegedGateway:
    """Privileged gateway; raises ConfigurationException (500) without a service-role key."""
    return PrivilegedGateway(settings, http_client)


def get_credential_resolver(
    store_factory: Annotated[ICallerStoreFactory, Depends(get_caller_store_factory)],
) -> CredentialResolver:
    return CredentialResolver(store_factory)


async def get_current_caller(
    resolver: Annotated[CredentialResolver, Depends(get_credential_resolver)],
    authorization: Annotated[str | None, Header()] = None,
) -> CallerContext:
    """Authenticated caller with hotel and role (401 / 403 on failure)."""
    return await resolver.resolve(authorization)


def get_access_admin(
    gateway: Annotated[IPrivilegedGateway, Depends(get_privileged_gateway)],
    settings: Annotated[Settings, Depends(get_settings)],
) -> AccessAdminUseCases:
    """Identity and grant workflows (composition root)."""
    return AccessAdminUseCases(
        gateway,
        list_page_size=settings.identity_list_page_size,
        list_max_pages=settings.identity_list_max_pages,
        grant_replace_function=settings.grant_replace_rpc,
    )


def get_caller_session(
    caller: Annotated[CallerContext, Depends(get_current_caller)],
    store_factory: Annotated[ICallerStoreFactory, Depends(get_caller_store_factory)],
    authorization: Annotated[str | None, Header()] = None,
) -> CallerSession:
    """Store session of an authenticated caller (no elevated trust)."""
    return store_factory.for_token(extract_bearer_token(authorization))


def get_question_order_normalizer(
    session: Annotated[CallerSession, Depends(get_caller_session)],
) -> QuestionOrderNormalizer:
    return QuestionOrderNormalizer(session.questions)
