"""Application layer: interfaces, services, use cases.

Depends only on domain and protocol definitions (DIP).
Infrastructure implements the interfaces (identity provider, store repositories).
"""

from app.application.interfaces import (
    CallerSession,
    IAccessGrantRepository,
    IAreaRepository,
    ICallerStoreFactory,
    IIdentityProvider,
    IPrivilegedGateway,
    IProfileRepository,
    IQuestionRepository,
    PrivilegedSession,
)
from app.application.services.access_grant_synchronizer import AccessGrantSynchronizer
from app.application.services.credential_resolver import CredentialResolver
from app.application.services.identity_admin_service import IdentityAdminService
from app.application.services.question_order_normalizer import QuestionOrderNormalizer
from app.application.use_cases.access_admin import AccessAdminUseCases

__all__ = [
    "AccessAdminUseCases",
    "AccessGrantSynchronizer",
    "CallerSession",
    "CredentialResolver",
    "IAccessGrantRepository",
    "IAreaRepository",
    "ICallerStoreFactory",
    "IIdentityProvider",
    "IPrivilegedGateway",
    "IProfileRepository",
    "IQuestionRepository",
    "IdentityAdminService",
    "PrivilegedSession",
    "QuestionOrderNormalizer",
]
