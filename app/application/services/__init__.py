"""Application services: credential resolution, authorization policy, identity admin, grants, ordering."""

from app.application.services.access_grant_synchronizer import (
    AccessGrantSynchronizer,
    normalize_area_ids,
)
from app.application.services.authorization_policy import (
    AuthorizationTarget,
    PolicyDecision,
    authorize,
)
from app.application.services.credential_resolver import (
    CredentialResolver,
    extract_bearer_token,
)
from app.application.services.identity_admin_service import IdentityAdminService
from app.application.services.question_order_normalizer import (
    QuestionOrderNormalizer,
    plan_order_updates,
)

__all__ = [
    "AccessGrantSynchronizer",
    "AuthorizationTarget",
    "CredentialResolver",
    "IdentityAdminService",
    "PolicyDecision",
    "QuestionOrderNormalizer",
    "authorize",
    "extract_bearer_token",
    "normalize_area_ids",
    "plan_order_updates",
]
