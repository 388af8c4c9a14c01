"""Domain layer: entities, enums, and exceptions.

No dependencies on infrastructure or presentation. Used by application
and infrastructure layers.
"""

from app.domain.entities import CallerContext
from app.domain.enums import (
    DenyReason,
    IdentityStatus,
    PrivilegedAction,
    Role,
    normalize_role,
)
from app.domain.exceptions import (
    AccessControlException,
    AuthenticationException,
    AuthorizationException,
    ConfigurationException,
    DependencyException,
    InvalidReferenceException,
    ResourceNotFoundException,
    ValidationException,
)

__all__ = [
    # Entities
    "CallerContext",
    # Enums
    "DenyReason",
    "IdentityStatus",
    "PrivilegedAction",
    "Role",
    "normalize_role",
    # Exceptions
    "AccessControlException",
    "AuthenticationException",
    "AuthorizationException",
    "ConfigurationException",
    "DependencyException",
    "InvalidReferenceException",
    "ResourceNotFoundException",
    "ValidationException",
]
