"""Application interfaces (ports): repository and service protocols.

Define contracts for infrastructure implementations (DIP).
No runtime imports from app.infrastructure or app.api.
"""

from app.application.interfaces.repositories import (
    IAccessGrantRepository,
    IAreaRepository,
    IProfileRepository,
    IQuestionRepository,
)
from app.application.interfaces.services import (
    CallerSession,
    ICallerStoreFactory,
    IIdentityProvider,
    IPrivilegedGateway,
    PrivilegedSession,
)

__all__ = [
    "CallerSession",
    "IAccessGrantRepository",
    "IAreaRepository",
    "ICallerStoreFactory",
    "IIdentityProvider",
    "IPrivilegedGateway",
    "IProfileRepository",
    "IQuestionRepository",
    "PrivilegedSession",
]
