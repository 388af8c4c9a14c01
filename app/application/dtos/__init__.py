"""Application DTOs (no transport dependency)."""

from app.application.dtos.identity import (
    IdentitySummary,
    NewProfile,
    ProfileResult,
    ProviderUser,
)
from app.application.dtos.ordering import OrderedRecord, OrderUpdate

__all__ = [
    "IdentitySummary",
    "NewProfile",
    "OrderUpdate",
    "OrderedRecord",
    "ProfileResult",
    "ProviderUser",
]
