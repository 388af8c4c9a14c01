"""Pydantic request/response schemas for the API."""

from app.schemas.grant import (
    GrantListResponse,
    GrantQueryRequest,
    GrantReplaceRequest,
    GrantReplaceResponse,
)
from app.schemas.health import HealthResponse
from app.schemas.identity import (
    IdentityCreateRequest,
    IdentityCreateResponse,
    IdentityDeleteRequest,
    IdentityListItem,
    IdentityListResponse,
    OkResponse,
)
from app.schemas.ordering import NormalizeOrderResponse

__all__ = [
    "GrantListResponse",
    "GrantQueryRequest",
    "GrantReplaceRequest",
    "GrantReplaceResponse",
    "HealthResponse",
    "IdentityCreateRequest",
    "IdentityCreateResponse",
    "IdentityDeleteRequest",
    "IdentityListItem",
    "IdentityListResponse",
    "NormalizeOrderResponse",
    "OkResponse",
]
