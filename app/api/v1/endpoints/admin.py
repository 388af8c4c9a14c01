"""Admin API: identity lifecycle and area access grants.

Thin routes delegating to AccessAdminUseCases; every route runs
credential resolution and the authorization policy before any
privileged store access.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Request

from app.api.v1.dependencies import get_access_admin, get_current_caller
from app.application.use_cases.access_admin import AccessAdminUseCases
from app.core.limiter import limit_reads, limit_writes
from app.domain.entities.caller import CallerContext
from app.schemas.grant import (
    GrantListResponse,
    GrantQueryRequest,
    GrantReplaceRequest,
    GrantReplaceResponse,
)
from app.schemas.identity import (
    IdentityCreateRequest,
    IdentityCreateResponse,
    IdentityDeleteRequest,
    OkResponse,
)

router = APIRouter()


@router.post("/create-user", response_model=IdentityCreateResponse)
@limit_writes
async def create_user(
    request: Request,
    use_cases: Annotated[AccessAdminUseCases, Depends(get_access_admin)],
    caller: Annotated[CallerContext, Depends(get_current_caller)],
    body: IdentityCreateRequest,
) -> IdentityCreateResponse:
    """Create an identity and its profile in a hotel."""
    user_id = await use_cases.create_identity(
        caller,
        email=body.email,
        password=body.password,
        role=body.role,
        hotel_id=body.hotel_id,
        full_name=body.full_name,
    )
    return IdentityCreateResponse(user_id=user_id)


@router.post("/delete-user", response_model=OkResponse)
@limit_writes
async def delete_user(
    request: Request,
    use_cases: Annotated[AccessAdminUseCases, Depends(get_access_admin)],
    caller: Annotated[CallerContext, Depends(get_current_caller)],
    body: IdentityDeleteRequest,
) -> OkResponse:
    """Delete an identity: grants, then profile, then the credential."""
    await use_cases.delete_identity(caller, user_id=body.user_id, hotel_id=body.hotel_id)
    return OkResponse()


@router.post("/user-area-access/get", response_model=GrantListResponse)
@limit_reads
async def get_user_area_access(
    request: Request,
    use_cases: Annotated[AccessAdminUseCases, Depends(get_access_admin)],
    caller: Annotated[CallerContext, Depends(get_current_caller)],
    body: GrantQueryRequest,
) -> GrantListResponse:
    """Area ids granted to a user in a hotel."""
    area_ids = await use_cases.get_grants(
        caller, user_id=body.user_id, hotel_id=body.hotel_id
    )
    return GrantListResponse(area_ids=area_ids)


@router.post("/user-area-access/set", response_model=GrantReplaceResponse)
@limit_writes
async def set_user_area_access(
    request: Request,
    use_cases: Annotated[AccessAdminUseCases, Depends(get_access_admin)],
    caller: Annotated[CallerContext, Depends(get_current_caller)],
    body: GrantReplaceRequest,
) -> GrantReplaceResponse:
    """Replace the full set of area grants of a user in a hotel."""
    count = await use_cases.set_grants(
        caller,
        user_id=body.user_id,
        hotel_id=body.hotel_id,
        area_ids=body.area_ids,
    )
    return GrantReplaceResponse(count=count)
