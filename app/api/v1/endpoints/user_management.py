"""User management API: identity listing for a hotel."""

from typing import Annotated

from fastapi import APIRouter, Depends, Query, Request

from app.api.v1.dependencies import get_access_admin, get_current_caller
from app.application.use_cases.access_admin import AccessAdminUseCases
from app.core.limiter import limit_reads
from app.domain.entities.caller import CallerContext
from app.schemas.identity import IdentityListItem, IdentityListResponse

router = APIRouter()


@router.get("/users", response_model=IdentityListResponse)
@limit_reads
async def list_users(
    request: Request,
    use_cases: Annotated[AccessAdminUseCases, Depends(get_access_admin)],
    caller: Annotated[CallerContext, Depends(get_current_caller)],
    hotel_id: Annotated[str | None, Query()] = None,
) -> IdentityListResponse:
    """List identities of a hotel (defaults to the caller's hotel).

    Emails are resolved best-effort; unresolved ones show the id as username.
    """
    summaries = await use_cases.list_identities(caller, hotel_id)
    return IdentityListResponse(
        users=[
            IdentityListItem(
                id=s.id,
                username=s.username,
                full_name=s.full_name,
                email=s.email,
                role=s.role.value,
                status=s.status,
            )
            for s in summaries
        ]
    )
