"""Area access grant API schemas."""

from pydantic import BaseModel, ConfigDict, Field


class GrantQueryRequest(BaseModel):
    """Request body for POST /admin/user-area-access/get."""

    model_config = ConfigDict(str_strip_whitespace=True)

    user_id: str = Field(..., min_length=1)
    hotel_id: str = Field(..., min_length=1)


class GrantReplaceRequest(GrantQueryRequest):
    """Request body for POST /admin/user-area-access/set.

    area_ids is the complete desired set; an empty list revokes all grants.
    Numeric ids are accepted and coerced to strings.
    """

    area_ids: list[str | int]


class GrantListResponse(BaseModel):
    ok: bool = True
    area_ids: list[str]


class GrantReplaceResponse(BaseModel):
    ok: bool = True
    count: int = Field(..., ge=0, description="Grants in force after the replace")
