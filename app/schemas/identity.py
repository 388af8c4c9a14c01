"""Identity administration API schemas."""

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator


class IdentityCreateRequest(BaseModel):
    """Request body for POST /admin/create-user.

    role is validated by the use case (unknown value -> 400, superadmin -> 403).
    hotel_id defaults to the caller's own hotel.
    """

    full_name: str | None = Field(default=None, max_length=200)
    email: EmailStr
    password: str = Field(..., min_length=8)
    role: str | None = None
    hotel_id: str | None = None

    @field_validator("email", mode="before")
    @classmethod
    def normalize_email(cls, value: object) -> object:
        if isinstance(value, str):
            return value.strip().lower()
        return value


class IdentityCreateResponse(BaseModel):
    ok: bool = True
    user_id: str


class IdentityDeleteRequest(BaseModel):
    """Request body for POST /admin/delete-user."""

    model_config = ConfigDict(str_strip_whitespace=True)

    user_id: str = Field(..., min_length=1)
    hotel_id: str = Field(..., min_length=1)


class OkResponse(BaseModel):
    ok: bool = True


class IdentityListItem(BaseModel):
    """One identity of a hotel (username falls back to the id when no email is known)."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    username: str
    full_name: str
    email: str | None = None
    role: str
    status: str


class IdentityListResponse(BaseModel):
    ok: bool = True
    users: list[IdentityListItem]
