"""Identity provider adapter (implements IIdentityProvider) over SupabaseAuthClient."""

from __future__ import annotations

from typing import Any

from app.application.dtos.identity import ProviderUser
from app.infrastructure.supabase.auth_client import SupabaseAuthClient


def _to_user(data: dict[str, Any]) -> ProviderUser:
    return ProviderUser(id=str(data["id"]), email=data.get("email") or None)


class SupabaseIdentityProvider:
    def __init__(self, auth: SupabaseAuthClient) -> None:
        self._auth = auth

    async def get_user(self, access_token: str) -> ProviderUser | None:
        data = await self._auth.get_user(access_token)
        if not data or not data.get("id"):
            return None
        return _to_user(data)

    async def create_user(self, email: str, password: str) -> ProviderUser:
        return _to_user(await self._auth.admin_create_user(email, password))

    async def delete_user(self, user_id: str) -> None:
        await self._auth.admin_delete_user(user_id)

    async def list_users(self, page: int, per_page: int) -> list[ProviderUser]:
        users = await self._auth.admin_list_users(page, per_page)
        return [_to_user(u) for u in users if u.get("id")]
