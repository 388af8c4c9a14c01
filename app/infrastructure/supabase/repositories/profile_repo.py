"""Store-backed profile repository (implements IProfileRepository)."""

from __future__ import annotations

from typing import Any

from app.application.dtos.identity import NewProfile, ProfileResult
from app.domain.enums import normalize_role
from app.infrastructure.supabase._rest_client import SupabaseRESTClient
from app.infrastructure.supabase.tables import PROFILE_COLUMNS, TABLE_PROFILES


def _to_result(row: dict[str, Any]) -> ProfileResult:
    """Map a profiles row; role always passes through normalize_role."""
    return ProfileResult(
        id=str(row["id"]),
        tenant_id=row.get("hotel_id"),
        role=normalize_role(row.get("role")),
        active=row.get("active") is not False,
        full_name=row.get("full_name"),
    )


class SupabaseProfileRepository:
    """Profile rows; visibility depends on the bearer the client is bound to."""

    def __init__(self, client: SupabaseRESTClient) -> None:
        self._client = client

    async def get_by_id(self, profile_id: str) -> ProfileResult | None:
        row = await (
            self._client.table(TABLE_PROFILES)
            .select(PROFILE_COLUMNS)
            .eq("id", profile_id)
            .maybe_single()
        )
        return _to_result(row) if row else None

    async def upsert(self, profile: NewProfile) -> None:
        await (
            self._client.table(TABLE_PROFILES)
            .upsert(
                [
                    {
                        "id": profile.id,
                        "email": profile.email,
                        "role": profile.role.value,
                        "hotel_id": profile.tenant_id,
                        "active": profile.active,
                        "full_name": profile.full_name,
                    }
                ],
                on_conflict="id",
            )
            .execute()
        )

    async def delete(self, profile_id: str) -> None:
        await self._client.table(TABLE_PROFILES).delete().eq("id", profile_id).execute()

    async def list_by_tenant(self, tenant_id: str) -> list[ProfileResult]:
        rows = await (
            self._client.table(TABLE_PROFILES)
            .select(PROFILE_COLUMNS)
            .eq("hotel_id", tenant_id)
            .order("full_name")
            .execute()
        )
        return [_to_result(row) for row in rows]
