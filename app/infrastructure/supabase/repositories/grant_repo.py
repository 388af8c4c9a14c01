"""Store-backed access-grant repository (implements IAccessGrantRepository)."""

from __future__ import annotations

from app.infrastructure.supabase._rest_client import SupabaseRESTClient
from app.infrastructure.supabase.tables import TABLE_USER_AREA_ACCESS


class SupabaseAccessGrantRepository:
    """user_area_access rows. Requires a privileged client (bypasses row rules)."""

    def __init__(self, client: SupabaseRESTClient) -> None:
        self._client = client

    async def list_area_ids(self, user_id: str, tenant_id: str) -> list[str]:
        rows = await (
            self._client.table(TABLE_USER_AREA_ACCESS)
            .select("area_id")
            .eq("user_id", user_id)
            .eq("hotel_id", tenant_id)
            .execute()
        )
        return [str(row["area_id"]) for row in rows if row.get("area_id")]

    async def delete_for_user(self, user_id: str, tenant_id: str | None = None) -> None:
        query = self._client.table(TABLE_USER_AREA_ACCESS).delete().eq("user_id", user_id)
        if tenant_id is not None:
            query = query.eq("hotel_id", tenant_id)
        await query.execute()

    async def insert_many(self, user_id: str, tenant_id: str, area_ids: list[str]) -> None:
        if not area_ids:
            return
        rows = [
            {"user_id": user_id, "area_id": area_id, "hotel_id": tenant_id}
            for area_id in area_ids
        ]
        await self._client.table(TABLE_USER_AREA_ACCESS).insert(rows).execute()

    async def replace_atomic(
        self, function: str, user_id: str, tenant_id: str, area_ids: list[str]
    ) -> None:
        """Delete and insert inside one store-side function (single transaction)."""
        await self._client.rpc(
            function,
            {"p_user_id": user_id, "p_hotel_id": tenant_id, "p_area_ids": area_ids},
        )
