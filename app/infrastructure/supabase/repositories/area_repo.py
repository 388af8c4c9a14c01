"""Store-backed area repository (implements IAreaRepository)."""

from __future__ import annotations

from app.infrastructure.supabase._rest_client import SupabaseRESTClient
from app.infrastructure.supabase.tables import TABLE_AREAS


class SupabaseAreaRepository:
    def __init__(self, client: SupabaseRESTClient) -> None:
        self._client = client

    async def get_ids_in_tenant(self, tenant_id: str, area_ids: list[str]) -> set[str]:
        """Subset of area_ids owned by tenant_id (one filtered read)."""
        if not area_ids:
            return set()
        rows = await (
            self._client.table(TABLE_AREAS)
            .select("id")
            .eq("hotel_id", tenant_id)
            .in_("id", area_ids)
            .execute()
        )
        return {str(row["id"]) for row in rows if row.get("id")}
