"""Store-backed question repository (implements IQuestionRepository).

Bound to the caller's own token: ordering maintenance needs no elevated trust.
"""

from __future__ import annotations

import math
from typing import Any

from app.application.dtos.ordering import OrderedRecord, OrderUpdate
from app.infrastructure.supabase._rest_client import SupabaseRESTClient
from app.infrastructure.supabase.tables import (
    QUESTION_ORDER_COLUMNS,
    TABLE_AUDIT_QUESTIONS,
    TABLE_AUDIT_SECTIONS,
)
from app.shared.utils.datetime import parse_timestamp


def _parse_order(value: Any) -> float | None:
    """Stored order as a number; fractional values keep their place."""
    if value is None or isinstance(value, bool):
        return None
    try:
        order = float(value)
    except (TypeError, ValueError):
        return None
    if not math.isfinite(order):
        return None
    return int(order) if order.is_integer() else order


class SupabaseQuestionRepository:
    def __init__(self, client: SupabaseRESTClient) -> None:
        self._client = client

    async def list_section_ids(self, template_id: str) -> list[str]:
        rows = await (
            self._client.table(TABLE_AUDIT_SECTIONS)
            .select("id")
            .eq("audit_template_id", template_id)
            .execute()
        )
        return [str(row["id"]) for row in rows if row.get("id")]

    async def list_for_sections(self, section_ids: list[str]) -> list[OrderedRecord]:
        """Every question of the sections, inactive ones included."""
        if not section_ids:
            return []
        rows = await (
            self._client.table(TABLE_AUDIT_QUESTIONS)
            .select(QUESTION_ORDER_COLUMNS)
            .in_("audit_section_id", section_ids)
            .execute()
        )
        return [
            OrderedRecord(
                id=str(row["id"]),
                section_id=str(row.get("audit_section_id") or ""),
                order=_parse_order(row.get("order")),
                created_at=parse_timestamp(row.get("created_at")),
            )
            for row in rows
        ]

    async def upsert_orders(self, updates: list[OrderUpdate]) -> None:
        if not updates:
            return
        await (
            self._client.table(TABLE_AUDIT_QUESTIONS)
            .upsert([{"id": u.id, "order": u.order} for u in updates], on_conflict="id")
            .execute()
        )
