"""Question order normalization for a template.

Re-sequences questions inside each section to 1..N, keeping their
existing relative order. Sort key per section:

- explicit order ascending, missing order after every real value
- created_at ascending, missing created_at as the earliest
- id ascending

Only rows whose order changes are written, in one batched upsert, so a
second run with no edits in between writes nothing.
"""

from __future__ import annotations

from collections.abc import Iterable
from datetime import datetime

from app.application.dtos.ordering import OrderedRecord, OrderUpdate
from app.application.interfaces.repositories import IQuestionRepository
from app.shared.telemetry.logging import get_logger

logger = get_logger(__name__)


def _timestamp(value: datetime | None) -> float:
    return value.timestamp() if value is not None else 0.0


def _sort_key(record: OrderedRecord) -> tuple[bool, float, float, str]:
    return (
        record.order is None,
        record.order if record.order is not None else 0,
        _timestamp(record.created_at),
        record.id,
    )


def plan_order_updates(records: Iterable[OrderedRecord]) -> list[OrderUpdate]:
    """Return the updates that make every section's order dense from 1."""
    by_section: dict[str, list[OrderedRecord]] = {}
    for record in records:
        by_section.setdefault(record.section_id, []).append(record)

    updates: list[OrderUpdate] = []
    for section_id in sorted(by_section):
        ordered = sorted(by_section[section_id], key=_sort_key)
        for position, record in enumerate(ordered, start=1):
            if record.order != position:
                updates.append(OrderUpdate(id=record.id, order=position))
    return updates


class QuestionOrderNormalizer:
    """Runs plan_order_updates over a template using the caller's own access."""

    def __init__(self, questions: IQuestionRepository) -> None:
        self.questions = questions

    async def normalize_template(self, template_id: str) -> int:
        """Normalize every section of template_id; return rows changed."""
        section_ids = await self.questions.list_section_ids(template_id)
        if not section_ids:
            return 0
        records = await self.questions.list_for_sections(section_ids)
        updates = plan_order_updates(records)
        if updates:
            await self.questions.upsert_orders(updates)
        logger.info(
            "Normalized question order for template %s: %d updated",
            template_id,
            len(updates),
        )
        return len(updates)
