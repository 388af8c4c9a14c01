"""DTOs for question order normalization."""

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class OrderedRecord:
    """A question row as loaded for re-sequencing.

    order and created_at may be missing in stored data.
    """

    id: str
    section_id: str
    order: float | None
    created_at: datetime | None


@dataclass(frozen=True)
class OrderUpdate:
    """New order value for one question."""

    id: str
    order: int
