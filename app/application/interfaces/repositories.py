"""Repository interfaces (ports) for the application layer.

Protocols define contracts for infrastructure implementations (DIP).
Implementations translate store failures into DependencyException so
services never see transport errors.
"""

from __future__ import annotations

from typing import Protocol

from app.application.dtos.identity import NewProfile, ProfileResult
from app.application.dtos.ordering import OrderedRecord, OrderUpdate


class IProfileRepository(Protocol):
    """Protocol for profile rows (one per identity)."""

    async def get_by_id(self, profile_id: str) -> ProfileResult | None:
        """Return the profile or None when no row exists."""
        ...

    async def upsert(self, profile: NewProfile) -> None:
        """Insert or update the profile keyed by id."""
        ...

    async def delete(self, profile_id: str) -> None:
        """Delete the profile row (no-op when missing)."""
        ...

    async def list_by_tenant(self, tenant_id: str) -> list[ProfileResult]:
        """Return profiles of a hotel ordered by full_name."""
        ...


class IAreaRepository(Protocol):
    """Protocol for tenant-owned areas (grantable resources)."""

    async def get_ids_in_tenant(self, tenant_id: str, area_ids: list[str]) -> set[str]:
        """Return the subset of area_ids that belong to tenant_id."""
        ...


class IAccessGrantRepository(Protocol):
    """Protocol for user_area_access rows (user, area, hotel)."""

    async def list_area_ids(self, user_id: str, tenant_id: str) -> list[str]:
        """Return area ids granted to the user within the hotel."""
        ...

    async def delete_for_user(self, user_id: str, tenant_id: str | None = None) -> None:
        """Delete the user's grants; all hotels when tenant_id is None."""
        ...

    async def insert_many(self, user_id: str, tenant_id: str, area_ids: list[str]) -> None:
        """Insert one grant row per area id in a single batch."""
        ...

    async def replace_atomic(
        self, function: str, user_id: str, tenant_id: str, area_ids: list[str]
    ) -> None:
        """Replace the grant set with one store-side function call."""
        ...


class IQuestionRepository(Protocol):
    """Protocol for audit questions grouped by section (caller-scoped access)."""

    async def list_section_ids(self, template_id: str) -> list[str]:
        """Return section ids belonging to the template."""
        ...

    async def list_for_sections(self, section_ids: list[str]) -> list[OrderedRecord]:
        """Return every question (inactive included) of the given sections."""
        ...

    async def upsert_orders(self, updates: list[OrderUpdate]) -> None:
        """Write new order values in one batched insert-or-update by id."""
        ...
