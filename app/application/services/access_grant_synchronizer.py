"""Access-grant synchronizer: full replace of a user's area grants in a hotel.

validate -> delete existing -> insert new. Validation happens before
any write so an invalid reference never causes a partial change. The
delete and the insert are two store calls; when a store-side replace
function is configured the pair collapses into one atomic call.
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import Any

from app.application.interfaces.repositories import (
    IAccessGrantRepository,
    IAreaRepository,
)
from app.domain.exceptions import DependencyException, InvalidReferenceException
from app.shared.telemetry.logging import get_logger

logger = get_logger(__name__)


def normalize_area_ids(raw: Iterable[Any] | None) -> list[str]:
    """Coerce to strings, drop blanks, collapse duplicates keeping first occurrence."""
    seen: set[str] = set()
    result: list[str] = []
    for value in raw or []:
        if value is None:
            continue
        area_id = str(value).strip()
        if not area_id or area_id in seen:
            continue
        seen.add(area_id)
        result.append(area_id)
    return result


class AccessGrantSynchronizer:
    """Reads and replaces (user, area, hotel) grants."""

    def __init__(
        self,
        areas: IAreaRepository,
        grants: IAccessGrantRepository,
        replace_function: str | None = None,
    ) -> None:
        self.areas = areas
        self.grants = grants
        self.replace_function = replace_function

    async def get_grants(self, user_id: str, tenant_id: str) -> list[str]:
        """Area ids granted to user_id in tenant_id."""
        area_ids = await self.grants.list_area_ids(user_id, tenant_id)
        return [a for a in area_ids if a]

    async def replace_grants(
        self, user_id: str, tenant_id: str, area_ids: Iterable[Any]
    ) -> int:
        """Make the grant set exactly area_ids; return the number now in force.

        An empty list revokes every grant of the user in the hotel.

        Raises:
            InvalidReferenceException: some id is not an area of tenant_id
                (nothing is written).
            DependencyException: a store call failed. When the insert fails
                after the delete succeeded the user is left with no grants
                in the hotel and must retry.
        """
        wanted = normalize_area_ids(area_ids)
        await self._validate(tenant_id, wanted)

        if self.replace_function:
            await self.grants.replace_atomic(
                self.replace_function, user_id, tenant_id, wanted
            )
            logger.info(
                "Replaced grants for user %s in hotel %s atomically: %d areas",
                user_id,
                tenant_id,
                len(wanted),
            )
            return len(wanted)

        await self.grants.delete_for_user(user_id, tenant_id)
        if wanted:
            try:
                await self.grants.insert_many(user_id, tenant_id, wanted)
            except DependencyException as exc:
                logger.error(
                    "Grant insert failed after delete: user %s has no grants in hotel %s",
                    user_id,
                    tenant_id,
                )
                raise DependencyException(
                    "store",
                    "Existing grants were removed but the new grants could not be saved; retry the request",
                    operation="insert_grants",
                    user_id=user_id,
                    hotel_id=tenant_id,
                ) from exc

        logger.info(
            "Replaced grants for user %s in hotel %s: %d areas",
            user_id,
            tenant_id,
            len(wanted),
        )
        return len(wanted)

    async def _validate(self, tenant_id: str, area_ids: list[str]) -> None:
        if not area_ids:
            return
        owned = await self.areas.get_ids_in_tenant(tenant_id, area_ids)
        invalid = [a for a in area_ids if a not in owned]
        if invalid:
            raise InvalidReferenceException("area", invalid, tenant_id)
