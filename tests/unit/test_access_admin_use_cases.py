"""Unit tests for AccessAdminUseCases (policy before privileged session, delete flow)."""

import pytest

from app.application.use_cases.access_admin import AccessAdminUseCases
from app.domain.entities.caller import CallerContext
from app.domain.enums import Role
from app.domain.exceptions import (
    AuthorizationException,
    ResourceNotFoundException,
    ValidationException,
)
from tests.fakes import FakePrivilegedGateway, InMemoryBackend, seeded_backend

ADMIN_H1 = CallerContext(id="u-admin", tenant_id="h1", role=Role.ADMIN, active=True)
ADMIN_H2 = CallerContext(id="u-admin2", tenant_id="h2", role=Role.ADMIN, active=True)
SUPER = CallerContext(id="u-super", tenant_id=None, role=Role.SUPERADMIN, active=True)
MANAGER_H1 = CallerContext(id="u-manager", tenant_id="h1", role=Role.MANAGER, active=True)


@pytest.fixture
def backend() -> InMemoryBackend:
    return seeded_backend()


@pytest.fixture
def gateway(backend: InMemoryBackend) -> FakePrivilegedGateway:
    return FakePrivilegedGateway(backend)


@pytest.fixture
def use_cases(gateway: FakePrivilegedGateway) -> AccessAdminUseCases:
    return AccessAdminUseCases(gateway, list_page_size=100, list_max_pages=5)


async def test_create_defaults_to_caller_hotel_and_auditor(
    use_cases: AccessAdminUseCases, backend: InMemoryBackend
) -> None:
    user_id = await use_cases.create_identity(ADMIN_H1, "n@hotel-mail.com", "longenough")
    assert backend.profiles[user_id]["hotel_id"] == "h1"
    assert backend.profiles[user_id]["role"] == "auditor"


async def test_create_superadmin_is_forbidden_and_session_never_opened(
    use_cases: AccessAdminUseCases, gateway: FakePrivilegedGateway, backend: InMemoryBackend
) -> None:
    """Requesting superadmin is denied by policy before any privileged access."""
    with pytest.raises(AuthorizationException) as exc_info:
        await use_cases.create_identity(
            SUPER, "n@hotel-mail.com", "longenough", role="superadmin", hotel_id="h1"
        )
    assert exc_info.value.reason == "cannot-grant-superadmin"
    assert gateway.opened == []
    assert backend.calls == []


async def test_create_unknown_role_is_validation_error(use_cases: AccessAdminUseCases) -> None:
    with pytest.raises(ValidationException):
        await use_cases.create_identity(ADMIN_H1, "n@hotel-mail.com", "longenough", role="boss")


async def test_create_without_any_hotel_is_validation_error(
    use_cases: AccessAdminUseCases,
) -> None:
    """Superadmin with no own hotel must name one."""
    with pytest.raises(ValidationException) as exc_info:
        await use_cases.create_identity(SUPER, "n@hotel-mail.com", "longenough")
    assert exc_info.value.details == {"field": "hotel_id"}


async def test_create_in_other_hotel_by_admin_is_cross_tenant(
    use_cases: AccessAdminUseCases, gateway: FakePrivilegedGateway
) -> None:
    with pytest.raises(AuthorizationException) as exc_info:
        await use_cases.create_identity(
            ADMIN_H1, "n@hotel-mail.com", "longenough", hotel_id="h2"
        )
    assert exc_info.value.reason == "cross-tenant"
    assert gateway.opened == []


async def test_delete_self_is_forbidden_before_lookup(
    use_cases: AccessAdminUseCases, gateway: FakePrivilegedGateway
) -> None:
    with pytest.raises(AuthorizationException) as exc_info:
        await use_cases.delete_identity(ADMIN_H1, "u-admin", "h1")
    assert exc_info.value.reason == "self-delete"
    assert gateway.opened == []


async def test_delete_missing_target_is_not_found(use_cases: AccessAdminUseCases) -> None:
    with pytest.raises(ResourceNotFoundException):
        await use_cases.delete_identity(ADMIN_H1, "ghost", "h1")


async def test_delete_target_from_other_hotel_is_forbidden(
    use_cases: AccessAdminUseCases, backend: InMemoryBackend
) -> None:
    """Admin names its own hotel but the target lives elsewhere."""
    with pytest.raises(AuthorizationException) as exc_info:
        await use_cases.delete_identity(ADMIN_H1, "u-admin2", "h1")
    assert exc_info.value.reason == "cross-tenant"
    assert "u-admin2" in backend.profiles
    assert backend.calls == []


async def test_admin_cannot_delete_superadmin(
    use_cases: AccessAdminUseCases, backend: InMemoryBackend
) -> None:
    with pytest.raises(AuthorizationException) as exc_info:
        await use_cases.delete_identity(ADMIN_H1, "u-super2", "h1")
    assert exc_info.value.reason == "cannot-delete-superadmin"
    assert backend.calls == []


async def test_superadmin_deletes_across_hotels(
    use_cases: AccessAdminUseCases, backend: InMemoryBackend
) -> None:
    """Superadmin may delete a target whose hotel differs from the requested one."""
    backend.grants |= {("u-admin2", "b1", "h2")}
    await use_cases.delete_identity(SUPER, "u-admin2", "h1")
    assert "u-admin2" not in backend.profiles
    assert backend.grants_for("u-admin2") == set()


async def test_delete_removes_two_grants_before_credential(
    use_cases: AccessAdminUseCases, backend: InMemoryBackend
) -> None:
    """Both grants go before the identity is revoked; none remain afterwards."""
    backend.grants |= {("u-auditor", "a1", "h1"), ("u-auditor", "a2", "h1")}
    await use_cases.delete_identity(ADMIN_H1, "u-auditor", "h1")
    assert backend.calls.index("delete_grants:u-auditor") < backend.calls.index(
        "delete_user:u-auditor"
    )
    assert backend.grants_for("u-auditor") == set()


async def test_manager_cannot_read_or_set_grants(
    use_cases: AccessAdminUseCases, gateway: FakePrivilegedGateway
) -> None:
    for call in (
        use_cases.get_grants(MANAGER_H1, "u-auditor", "h1"),
        use_cases.set_grants(MANAGER_H1, "u-auditor", "h1", ["a1"]),
    ):
        with pytest.raises(AuthorizationException) as exc_info:
            await call
        assert exc_info.value.reason == "insufficient-role"
    assert gateway.opened == []


async def test_set_grants_in_other_hotel_is_forbidden(
    use_cases: AccessAdminUseCases, backend: InMemoryBackend
) -> None:
    with pytest.raises(AuthorizationException):
        await use_cases.set_grants(ADMIN_H2, "u-auditor", "h1", [])
    assert backend.calls == []


async def test_set_grants_for_profile_of_other_hotel_is_forbidden(
    use_cases: AccessAdminUseCases, backend: InMemoryBackend
) -> None:
    """Areas of h1 cannot be granted to a user whose profile lives in h2."""
    with pytest.raises(AuthorizationException) as exc_info:
        await use_cases.set_grants(ADMIN_H1, "u-admin2", "h1", ["a1", "a2"])
    assert exc_info.value.reason == "cross-tenant"
    assert backend.grants_for("u-admin2") == set()


async def test_set_grants_for_unknown_user_is_not_found(
    use_cases: AccessAdminUseCases, backend: InMemoryBackend
) -> None:
    with pytest.raises(ResourceNotFoundException):
        await use_cases.set_grants(ADMIN_H1, "ghost", "h1", ["a1"])
    assert backend.grants_for("ghost") == set()


async def test_get_grants_for_profile_of_other_hotel_is_forbidden(
    use_cases: AccessAdminUseCases, backend: InMemoryBackend
) -> None:
    backend.grants.add(("u-admin2", "a1", "h1"))
    with pytest.raises(AuthorizationException) as exc_info:
        await use_cases.get_grants(ADMIN_H1, "u-admin2", "h1")
    assert exc_info.value.reason == "cross-tenant"


async def test_get_grants_for_unknown_user_is_not_found(
    use_cases: AccessAdminUseCases,
) -> None:
    with pytest.raises(ResourceNotFoundException):
        await use_cases.get_grants(ADMIN_H1, "ghost", "h1")


async def test_superadmin_cannot_grant_across_profile_hotel(
    use_cases: AccessAdminUseCases, backend: InMemoryBackend
) -> None:
    with pytest.raises(AuthorizationException):
        await use_cases.set_grants(SUPER, "u-auditor", "h2", ["b1"])
    assert backend.grants_for("u-auditor") == set()


async def test_list_identities_defaults_to_caller_hotel(
    use_cases: AccessAdminUseCases,
) -> None:
    summaries = await use_cases.list_identities(ADMIN_H2, None)
    assert [s.id for s in summaries] == ["u-admin2"]
