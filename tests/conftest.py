"""Pytest configuration and fixtures for the access-control service.

Backend settings are set in the environment before app.main is imported.
HTTP tests run against app.main:app with the store factories replaced by
in-memory fakes through app.dependency_overrides.
"""

import os

os.environ["SUPABASE_URL"] = "https://backend.test-project.local"
os.environ["SUPABASE_ANON_KEY"] = "test-anon-key"
os.environ["SUPABASE_SERVICE_ROLE_KEY"] = "test-service-role-key"
os.environ.pop("GRANT_REPLACE_RPC", None)

import pytest  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402

from app.api.v1.dependencies import (  # noqa: E402
    get_caller_store_factory,
    get_privileged_gateway,
)
from app.core.config import get_settings  # noqa: E402
from app.core.limiter import limiter  # noqa: E402

get_settings.cache_clear()

from app.main import app  # noqa: E402
from tests.fakes import (  # noqa: E402
    FakeCallerStoreFactory,
    FakePrivilegedGateway,
    InMemoryBackend,
    seeded_backend,
)


@pytest.fixture
def backend() -> InMemoryBackend:
    """Seeded in-memory backend (hotels h1/h2, areas a1-a3 in h1, b1 in h2)."""
    return seeded_backend()


@pytest.fixture
def gateway(backend: InMemoryBackend) -> FakePrivilegedGateway:
    return FakePrivilegedGateway(backend)


@pytest.fixture
async def client(backend: InMemoryBackend, gateway: FakePrivilegedGateway) -> AsyncClient:
    """Async HTTP client against the FastAPI app (ASGI) wired to the in-memory backend."""
    app.dependency_overrides[get_caller_store_factory] = lambda: FakeCallerStoreFactory(
        backend
    )
    app.dependency_overrides[get_privileged_gateway] = lambda: gateway
    limiter.reset()
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()
    get_settings.cache_clear()


def bearer(token: str) -> dict[str, str]:
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def auth_headers():
    """Return a function building Authorization headers for a seeded token."""
    return bearer
