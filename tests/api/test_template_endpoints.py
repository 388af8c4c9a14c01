"""Template endpoint tests: question order normalization over HTTP."""

from collections.abc import Callable
from datetime import UTC, datetime, timedelta

import pytest
from httpx import AsyncClient

from tests.fakes import InMemoryBackend

AuthHeaders = Callable[[str], dict[str, str]]

T0 = datetime(2024, 1, 1, tzinfo=UTC)


@pytest.fixture
def template(backend: InMemoryBackend) -> str:
    backend.sections = {"s1": "tpl-1", "s2": "tpl-1"}
    backend.add_question("A", "s1", None, T0)
    backend.add_question("B", "s1", 2, T0 + timedelta(minutes=1))
    backend.add_question("C", "s1", 2, T0 + timedelta(minutes=2))
    backend.add_question("D", "s2", 4, T0)
    return "tpl-1"


async def test_normalize_question_order(
    client: AsyncClient, backend: InMemoryBackend, template: str, auth_headers: AuthHeaders
) -> None:
    """Any authenticated caller may normalize; rows are re-sequenced per section."""
    response = await client.post(
        f"/api/v1/templates/{template}/normalize-question-order",
        headers=auth_headers("tok-auditor"),
    )
    assert response.status_code == 200
    assert response.json() == {"ok": True, "updated": 3}
    assert {q: row["order"] for q, row in backend.questions.items()} == {
        "A": 3,
        "B": 1,
        "C": 2,
        "D": 1,
    }


async def test_normalize_twice_second_run_updates_nothing(
    client: AsyncClient, template: str, auth_headers: AuthHeaders
) -> None:
    url = f"/api/v1/templates/{template}/normalize-question-order"
    await client.post(url, headers=auth_headers("tok-manager"))
    response = await client.post(url, headers=auth_headers("tok-manager"))
    assert response.json()["updated"] == 0


async def test_normalize_without_auth_returns_401(
    client: AsyncClient, template: str
) -> None:
    response = await client.post(f"/api/v1/templates/{template}/normalize-question-order")
    assert response.status_code == 401


async def test_normalize_store_failure_returns_500(
    client: AsyncClient, backend: InMemoryBackend, template: str, auth_headers: AuthHeaders
) -> None:
    backend.fail_on.add("upsert_orders")
    response = await client.post(
        f"/api/v1/templates/{template}/normalize-question-order",
        headers=auth_headers("tok-admin"),
    )
    assert response.status_code == 500
    assert response.json()["error"] == "DEPENDENCY_ERROR"
