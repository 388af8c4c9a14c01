"""Unit tests for the store and auth HTTP clients (httpx.MockTransport, no network)."""

import json

import httpx
import pytest

from app.application.dtos.identity import NewProfile
from app.application.dtos.ordering import OrderUpdate
from app.domain.enums import Role
from app.infrastructure.exceptions import IdentityProviderError, StoreError
from app.infrastructure.supabase._rest_client import SupabaseRESTClient
from app.infrastructure.supabase.auth_client import SupabaseAuthClient
from app.infrastructure.supabase.repositories import (
    SupabaseAccessGrantRepository,
    SupabaseAreaRepository,
    SupabaseIdentityProvider,
    SupabaseProfileRepository,
    SupabaseQuestionRepository,
)

BASE_URL = "https://store.hotel-mail.com/"


class Recorder:
    """MockTransport handler that records requests and replays canned responses."""

    def __init__(self, *responses: httpx.Response) -> None:
        self.requests: list[httpx.Request] = []
        self._responses = list(responses)

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self._responses:
            return self._responses.pop(0)
        return httpx.Response(204)


def _rest(recorder: Recorder, bearer: str = "caller-token") -> SupabaseRESTClient:
    http = httpx.AsyncClient(transport=httpx.MockTransport(recorder))
    return SupabaseRESTClient(BASE_URL, "anon-key", bearer, http_client=http)


def _auth(recorder: Recorder, api_key: str = "service-key") -> SupabaseAuthClient:
    http = httpx.AsyncClient(transport=httpx.MockTransport(recorder))
    return SupabaseAuthClient(BASE_URL, api_key, http_client=http)


async def test_select_builds_filters_and_headers() -> None:
    """Filters become PostgREST query params; api key and bearer travel as headers."""
    recorder = Recorder(httpx.Response(200, json=[{"id": "a1"}]))
    rows = await (
        _rest(recorder)
        .table("areas")
        .select("id, name")
        .eq("hotel_id", "h1")
        .in_("id", ["a1", 'we"ird,id'])
        .order("name", ascending=False)
        .limit(5)
        .execute()
    )
    assert rows == [{"id": "a1"}]
    request = recorder.requests[0]
    assert request.method == "GET"
    assert request.url.path == "/rest/v1/areas"
    params = request.url.params
    assert params["select"] == "id,name"
    assert params["hotel_id"] == "eq.h1"
    assert params["id"] == 'in.("a1","we\\"ird,id")'
    assert params["order"] == "name.desc"
    assert params["limit"] == "5"
    assert request.headers["apikey"] == "anon-key"
    assert request.headers["authorization"] == "Bearer caller-token"


async def test_filter_values_render_null_and_booleans() -> None:
    recorder = Recorder(httpx.Response(200, json=[]))
    await _rest(recorder).table("profiles").select().eq("active", False).eq("hotel_id", None).execute()
    params = recorder.requests[0].url.params
    assert params["active"] == "eq.false"
    assert params["hotel_id"] == "eq.null"


async def test_upsert_sets_conflict_target_and_merge_preference() -> None:
    recorder = Recorder(httpx.Response(201))
    rows = await _rest(recorder).table("audit_questions").upsert([{"id": "q1", "order": 2}]).execute()
    assert rows == []
    request = recorder.requests[0]
    assert request.method == "POST"
    assert request.url.params["on_conflict"] == "id"
    assert request.headers["prefer"] == "resolution=merge-duplicates,return=minimal"
    assert json.loads(request.content) == [{"id": "q1", "order": 2}]


async def test_delete_is_minimal_and_filtered() -> None:
    recorder = Recorder(httpx.Response(204))
    await _rest(recorder).table("user_area_access").delete().eq("user_id", "u1").execute()
    request = recorder.requests[0]
    assert request.method == "DELETE"
    assert request.url.params["user_id"] == "eq.u1"
    assert request.headers["prefer"] == "return=minimal"


async def test_error_status_raises_store_error() -> None:
    """Non-2xx becomes StoreError carrying the status and the store's message."""
    recorder = Recorder(httpx.Response(500, json={"message": "boom"}))
    with pytest.raises(StoreError) as exc_info:
        await _rest(recorder).table("areas").select().execute()
    assert exc_info.value.status_code == 500
    assert "boom" in exc_info.value.message
    assert exc_info.value.details["resource"] == "areas"


async def test_transport_error_raises_store_error() -> None:
    def broken(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("refused", request=request)

    http = httpx.AsyncClient(transport=httpx.MockTransport(broken))
    client = SupabaseRESTClient(BASE_URL, "anon-key", "tok", http_client=http)
    with pytest.raises(StoreError):
        await client.table("areas").select().execute()


async def test_maybe_single_rejects_multiple_rows() -> None:
    recorder = Recorder(httpx.Response(200, json=[{"id": "1"}, {"id": "2"}]))
    with pytest.raises(StoreError):
        await _rest(recorder).table("profiles").select().maybe_single()


async def test_rpc_posts_named_params() -> None:
    recorder = Recorder(httpx.Response(200, json=2))
    repo = SupabaseAccessGrantRepository(_rest(recorder, bearer="service-key"))
    await repo.replace_atomic("replace_user_area_access", "u1", "h1", ["a1", "a2"])
    request = recorder.requests[0]
    assert request.url.path == "/rest/v1/rpc/replace_user_area_access"
    assert json.loads(request.content) == {
        "p_user_id": "u1",
        "p_hotel_id": "h1",
        "p_area_ids": ["a1", "a2"],
    }


async def test_profile_repository_maps_rows_through_role_normalization() -> None:
    """Unknown role strings read back as auditor; missing active reads as active."""
    recorder = Recorder(
        httpx.Response(
            200, json=[{"id": "u1", "hotel_id": "h1", "role": " Manager ", "full_name": "A"}]
        ),
        httpx.Response(200, json=[{"id": "u2", "hotel_id": "h1", "role": "owner", "active": False}]),
    )
    repo = SupabaseProfileRepository(_rest(recorder))
    first = await repo.get_by_id("u1")
    second = await repo.get_by_id("u2")
    assert first.role == Role.MANAGER
    assert first.active is True
    assert second.role == Role.AUDITOR
    assert second.active is False
    assert recorder.requests[0].url.params["select"] == "id,hotel_id,role,active,full_name"


async def test_profile_repository_missing_row_is_none() -> None:
    recorder = Recorder(httpx.Response(200, json=[]))
    assert await SupabaseProfileRepository(_rest(recorder)).get_by_id("ghost") is None


async def test_profile_upsert_body() -> None:
    recorder = Recorder(httpx.Response(201))
    await SupabaseProfileRepository(_rest(recorder)).upsert(
        NewProfile(
            id="u1",
            email="a@hotel-mail.com",
            role=Role.AUDITOR,
            tenant_id="h1",
            active=True,
            full_name=None,
        )
    )
    body = json.loads(recorder.requests[0].content)
    assert body == [
        {
            "id": "u1",
            "email": "a@hotel-mail.com",
            "role": "auditor",
            "hotel_id": "h1",
            "active": True,
            "full_name": None,
        }
    ]


async def test_area_repository_empty_input_makes_no_request() -> None:
    recorder = Recorder()
    assert await SupabaseAreaRepository(_rest(recorder)).get_ids_in_tenant("h1", []) == set()
    assert recorder.requests == []


async def test_grant_delete_scoped_to_hotel_only_when_given() -> None:
    recorder = Recorder(httpx.Response(204), httpx.Response(204))
    repo = SupabaseAccessGrantRepository(_rest(recorder))
    await repo.delete_for_user("u1", "h1")
    await repo.delete_for_user("u1")
    assert recorder.requests[0].url.params["hotel_id"] == "eq.h1"
    assert "hotel_id" not in recorder.requests[1].url.params


async def test_question_repository_parses_order_and_timestamps() -> None:
    recorder = Recorder(
        httpx.Response(
            200,
            json=[
                {"id": "q1", "audit_section_id": "s1", "order": "3", "created_at": "2024-01-01T00:00:00Z"},
                {"id": "q2", "audit_section_id": "s1", "order": None, "created_at": "garbage"},
            ],
        )
    )
    records = await SupabaseQuestionRepository(_rest(recorder)).list_for_sections(["s1"])
    assert records[0].order == 3
    assert records[0].created_at.year == 2024
    assert records[1].order is None
    assert records[1].created_at is None


async def test_question_repository_keeps_fractional_order() -> None:
    """A stored 2.5 stays between 2 and 3 instead of tying with 2."""
    recorder = Recorder(
        httpx.Response(
            200,
            json=[
                {"id": "q1", "audit_section_id": "s1", "order": 2.5, "created_at": None},
                {"id": "q2", "audit_section_id": "s1", "order": "2.0", "created_at": None},
            ],
        )
    )
    records = await SupabaseQuestionRepository(_rest(recorder)).list_for_sections(["s1"])
    assert records[0].order == 2.5
    assert records[1].order == 2
    assert isinstance(records[1].order, int)


async def test_question_repository_upsert_orders_skips_empty() -> None:
    recorder = Recorder()
    await SupabaseQuestionRepository(_rest(recorder)).upsert_orders([])
    assert recorder.requests == []
    await SupabaseQuestionRepository(_rest(recorder)).upsert_orders([OrderUpdate("q1", 1)])
    assert json.loads(recorder.requests[0].content) == [{"id": "q1", "order": 1}]


async def test_auth_get_user_rejected_token_is_none() -> None:
    recorder = Recorder(httpx.Response(401, json={"msg": "invalid JWT"}))
    provider = SupabaseIdentityProvider(_auth(recorder, api_key="anon-key"))
    assert await provider.get_user("bad-token") is None
    request = recorder.requests[0]
    assert request.url.path == "/auth/v1/user"
    assert request.headers["authorization"] == "Bearer bad-token"
    assert request.headers["apikey"] == "anon-key"


async def test_auth_get_user_server_error_raises() -> None:
    recorder = Recorder(httpx.Response(503, text="unavailable"))
    with pytest.raises(IdentityProviderError) as exc_info:
        await SupabaseIdentityProvider(_auth(recorder)).get_user("tok")
    assert exc_info.value.details["operation"] == "get_user"


async def test_auth_admin_create_user() -> None:
    recorder = Recorder(httpx.Response(200, json={"id": "new-1", "email": "a@hotel-mail.com"}))
    user = await SupabaseIdentityProvider(_auth(recorder)).create_user("a@hotel-mail.com", "longenough")
    assert user.id == "new-1"
    request = recorder.requests[0]
    assert request.url.path == "/auth/v1/admin/users"
    assert request.headers["authorization"] == "Bearer service-key"
    assert json.loads(request.content) == {
        "email": "a@hotel-mail.com",
        "password": "longenough",
        "email_confirm": True,
    }


async def test_auth_admin_create_user_without_id_raises() -> None:
    recorder = Recorder(httpx.Response(200, json={}))
    with pytest.raises(IdentityProviderError):
        await SupabaseIdentityProvider(_auth(recorder)).create_user("a@hotel-mail.com", "longenough")


async def test_auth_admin_list_users_page() -> None:
    recorder = Recorder(
        httpx.Response(200, json={"users": [{"id": "u1", "email": "x@hotel-mail.com"}, {"email": "noid"}]})
    )
    users = await SupabaseIdentityProvider(_auth(recorder)).list_users(2, 50)
    assert [u.id for u in users] == ["u1"]
    params = recorder.requests[0].url.params
    assert params["page"] == "2"
    assert params["per_page"] == "50"


async def test_auth_admin_delete_user_quotes_id() -> None:
    recorder = Recorder(httpx.Response(200))
    await SupabaseIdentityProvider(_auth(recorder)).delete_user("a/b")
    assert recorder.requests[0].url.raw_path == b"/auth/v1/admin/users/a%2Fb"
