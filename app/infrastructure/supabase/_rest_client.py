"""Thin PostgREST client for the hosted store (no supabase SDK).

Every client is bound to an api key and a bearer: the caller's own
token for least-privilege access (row-level rules apply) or the
service-role key for elevated trust. All HTTP calls use
httpx.AsyncClient so they do not block the event loop.
"""

from __future__ import annotations

import json
from collections.abc import Iterable
from typing import Any

import httpx

from app.infrastructure.exceptions import StoreError


def _format_value(value: Any) -> str:
    """Render a filter value the way PostgREST expects it in the query string."""
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def _quote_list_item(value: Any) -> str:
    """Double-quote a value inside in.(...) so commas and parentheses are safe."""
    text = _format_value(value).replace("\\", "\\\\").replace('"', '\\"')
    return f'"{text}"'


def _error_message(resp: httpx.Response) -> str:
    """Best-effort message from a PostgREST error body."""
    try:
        body = resp.json()
    except ValueError:
        return resp.text or resp.reason_phrase
    if isinstance(body, dict):
        return str(body.get("message") or body.get("error") or body)
    return str(body)


async def _request_async(
    client: httpx.AsyncClient,
    method: str,
    url: str,
    *,
    headers: dict[str, str],
    params: list[tuple[str, str]] | None = None,
    body: Any = None,
    resource: str | None = None,
) -> Any:
    """Perform an HTTP request to the store. Non-2xx and transport errors raise StoreError."""
    try:
        resp = await client.request(
            method,
            url,
            headers=headers,
            params=params,
            json=body,
        )
    except httpx.HTTPError as exc:
        raise StoreError(
            f"{exc.__class__.__name__} contacting store", resource=resource
        ) from exc
    if resp.status_code >= 400:
        raise StoreError(
            _error_message(resp), status_code=resp.status_code, resource=resource
        )
    raw = resp.content
    return json.loads(raw.decode()) if raw else None


class _Query:
    """Fluent query builder for one table; matches the supabase-js call style.

    Start with select(), delete(), insert() or upsert(), add filters,
    then await execute() (or maybe_single() for reads).
    """

    def __init__(self, client: SupabaseRESTClient, table: str) -> None:
        self._client = client
        self._table = table
        self._method = "GET"
        self._params: list[tuple[str, str]] = []
        self._body: Any = None
        self._prefer: list[str] = []

    def select(self, columns: str = "*") -> _Query:
        self._params.append(("select", "".join(columns.split())))
        return self

    def eq(self, column: str, value: Any) -> _Query:
        self._params.append((column, f"eq.{_format_value(value)}"))
        return self

    def in_(self, column: str, values: Iterable[Any]) -> _Query:
        items = ",".join(_quote_list_item(v) for v in values)
        self._params.append((column, f"in.({items})"))
        return self

    def order(self, column: str, ascending: bool = True) -> _Query:
        direction = "asc" if ascending else "desc"
        self._params.append(("order", f"{column}.{direction}"))
        return self

    def limit(self, n: int) -> _Query:
        self._params.append(("limit", str(n)))
        return self

    def delete(self) -> _Query:
        self._method = "DELETE"
        self._prefer.append("return=minimal")
        return self

    def insert(self, rows: list[dict[str, Any]]) -> _Query:
        self._method = "POST"
        self._body = rows
        self._prefer.append("return=minimal")
        return self

    def upsert(self, rows: list[dict[str, Any]], on_conflict: str = "id") -> _Query:
        """Insert rows, updating existing ones that collide on on_conflict."""
        self._method = "POST"
        self._body = rows
        self._params.append(("on_conflict", on_conflict))
        self._prefer.extend(["resolution=merge-duplicates", "return=minimal"])
        return self

    async def execute(self) -> list[dict[str, Any]]:
        """Run the request; return rows for reads, [] for writes."""
        headers = self._client.headers()
        if self._prefer:
            headers["Prefer"] = ",".join(self._prefer)
        out = await _request_async(
            self._client._http,
            self._method,
            f"{self._client.rest_url}/{self._table}",
            headers=headers,
            params=self._params,
            body=self._body,
            resource=self._table,
        )
        if out is None:
            return []
        return out if isinstance(out, list) else [out]

    async def maybe_single(self) -> dict[str, Any] | None:
        """Run a read expected to match at most one row."""
        rows = await self.execute()
        if len(rows) > 1:
            raise StoreError(
                f"expected at most one row, got {len(rows)}", resource=self._table
            )
        return rows[0] if rows else None


class SupabaseRESTClient:
    """Lightweight PostgREST client bound to one api key and one bearer."""

    def __init__(
        self,
        base_url: str,
        api_key: str,
        bearer: str,
        *,
        http_client: httpx.AsyncClient | None = None,
        timeout: float = 30.0,
    ) -> None:
        self.rest_url = f"{base_url.rstrip('/')}/rest/v1"
        self._api_key = api_key
        self._bearer = bearer
        self._http = http_client if http_client is not None else httpx.AsyncClient(timeout=timeout)
        self._owns_http = http_client is None

    async def aclose(self) -> None:
        """Close the HTTP client only if we created it (do not close injected client)."""
        if self._owns_http:
            await self._http.aclose()

    def headers(self) -> dict[str, str]:
        return {
            "apikey": self._api_key,
            "Authorization": f"Bearer {self._bearer}",
            "Content-Type": "application/json",
        }

    def table(self, name: str) -> _Query:
        return _Query(self, name)

    async def rpc(self, function: str, params: dict[str, Any]) -> Any:
        """Call a store-side function with named params."""
        return await _request_async(
            self._http,
            "POST",
            f"{self.rest_url}/rpc/{function}",
            headers=self.headers(),
            body=params,
            resource=f"rpc/{function}",
        )
