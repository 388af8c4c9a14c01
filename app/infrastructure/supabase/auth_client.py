"""Thin client for the hosted identity provider's auth API.

get_user() runs with the anon key and the caller's token. The admin_*
calls need the service-role key and are only reachable through a
privileged session.
"""

from __future__ import annotations

import json
from typing import Any
from urllib.parse import quote

import httpx

from app.infrastructure.exceptions import IdentityProviderError


def _error_message(resp: httpx.Response) -> str:
    try:
        body = resp.json()
    except ValueError:
        return resp.text or resp.reason_phrase
    if isinstance(body, dict):
        for key in ("msg", "message", "error_description", "error"):
            if body.get(key):
                return str(body[key])
    return str(body)


class SupabaseAuthClient:
    """Auth API client bound to one api key."""

    def __init__(
        self,
        base_url: str,
        api_key: str,
        *,
        http_client: httpx.AsyncClient | None = None,
        timeout: float = 30.0,
    ) -> None:
        self.auth_url = f"{base_url.rstrip('/')}/auth/v1"
        self._api_key = api_key
        self._http = http_client if http_client is not None else httpx.AsyncClient(timeout=timeout)
        self._owns_http = http_client is None

    async def aclose(self) -> None:
        """Close the HTTP client only if we created it."""
        if self._owns_http:
            await self._http.aclose()

    async def _request(
        self,
        method: str,
        path: str,
        *,
        bearer: str,
        operation: str,
        params: dict[str, Any] | None = None,
        body: dict[str, Any] | None = None,
    ) -> httpx.Response:
        headers = {
            "apikey": self._api_key,
            "Authorization": f"Bearer {bearer}",
            "Content-Type": "application/json",
        }
        try:
            return await self._http.request(
                method,
                f"{self.auth_url}{path}",
                headers=headers,
                params=params,
                json=body,
            )
        except httpx.HTTPError as exc:
            raise IdentityProviderError(
                f"{exc.__class__.__name__} contacting identity provider",
                operation=operation,
            ) from exc

    @staticmethod
    def _json(resp: httpx.Response, operation: str) -> Any:
        if resp.status_code >= 400:
            raise IdentityProviderError(
                _error_message(resp), status_code=resp.status_code, operation=operation
            )
        raw = resp.content
        return json.loads(raw.decode()) if raw else None

    async def get_user(self, access_token: str) -> dict[str, Any] | None:
        """Validate access_token. Returns None when the provider rejects it (401/403)."""
        resp = await self._request(
            "GET", "/user", bearer=access_token, operation="get_user"
        )
        if resp.status_code in (401, 403):
            return None
        return self._json(resp, "get_user")

    async def admin_create_user(
        self, email: str, password: str, email_confirm: bool = True
    ) -> dict[str, Any]:
        """Create a user; email_confirm skips the confirmation mail."""
        resp = await self._request(
            "POST",
            "/admin/users",
            bearer=self._api_key,
            operation="create_user",
            body={"email": email, "password": password, "email_confirm": email_confirm},
        )
        out = self._json(resp, "create_user")
        if not isinstance(out, dict) or not out.get("id"):
            raise IdentityProviderError(
                "create user returned no id", operation="create_user"
            )
        return out

    async def admin_delete_user(self, user_id: str) -> None:
        resp = await self._request(
            "DELETE",
            f"/admin/users/{quote(user_id, safe='')}",
            bearer=self._api_key,
            operation="delete_user",
        )
        self._json(resp, "delete_user")

    async def admin_list_users(self, page: int, per_page: int) -> list[dict[str, Any]]:
        """One page (1-based) of users."""
        resp = await self._request(
            "GET",
            "/admin/users",
            bearer=self._api_key,
            operation="list_users",
            params={"page": page, "per_page": per_page},
        )
        out = self._json(resp, "list_users")
        if isinstance(out, dict):
            return list(out.get("users") or [])
        return list(out or [])
