"""Security headers middleware.

Adds response headers suited to a JSON-only API that returns identity
data: nothing may be framed, sniffed or cached by intermediaries.
Raw ASGI (no BaseHTTPMiddleware). Headers already set by a route win.
"""

from typing import Callable

API_HEADERS = {
    "Content-Security-Policy": "default-src 'none'; frame-ancestors 'none'",
    "Strict-Transport-Security": "max-age=31536000; includeSubDomains",
    "X-Content-Type-Options": "nosniff",
    "X-Frame-Options": "DENY",
    "Referrer-Policy": "no-referrer",
    "Cache-Control": "no-store",
}


def SecurityHeadersMiddleware(
    app: Callable, headers: dict[str, str] | None = None
) -> Callable:
    """Set security headers on all HTTP responses. Raw ASGI."""
    resolved = {**API_HEADERS, **(headers or {})}
    header_list = [(k.lower().encode(), v.encode()) for k, v in resolved.items()]

    async def asgi_app(scope: dict, receive: Callable, send: Callable) -> None:
        if scope["type"] != "http":
            await app(scope, receive, send)
            return

        async def send_wrapper(message: dict) -> None:
            if message["type"] == "http.response.start":
                existing = list(message.get("headers", []))
                present = {name.lower() for name, _ in existing}
                existing.extend(h for h in header_list if h[0] not in present)
                message["headers"] = existing
            await send(message)

        await app(scope, receive, send_wrapper)

    return asgi_app
