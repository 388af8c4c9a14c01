"""Application lifespan: startup and shutdown.

Single place for startup/shutdown logic. Used by main.py; no business
logic here, only wiring of the shared outbound HTTP client.
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

import httpx
from fastapi import FastAPI

from app.core.config import get_settings

logger = logging.getLogger(__name__)


@asynccontextmanager
async def create_lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Create the shared backend HTTP client, yield, then close it.

    Store and identity-provider clients are built per request on top of
    this one connection pool; none of them hold request state.
    """
    settings = get_settings()

    # ---- Startup ----
    app.state.backend_http_client = httpx.AsyncClient(
        timeout=settings.http_timeout_seconds
    )
    logger.info("%s %s started", settings.app_name, settings.app_version)
    if not settings.has_service_role_key:
        logger.warning(
            "SUPABASE_SERVICE_ROLE_KEY is not set; privileged endpoints will answer 500"
        )

    yield

    # ---- Shutdown ----
    if getattr(app.state, "backend_http_client", None) is not None:
        await app.state.backend_http_client.aclose()
        app.state.backend_http_client = None
        logger.info("Backend HTTP client closed")
