"""Application configuration (settings and environment).

Single source of truth for all configuration. Uses pydantic-settings
with .env support. Required fields (SUPABASE_URL, SUPABASE_ANON_KEY) are
validated at load time. The service-role key is optional here: privileged
handlers check for it per request and fail with 500 when it is missing.
"""

from functools import lru_cache

from pydantic import SecretStr, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment and .env."""

    # App
    app_name: str = "hotel-audit-access"
    app_version: str = "1.0.0"
    debug: bool = False

    # Hosted backend (PostgREST + auth API behind one base URL)
    supabase_url: str = ""
    supabase_anon_key: SecretStr = SecretStr("")
    # Elevated-trust key; never exposed to clients. Missing = privileged routes answer 500.
    supabase_service_role_key: SecretStr | None = None
    http_timeout_seconds: float = 30.0

    # Identity listing: provider pages are walked at most max_pages times.
    identity_list_page_size: int = 1000
    identity_list_max_pages: int = 50

    # Optional store-side function replacing a user's area grants in one statement.
    grant_replace_rpc: str | None = None

    # CORS
    allowed_origins: str = "http://localhost:3000"

    # Request / middleware
    request_id_header: str = "X-Request-ID"
    max_request_body_bytes: int = 65_536

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=False,
    )

    @model_validator(mode="after")
    def validate_required(self) -> "Settings":
        """Validate backend URL, anon key and listing bounds."""
        if not self.supabase_url:
            raise ValueError(
                "SUPABASE_URL is required. Set in environment or .env file."
            )
        if not self.supabase_anon_key.get_secret_value():
            raise ValueError(
                "SUPABASE_ANON_KEY is required. Set in environment or .env file."
            )
        if self.identity_list_page_size < 1 or self.identity_list_max_pages < 1:
            raise ValueError(
                "IDENTITY_LIST_PAGE_SIZE and IDENTITY_LIST_MAX_PAGES must be >= 1"
            )
        self.supabase_url = self.supabase_url.rstrip("/")
        return self

    @property
    def has_service_role_key(self) -> bool:
        return bool(
            self.supabase_service_role_key
            and self.supabase_service_role_key.get_secret_value()
        )


@lru_cache
def get_settings() -> Settings:
    """Return cached application settings (single instance per process).

    Validation runs on first call, not at import time. In tests, call
    get_settings.cache_clear() before overriding env vars so the next
    get_settings() uses the new values.

    Returns:
        Loaded and validated Settings instance.
    """
    return Settings()
