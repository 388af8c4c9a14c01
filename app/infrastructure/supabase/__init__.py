"""Hosted backend adapters: PostgREST store, auth API, session factories."""

from app.infrastructure.supabase._rest_client import SupabaseRESTClient
from app.infrastructure.supabase.auth_client import SupabaseAuthClient
from app.infrastructure.supabase.client import CallerStoreFactory, PrivilegedGateway

__all__ = [
    "CallerStoreFactory",
    "PrivilegedGateway",
    "SupabaseAuthClient",
    "SupabaseRESTClient",
]
