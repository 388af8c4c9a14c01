"""Store-backed repository implementations."""

from app.infrastructure.supabase.repositories.area_repo import SupabaseAreaRepository
from app.infrastructure.supabase.repositories.grant_repo import (
    SupabaseAccessGrantRepository,
)
from app.infrastructure.supabase.repositories.identity_provider import (
    SupabaseIdentityProvider,
)
from app.infrastructure.supabase.repositories.profile_repo import (
    SupabaseProfileRepository,
)
from app.infrastructure.supabase.repositories.question_repo import (
    SupabaseQuestionRepository,
)

__all__ = [
    "SupabaseAccessGrantRepository",
    "SupabaseAreaRepository",
    "SupabaseIdentityProvider",
    "SupabaseProfileRepository",
    "SupabaseQuestionRepository",
]
