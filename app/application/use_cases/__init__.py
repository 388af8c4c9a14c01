"""Application use cases: one entry point per workflow."""

from app.application.use_cases.access_admin import (
    AccessAdminUseCases,
    parse_requested_role,
)

__all__ = [
    "AccessAdminUseCases",
    "parse_requested_role",
]
