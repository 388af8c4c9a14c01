"""Shared telemetry: logging setup and request-id correlation."""

from app.shared.telemetry.logging import (
    RequestIdFilter,
    get_logger,
    get_request_id,
    set_request_id,
    setup_logging,
)

__all__ = [
    "RequestIdFilter",
    "get_logger",
    "get_request_id",
    "set_request_id",
    "setup_logging",
]
