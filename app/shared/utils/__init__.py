"""Shared utilities: datetime helpers."""

from app.shared.utils.datetime import ensure_utc, parse_timestamp

__all__ = [
    "ensure_utc",
    "parse_timestamp",
]
