"""API v1: router and endpoints."""

from app.api.v1.router import api_router

__all__ = ["api_router"]
