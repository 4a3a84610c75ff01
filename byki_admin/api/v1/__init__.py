"""API v1: routers and shared dependencies."""

from byki_admin.api.v1.router import api_router

__all__ = ["api_router"]
