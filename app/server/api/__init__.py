"""
Demonstration JSON API mounted under ``/api``.

* ``GET /api/status`` - liveness report with the server time.
* ``POST /api/echo`` - returns the posted JSON body unchanged.
"""

from __future__ import annotations

from fastapi import APIRouter

from app.server.api import echo, status

API_PREFIX = "/api"


def build_api_router() -> APIRouter:
    """Return a router holding every API endpoint, prefixed with ``/api``."""
    router = APIRouter(prefix=API_PREFIX, tags=["api"])
    router.include_router(status.router)
    router.include_router(echo.router)
    return router


__all__ = ["API_PREFIX", "build_api_router"]
