"""
Server package: a static site with a small JSON API in front of it.

Layout:

* `app/server/api/` - ``/api/status`` and ``/api/echo`` routers.
* `app/server/static.py` - public root serving and the fallback document.
* `app/client/public/` - default public root (HTML/CSS).

`create_app()` wires these together in match order: API routes first,
then existing static files, then the fallback document.
"""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI

from app import __version__
from app.server.api import build_api_router
from app.server.config import ServerConfig, load_config
from app.server.errors import register_exception_handlers
from app.server.logging import get_logger
from app.server.middleware import register_middleware
from app.server.static import StaticSite, add_static_route

logger = get_logger(__name__)


def create_app(config: ServerConfig | None = None) -> FastAPI:
    """
    Build the ASGI application.

    Args:
        config: Settings to serve with; resolved through `load_config()`
            when omitted.
    """

    config = config or load_config()

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        logger.info(
            "server_started",
            host=config.host,
            port=config.port,
            static_dir=str(config.static_dir),
            fallback_document=config.fallback_document or None,
        )
        yield
        logger.info("server_stopped")

    app = FastAPI(
        title="Static Site Server",
        description="Static file server with status and echo JSON endpoints",
        version=__version__,
        lifespan=lifespan,
    )
    app.state.config = config

    register_middleware(app)
    register_exception_handlers(app)

    app.include_router(build_api_router())
    # Catch-all; stays last so it never shadows the API.
    site = StaticSite(root=config.static_dir, fallback_document=config.fallback_document)
    add_static_route(app, site)
    return app


__all__ = ["ServerConfig", "StaticSite", "create_app", "load_config"]
