"""
Static asset serving with a fallback document.

Files under the public root are served by Starlette's ``StaticFiles`` for
GET and HEAD. Any request no other route claimed (including unknown
``/api/...`` paths and any method on a known one it does not register)
receives the fallback document, so client-side routing keeps working on
reload. When the fallback is disabled or missing the request ends in a 404.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.responses import FileResponse, Response
from fastapi.staticfiles import StaticFiles
from starlette.exceptions import HTTPException
from starlette.types import Scope

from app.server.logging import get_logger

logger = get_logger(__name__)

DIRECTORY_INDEX = "index.html"
FILE_METHODS = frozenset({"GET", "HEAD"})


class StaticSite:
    """A public root directory plus an optional fallback document."""

    def __init__(self, root: Path, fallback_document: str = DIRECTORY_INDEX) -> None:
        self.root = Path(root)
        self.fallback_document = fallback_document
        self.files = StaticFiles(directory=self.root, html=True, check_dir=False)

    async def lookup(self, request_path: str, scope: Scope) -> Optional[Response]:
        """
        Return the response for a file under the root, or None.

        Hidden (dot) segments are never served; ``..`` is one of them, so
        nothing above the root is reachable. Confinement against symlinks
        and the directory ``index.html`` lookup are handled by StaticFiles.
        """

        if scope["method"] not in FILE_METHODS or "\x00" in request_path:
            return None
        parts = [part for part in request_path.split("/") if part]
        if any(part.startswith(".") for part in parts):
            return None

        try:
            response = await self.files.get_response(
                os.path.join(".", *parts), scope
            )
        except HTTPException as exc:
            if exc.status_code == 404:
                return None
            raise
        # A 404.html in the root is not a hit.
        if response.status_code == 404:
            return None
        return response

    def fallback(self) -> Optional[Path]:
        """Return the fallback document, or None if disabled or missing."""

        if not self.fallback_document:
            return None
        document = self.root / self.fallback_document
        return document if document.is_file() else None

    async def respond(self, request: Request) -> Response:
        """Catch-all endpoint: static file, else fallback document, else 404."""

        found = await self.lookup(request.path_params.get("path", ""), request.scope)
        if found is not None:
            return found

        document = self.fallback()
        if document is None:
            raise HTTPException(status_code=404, detail="Not Found")
        return FileResponse(document)


def add_static_route(app: FastAPI, site: StaticSite) -> None:
    """
    Register the catch-all route backed by ``site``.

    The route matches every path and every method, so it must be added
    after all other routes.
    """

    app.add_route("/{path:path}", site.respond, include_in_schema=False, name="static")

    if not site.root.is_dir():
        logger.warning("static_root_missing", root=str(site.root))
    if site.fallback() is None:
        logger.warning(
            "fallback_document_unavailable",
            root=str(site.root),
            fallback_document=site.fallback_document,
        )


__all__ = ["DIRECTORY_INDEX", "StaticSite", "add_static_route"]
