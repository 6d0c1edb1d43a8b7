"""
Entrypoint for the static site server.

`bootstrap()` configures logging and returns the ASGI app without starting
a listener, so process managers (uvicorn, gunicorn with uvicorn workers,
tests) can import it. `run()` serves it with uvicorn:

    python -m app.server.main
    PORT=8080 python -m app.server.main
"""

from __future__ import annotations

import uvicorn
from fastapi import FastAPI

from app.server import create_app
from app.server.config import ServerConfig, load_config
from app.server.logging import configure_logging, get_logger

logger = get_logger(__name__)


def bootstrap(config: ServerConfig | None = None) -> FastAPI:
    """
    Return a configured application instance.

    Logging is configured from ``config`` before the app is built so that
    startup messages use the selected renderer.
    """

    config = config or load_config()
    configure_logging(level=config.log_level, format=config.log_format)
    return create_app(config)


def run(config: ServerConfig | None = None) -> None:
    """Serve the application until interrupted."""

    config = config or load_config()
    application = bootstrap(config)
    logger.info("server_starting", url=f"http://localhost:{config.port}")
    uvicorn.run(
        application,
        host=config.host,
        port=config.port,
        log_config=None,
        log_level=config.log_level.lower(),
    )


if __name__ == "__main__":
    run()
