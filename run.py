"""Entry point for running the Song Library API.

Host and port come from ``HOST`` / ``PORT`` (see
``song_library_api.app.core.config``).  Database location and the
metadata provider URL are configured the same way.

Usage:
    python run.py
"""
import asyncio
import logging

from uvicorn import Config, Server

from song_library_api.app.core.config import settings
from song_library_api.app.main import app


async def run_api() -> None:
    """Serve the API with Uvicorn until interrupted."""
    config = Config(
        app=app,
        host=settings.host,
        port=settings.port,
        reload=False,
        log_level=settings.log_level.lower(),
    )
    server = Server(config)
    logging.getLogger(__name__).info("Starting server on %s:%s", settings.host, settings.port)
    await server.serve()


if __name__ == "__main__":
    try:
        asyncio.run(run_api())
    except (KeyboardInterrupt, SystemExit):
        pass
