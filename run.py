"""Serve the Music Recommendations API with uvicorn.

Host, port and log level come from the same environment variables as
the application settings (``HOST``, ``PORT``, ``LOG_LEVEL``).

Usage:
    python run.py
"""
import asyncio
import logging

from uvicorn import Config, Server

from recommendations_api.app.core.config import settings
from recommendations_api.app.main import app


async def run_api() -> None:
    """Start the API server and block until it stops."""
    config = Config(
        app=app,
        host=settings.host,
        port=settings.port,
        reload=False,
        log_level=settings.log_level.lower(),
    )
    server = Server(config)
    await server.serve()


if __name__ == "__main__":
    try:
        asyncio.run(run_api())
    except KeyboardInterrupt:
        logging.getLogger(__name__).info("Shutting down")
