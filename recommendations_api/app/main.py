"""
Main entrypoint for the Music Recommendations API.

``create_app`` configures logging, mounts the versioned routers and
registers the startup hook that applies database migrations.  The
module-level ``app`` lets ASGI servers import it directly::

    uvicorn recommendations_api.app.main:app --reload
"""

from contextlib import asynccontextmanager
from typing import AsyncIterator, Dict

from fastapi import FastAPI

from .api.v1.router import router as v1_router
from .core.config import settings
from .core.db import init_db
from .core.logging_config import setup_logging


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    init_db()
    yield


def create_app() -> FastAPI:
    """Create and configure a FastAPI application.

    Returns
    -------
    FastAPI
        Application with the v1 routes mounted under
        ``settings.api_prefix`` and a ``/health`` probe.
    """
    setup_logging()

    app = FastAPI(
        title=settings.project_name,
        version=settings.api_version,
        debug=settings.debug,
        lifespan=lifespan,
    )
    app.include_router(v1_router, prefix=settings.api_prefix)

    @app.get("/health", tags=["system"])
    async def health() -> Dict[str, str]:
        return {"status": "ok"}

    return app


app = create_app()
