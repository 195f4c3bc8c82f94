"""FastAPI application factory and lifecycle management."""

from __future__ import annotations

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from todosearch import __version__
from todosearch.api.deps import set_runtime
from todosearch.api.v1.router import router as v1_router
from todosearch.config.settings import Settings
from todosearch.observability.logging import setup_logging
from todosearch.runtime import TodoSearchRuntime

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_FILE = "todosearch-config.yaml"


def create_app(settings: Settings | None = None) -> FastAPI:
    """Create and configure the FastAPI application.

    Args:
        settings: Application settings. If None, uses the snapshot exported
            by the CLI, then ``todosearch-config.yaml``, then the environment.

    Returns:
        Configured FastAPI application.
    """
    if settings is None:
        settings = Settings.from_snapshot()
    if settings is None:
        yaml_path = Path(DEFAULT_CONFIG_FILE)
        if yaml_path.exists():
            settings = Settings.from_yaml(yaml_path)
        else:
            settings = Settings()

    setup_logging(settings.observability)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        """Manage application lifecycle (startup/shutdown)."""
        logger.info("Starting Todo Search v%s", __version__)

        runtime = TodoSearchRuntime(settings)
        await runtime.initialize()
        set_runtime(runtime)

        app.state.settings = settings
        app.state.runtime = runtime

        logger.info("Todo Search is ready to serve requests on port %d", settings.server.port)
        yield

        logger.info("Shutting down Todo Search...")
        await runtime.shutdown()
        set_runtime(None)
        logger.info("Todo Search shutdown complete")

    app = FastAPI(
        title=settings.app_name,
        description="Todo list service with Apache Solr backed full-text search.",
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.server.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(v1_router, prefix="/v1")
    app.state.settings = settings

    return app
