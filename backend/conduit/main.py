"""Conduit API - FastAPI application factory.

Invariants:
    - Routes come only from the route table, bound to one API implementation
    - Global error handlers map ConduitError -> its rendering, catch-all -> empty 500
    - CORS configured from settings (not hardcoded)
    - Logging configured on startup via lifespan context manager

Design Decisions:
    - Factory over a module-level app: the domain implementation belongs to the
      surrounding application, which passes it in
    - Lifespan over @app.on_event: FastAPI recommended pattern
"""

import logging
from contextlib import asynccontextmanager
from typing import Any

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from conduit.api.error_handlers import register_error_handlers
from conduit.apis.contract import ConduitApi
from conduit.config import Settings, get_settings
from conduit.infrastructure.observability import setup_logging
from conduit.server.dispatcher import build_router

logger = logging.getLogger(__name__)


def create_app(
    api_impl: ConduitApi[Any], settings: Settings | None = None,
) -> FastAPI:
    """Build the Conduit ASGI app serving api_impl."""
    settings = settings or get_settings()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Startup/shutdown lifecycle."""
        setup_logging(settings.log_level, settings.log_format)
        logger.info(f"{settings.api_title} started")
        yield
        logger.info(f"{settings.api_title} shutting down")

    app = FastAPI(
        title=settings.api_title, version=settings.api_version,
        lifespan=lifespan,
    )
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    register_error_handlers(app)
    app.include_router(
        build_router(api_impl, auth_header_name=settings.auth_header_name),
    )
    return app
