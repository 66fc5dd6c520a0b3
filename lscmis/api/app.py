# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""ASGI entry point for the lscmis API.

Run with:
    uvicorn lscmis.api.app:create_app --factory
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from lscmis import __version__
from lscmis.api.dependencies import close_clients, init_clients
from lscmis.api.errors import register_exception_handlers
from lscmis.api.middleware import RequestContextMiddleware
from lscmis.api.routes import health
from lscmis.api.v1 import router as v1_router
from lscmis.core.config import get_settings
from lscmis.utils.logging import setup_logging

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Open the database pool and identity backend for the process lifetime.

    A failure here aborts startup: a process that cannot reach its store
    must not accept onboarding requests.
    """
    settings = get_settings()
    setup_logging(settings)
    logger.info(
        "Starting lscmis API: environment=%s identity_backend=%s",
        settings.environment,
        settings.identity.backend,
    )

    await init_clients(settings)
    try:
        yield
    finally:
        try:
            await close_clients()
        except Exception as e:
            logger.warning("Error closing clients: %s", e)
        logger.info("lscmis API stopped")


def create_app() -> FastAPI:
    """Build the application: error envelope, middleware and routers."""
    settings = get_settings()
    docs = settings.debug

    app = FastAPI(
        title="lscmis API",
        description="Local service center onboarding, review, catalog and transactions",
        version=__version__,
        docs_url="/docs" if docs else None,
        redoc_url="/redoc" if docs else None,
        openapi_url="/openapi.json" if docs else None,
        lifespan=lifespan,
    )

    register_exception_handlers(app)

    # Last added runs first: CORS answers preflight before request context
    app.add_middleware(RequestContextMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors.origins_list,
        allow_credentials=settings.cors.allow_credentials,
        allow_methods=settings.cors.allow_methods,
        allow_headers=settings.cors.allow_headers,
    )

    app.include_router(health.router, tags=["Health"])
    app.include_router(v1_router)

    return app
