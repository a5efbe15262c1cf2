from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator, Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from packages.zoning_core.settings import ZoningSettings, configure_logging, load_settings
from services.zoning_api.app.errors import register_exception_handlers
from services.zoning_api.app.routers import health, zoning
from services.zoning_api.app.runtime import ZoningRuntime, build_runtime
from src.common.env_bootstrap import bootstrap_zoning_env

logger = logging.getLogger(__name__)


def create_app(runtime: Optional[ZoningRuntime] = None, settings: Optional[ZoningSettings] = None) -> FastAPI:
    """Build the API; an injected runtime is used as-is and left open on shutdown."""
    if settings is None:
        bootstrap_zoning_env()
        settings = load_settings()
    configure_logging(settings.log_level)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        owned: Optional[ZoningRuntime] = None
        if app.state.runtime is None:
            owned = build_runtime(settings)
            app.state.runtime = owned
            logger.info("zoning runtime started")
        try:
            yield
        finally:
            if owned is not None:
                owned.close()
                app.state.runtime = None
                logger.info("zoning runtime stopped")

    app = FastAPI(title="Zoning Lookup API", version=health.SERVICE_VERSION, lifespan=lifespan)
    app.state.runtime = runtime
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_allow_origins,
        allow_methods=["GET", "POST"],
        allow_headers=["*"],
    )
    register_exception_handlers(app)
    app.include_router(health.router, tags=["health"])
    app.include_router(zoning.router, prefix="/v1/zoning", tags=["zoning"])
    return app


app = create_app()
