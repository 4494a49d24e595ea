"""
noroff_api.api.app

FastAPI app factory.

Responsibilities:
- Build the FastAPI application and register routers/middleware/error handlers.
- Initialize and dispose shared infrastructure (DB engine/session factory, HTTP
  client used for media validation).
- Provide a single composition root where cross-cutting concerns live.
"""

from __future__ import annotations

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

import httpx
from fastapi import FastAPI

from noroff_api import __version__
from noroff_api.api.errors import register_error_handlers
from noroff_api.api.routers.auth import router as auth_router
from noroff_api.api.routers.bookings import router as bookings_router
from noroff_api.api.routers.catalog import (
    books_router,
    cat_facts_router,
    old_games_router,
    online_shop_router,
)
from noroff_api.api.routers.health import router as health_router
from noroff_api.api.routers.profiles import router as profiles_router
from noroff_api.api.routers.social import router as social_router
from noroff_api.api.routers.venues import router as venues_router
from noroff_api.db.init_db import init_db
from noroff_api.db.session import create_engine, create_sessionmaker
from noroff_api.guard.media import HttpMediaValidator, MediaValidator
from noroff_api.observability.logging import configure_logging, get_logger
from noroff_api.observability.middleware import RequestContextMiddleware
from noroff_api.settings import Settings

log = get_logger(__name__)


def create_app(*, settings: Settings, media_validator: MediaValidator | None = None) -> FastAPI:
    configure_logging(
        service_name=settings.service_name,
        level=settings.log_level,
        json_logs=settings.env != "dev",
    )

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        log.info("startup", env=settings.env)
        engine = create_engine(settings)
        app.state.engine = engine
        app.state.sessionmaker = create_sessionmaker(engine)
        if settings.env in ("dev", "test"):
            # Prod runs Alembic migrations instead.
            await init_db(engine)

        async with httpx.AsyncClient(
            headers={"user-agent": f"{settings.service_name}/{__version__}"}
        ) as http:
            app.state.media_validator = media_validator or HttpMediaValidator(
                http=http, timeout=settings.media_timeout_seconds
            )
            try:
                yield
            finally:
                await engine.dispose()
                log.info("shutdown")

    app = FastAPI(
        title="Noroff API",
        version=__version__,
        docs_url="/docs",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )

    app.state.settings = settings
    app.add_middleware(RequestContextMiddleware)
    register_error_handlers(app)

    app.include_router(health_router, tags=["health"])
    app.include_router(auth_router)
    app.include_router(venues_router)
    app.include_router(bookings_router)
    app.include_router(profiles_router)
    app.include_router(social_router)
    app.include_router(online_shop_router)
    app.include_router(cat_facts_router)
    app.include_router(old_games_router)
    app.include_router(books_router)

    return app


# --- Module Notes -----------------------------------------------------------
# Tests pass their own `media_validator` so no outbound requests are made.
