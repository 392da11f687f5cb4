"""
relay_gate.api.app

FastAPI app factory for the relay access-control service.

Responsibilities:
- Build the FastAPI application and register routers/middleware.
- Initialize and dispose shared infrastructure (engine, allowlist store, hooks).
- Provide a single composition root where cross-cutting concerns live.
"""

from __future__ import annotations

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI

from relay_gate import __version__
from relay_gate.api.routers.dev_auth import router as dev_auth_router
from relay_gate.api.routers.health import router as health_router
from relay_gate.api.routers.management import router as management_router
from relay_gate.db.init_db import init_db
from relay_gate.db.session import create_engine, create_sessionmaker
from relay_gate.observability.logging import configure_logging, get_logger
from relay_gate.observability.middleware import RequestContextMiddleware
from relay_gate.relay.hooks import build_relay_hooks
from relay_gate.services.allowlist import AllowlistStore
from relay_gate.settings import Settings

log = get_logger(__name__)


def create_app(*, settings: Settings) -> FastAPI:
    configure_logging(
        service_name=settings.service_name,
        level=settings.log_level,
        json_logs=settings.log_json,
    )

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        log.info("startup", env=settings.env, owner=settings.owner_pubkey)
        engine = create_engine(settings)
        if settings.env in ("dev", "test"):
            # Dev/test convenience: create tables automatically. Prod should use Alembic migrations.
            await init_db(engine)
        store = AllowlistStore(create_sessionmaker(engine), engine=engine)
        app.state.store = store
        app.state.hooks = build_relay_hooks(settings=settings, store=store)
        try:
            yield
        finally:
            # Dispose the engine to close pools/FDs gracefully.
            await store.close()
            log.info("shutdown")

    app = FastAPI(
        title="Private Relay Access Control",
        version=__version__,
        docs_url="/docs",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )
    app.state.settings = settings

    app.add_middleware(RequestContextMiddleware)
    app.include_router(health_router, tags=["health"])
    app.include_router(dev_auth_router)
    app.include_router(management_router)

    return app


# --- Module Notes -----------------------------------------------------------
# A host relay embedding this package uses `build_relay_hooks` directly and mounts
# this app (or just its management router) next to its WebSocket endpoint.
