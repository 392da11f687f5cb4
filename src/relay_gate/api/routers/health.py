"""
relay_gate.api.routers.health

Health and readiness endpoints.

Responsibilities:
- Provide liveness probe (`/healthz`).
- Provide readiness probe (`/readyz`) backed by the allowlist store health check.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from starlette.status import HTTP_503_SERVICE_UNAVAILABLE

from relay_gate.api.deps import store_dep
from relay_gate.errors import ConnectivityError
from relay_gate.services.allowlist import AllowlistStore

router = APIRouter()


@router.get("/healthz")
async def healthz() -> dict[str, str]:
    return {"status": "ok"}


@router.get("/readyz", response_model=None)
async def readyz(store: AllowlistStore = Depends(store_dep)) -> dict[str, str] | JSONResponse:
    try:
        await store.health_check()
    except ConnectivityError:
        # Probe consumers only need the state; the store already logged the cause.
        return JSONResponse(
            status_code=HTTP_503_SERVICE_UNAVAILABLE, content={"status": "unavailable"}
        )
    return {"status": "ready"}
