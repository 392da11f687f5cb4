"""
relay_gate.api.routers.management

NIP-86 style relay management endpoint.

Responsibilities:
- Accept `{"method": ..., "params": [...]}` calls.
- Run the management pre-check before any method-specific work.
- Report outcomes as `{"result": ..., "error": ...}` with a matching HTTP status.

Error detail is returned verbatim only after the owner check passed; a denied
caller only ever sees the uniform denial message.
"""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from pydantic import BaseModel
from starlette.status import (
    HTTP_400_BAD_REQUEST,
    HTTP_401_UNAUTHORIZED,
    HTTP_404_NOT_FOUND,
    HTTP_503_SERVICE_UNAVAILABLE,
)

from relay_gate.api.deps import hooks_dep
from relay_gate.auth.deps import get_auth_session
from relay_gate.errors import ConnectivityError, ManagementDenied, NotFoundError, ValidationError
from relay_gate.relay.hooks import RelayHooks
from relay_gate.relay.models import AuthSession, MethodParams

router = APIRouter(tags=["management"])


class ManagementResponse(BaseModel):
    result: Any = None
    error: str | None = None


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content=ManagementResponse(error=message).model_dump(),
    )


@router.post("/management", response_model=ManagementResponse)
async def management_call(
    body: MethodParams,
    session: AuthSession = Depends(get_auth_session),
    hooks: RelayHooks = Depends(hooks_dep),
) -> ManagementResponse | JSONResponse:
    try:
        result = await hooks.call_management(session, body)
    except ManagementDenied as e:
        return _error(HTTP_401_UNAUTHORIZED, e.message)
    except ValidationError as e:
        return _error(HTTP_400_BAD_REQUEST, str(e))
    except NotFoundError as e:
        return _error(HTTP_404_NOT_FOUND, str(e))
    except ConnectivityError as e:
        return _error(HTTP_503_SERVICE_UNAVAILABLE, str(e))
    return ManagementResponse(result=result)
