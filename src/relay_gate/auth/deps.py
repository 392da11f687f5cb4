"""
relay_gate.auth.deps

FastAPI dependency functions for caller identification.

Responsibilities:
- Convert an optional bearer token into an `AuthSession`.

A missing token is an unauthenticated session, not an error: the management
policy then denies it with the same message as any other non-owner.
"""

from __future__ import annotations

from fastapi import Depends, HTTPException
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from starlette.status import HTTP_401_UNAUTHORIZED

from relay_gate.api.deps import settings_dep
from relay_gate.auth.jwt import JwtConfig, JwtValidationError, pubkey_from_token
from relay_gate.relay.models import ANONYMOUS, AuthSession
from relay_gate.settings import Settings

_bearer = HTTPBearer(auto_error=False)


def get_auth_session(
    creds: HTTPAuthorizationCredentials | None = Depends(_bearer),
    settings: Settings = Depends(settings_dep),
) -> AuthSession:
    if creds is None or not creds.credentials:
        return ANONYMOUS

    try:
        pubkey = pubkey_from_token(cfg=JwtConfig.from_settings(settings), token=creds.credentials)
    except JwtValidationError as e:
        raise HTTPException(status_code=HTTP_401_UNAUTHORIZED, detail=f"Invalid token: {e}") from e
    return AuthSession(pubkey=pubkey)
