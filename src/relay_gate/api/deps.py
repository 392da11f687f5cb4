"""
relay_gate.api.deps

FastAPI dependency wiring for the API layer.

Responsibilities:
- Encapsulate app.state access patterns (settings, allowlist store, relay hooks).
"""

from __future__ import annotations

from fastapi import Request

from relay_gate.relay.hooks import RelayHooks
from relay_gate.services.allowlist import AllowlistStore
from relay_gate.settings import Settings


def settings_dep(request: Request) -> Settings:
    # The app is built with explicit settings (see `relay_gate.api.app.create_app`).
    return request.app.state.settings  # type: ignore[attr-defined]


def store_dep(request: Request) -> AllowlistStore:
    # Created on app startup; shared by every request through the engine's pool.
    return request.app.state.store  # type: ignore[attr-defined]


def hooks_dep(request: Request) -> RelayHooks:
    return request.app.state.hooks  # type: ignore[attr-defined]
