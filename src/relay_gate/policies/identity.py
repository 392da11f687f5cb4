"""
relay_gate.policies.identity

Single source of truth for "is this identity permitted".

Responsibilities:
- Owner bypass, evaluated before storage so the owner keeps access during outages.
- Allowlist membership for everyone else.
- Surface storage failures as `AuthorizationIndeterminate`, never as a decision.
"""

from __future__ import annotations

from relay_gate.errors import AuthorizationIndeterminate, ConnectivityError
from relay_gate.services.allowlist import AllowlistStore


class IdentityAuthority:
    def __init__(self, *, owner_pubkey: str, store: AllowlistStore) -> None:
        if not owner_pubkey:
            raise ValueError("owner pubkey must not be empty")
        self._owner = owner_pubkey
        self._store = store

    @property
    def owner_pubkey(self) -> str:
        return self._owner

    def is_owner(self, pubkey: str | None) -> bool:
        # An empty or missing identity never matches, whatever the configuration.
        return bool(pubkey) and pubkey == self._owner

    async def is_authorized(self, pubkey: str | None) -> bool:
        if self.is_owner(pubkey):
            return True
        if not pubkey:
            return False
        try:
            return await self._store.contains(pubkey)
        except ConnectivityError as e:
            raise AuthorizationIndeterminate(str(e)) from e
