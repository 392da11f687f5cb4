"""
relay_gate.policies.management

Owner-only gate and operations for the NIP-86 management API.

Responsibilities:
- Reject every management call from a non-owner with one uniform message,
  before looking at which method was requested.
- Map management methods onto allowlist mutations and listings.

Ban semantics: there is no deny-list. Banning removes the allow entry, so a
banned pubkey is indistinguishable from one that was never allowed, and the
banned listing is always empty.
"""

from __future__ import annotations

from typing import Any

from relay_gate.errors import ValidationError
from relay_gate.observability.logging import get_logger
from relay_gate.policies.decision import Decision
from relay_gate.policies.identity import IdentityAuthority
from relay_gate.relay.models import AuthSession, MethodParams, PubKeyReason
from relay_gate.services.allowlist import AllowlistStore

log = get_logger(__name__)

MANAGEMENT_DENIED = "restricted: only the relay owner can use the management api"

SUPPORTED_METHODS = (
    "supportedmethods",
    "allowpubkey",
    "banpubkey",
    "listallowedpubkeys",
    "listbannedpubkeys",
)


class ManagementPolicy:
    def __init__(self, *, authority: IdentityAuthority, store: AllowlistStore) -> None:
        self._authority = authority
        self._store = store

    async def reject_api_call(self, session: AuthSession, mp: MethodParams) -> Decision:
        if not self._authority.is_owner(session.pubkey):
            log.warning("management_denied", pubkey=session.pubkey, method=mp.method)
            return Decision.deny(MANAGEMENT_DENIED)
        return Decision.accept()

    async def allow_pubkey(self, pubkey: str, reason: str = "") -> None:
        if self._authority.is_owner(pubkey):
            # The owner is configuration, never an allowlist row.
            raise ValidationError("the relay owner is always allowed")
        # Storage errors propagate as-is: only the owner gets this far.
        await self._store.add(pubkey, reason)
        log.info("pubkey_allowed", target=pubkey, reason=reason)

    async def ban_pubkey(self, pubkey: str, reason: str = "") -> None:
        if self._authority.is_owner(pubkey):
            raise ValidationError("the relay owner cannot be banned")
        await self._store.remove(pubkey)
        log.info("pubkey_banned", target=pubkey, reason=reason)

    async def list_allowed_pubkeys(self) -> list[PubKeyReason]:
        entries = await self._store.list_entries()
        return [PubKeyReason(pubkey=e.pubkey, reason=e.reason) for e in entries]

    async def list_banned_pubkeys(self) -> list[PubKeyReason]:
        return []

    def supported_methods(self) -> list[str]:
        return list(SUPPORTED_METHODS)

    async def execute(self, mp: MethodParams) -> Any:
        # Callers must have run the owner pre-check already.
        method = mp.method
        if method == "supportedmethods":
            return self.supported_methods()
        if method == "allowpubkey":
            pubkey, reason = _pubkey_reason(mp)
            await self.allow_pubkey(pubkey, reason)
            return True
        if method == "banpubkey":
            pubkey, reason = _pubkey_reason(mp)
            await self.ban_pubkey(pubkey, reason)
            return True
        if method == "listallowedpubkeys":
            return [p.model_dump() for p in await self.list_allowed_pubkeys()]
        if method == "listbannedpubkeys":
            return [p.model_dump() for p in await self.list_banned_pubkeys()]
        raise ValidationError(f"method {method!r} is not supported")


def _pubkey_reason(mp: MethodParams) -> tuple[str, str]:
    params = mp.params
    if not params or not isinstance(params[0], str):
        raise ValidationError(f"{mp.method} expects [pubkey, reason?]")
    reason = params[1] if len(params) > 1 else ""
    if not isinstance(reason, str):
        raise ValidationError(f"{mp.method} reason must be a string")
    return params[0], reason
