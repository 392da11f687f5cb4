"""
relay_gate.relay.hooks

Composition root for the policies a host relay calls.

Responsibilities:
- Build one ordered chain per hook (events, filters, management calls).
- Keep the order explicit: structural validators first, identity policies last.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from relay_gate.errors import ManagementDenied
from relay_gate.policies.builtin import no_complex_filters, prevent_large_tags, validate_kind
from relay_gate.policies.decision import Decision, PolicyChain
from relay_gate.policies.identity import IdentityAuthority
from relay_gate.policies.management import ManagementPolicy
from relay_gate.policies.read import ReadPolicy
from relay_gate.policies.write import WritePolicy
from relay_gate.relay.models import AuthSession, MethodParams, NostrEvent, NostrFilter
from relay_gate.services.allowlist import AllowlistStore
from relay_gate.settings import Settings


@dataclass(frozen=True, slots=True)
class RelayHooks:
    authority: IdentityAuthority
    management: ManagementPolicy
    event_chain: PolicyChain
    filter_chain: PolicyChain
    api_call_chain: PolicyChain

    async def reject_event(self, session: AuthSession, event: NostrEvent) -> Decision:
        return await self.event_chain(session, event)

    async def reject_filter(self, session: AuthSession, nostr_filter: NostrFilter) -> Decision:
        return await self.filter_chain(session, nostr_filter)

    async def reject_api_call(self, session: AuthSession, mp: MethodParams) -> Decision:
        return await self.api_call_chain(session, mp)

    async def call_management(self, session: AuthSession, mp: MethodParams) -> Any:
        decision = await self.reject_api_call(session, mp)
        if decision.reject:
            raise ManagementDenied(decision.message)
        return await self.management.execute(mp)


def build_relay_hooks(*, settings: Settings, store: AllowlistStore) -> RelayHooks:
    authority = IdentityAuthority(owner_pubkey=settings.owner_pubkey, store=store)
    management = ManagementPolicy(authority=authority, store=store)

    return RelayHooks(
        authority=authority,
        management=management,
        event_chain=PolicyChain(
            "reject_event",
            [
                validate_kind,
                prevent_large_tags(settings.max_tag_value_len),
                WritePolicy(authority),
            ],
        ),
        filter_chain=PolicyChain(
            "reject_filter",
            [
                no_complex_filters,
                ReadPolicy(authority),
            ],
        ),
        api_call_chain=PolicyChain(
            "reject_api_call",
            [management.reject_api_call],
        ),
    )


# --- Module Notes -----------------------------------------------------------
# Hosts call `reject_*` and read `(reject, message)` from the returned Decision.
# None of the chains hold per-call state, so one RelayHooks serves every connection.
