"""
relay_gate.policies.read

Per-filter admission decision, run before the host serves a subscription.

Responsibilities:
- Ask unauthenticated connections to authenticate (NIP-42) via the
  `auth-required:` prefix rather than refusing them outright.
- Serve authenticated connections whose pubkey is authorized.
"""

from __future__ import annotations

from relay_gate.errors import AuthorizationIndeterminate
from relay_gate.observability.logging import get_logger
from relay_gate.policies.decision import Decision
from relay_gate.policies.identity import IdentityAuthority
from relay_gate.policies.write import AUTHORIZATION_ERROR
from relay_gate.relay.models import AuthSession, NostrFilter

log = get_logger(__name__)

# Hosts answer this prefix with an AUTH challenge and CLOSED; clients retry after authenticating.
AUTH_REQUIRED_PREFIX = "auth-required:"
AUTH_REQUIRED = f"{AUTH_REQUIRED_PREFIX} only authenticated users can read from this relay"
READ_DENIED = "restricted: this is a private relay, only authorized users can read here"


class ReadPolicy:
    def __init__(self, authority: IdentityAuthority) -> None:
        self._authority = authority

    async def __call__(self, session: AuthSession, nostr_filter: NostrFilter) -> Decision:
        if not session.is_authenticated:
            return Decision.deny(AUTH_REQUIRED)

        log.debug("read_request", pubkey=session.pubkey)
        try:
            allowed = await self._authority.is_authorized(session.pubkey)
        except AuthorizationIndeterminate as e:
            log.error(
                "authorization_indeterminate", hook="read", pubkey=session.pubkey, error=str(e)
            )
            return Decision.deny(AUTHORIZATION_ERROR)

        if allowed:
            return Decision.accept()
        return Decision.deny(READ_DENIED)


def is_auth_required(decision: Decision) -> bool:
    return decision.reject and decision.message.startswith(AUTH_REQUIRED_PREFIX)
