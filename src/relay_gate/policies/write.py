"""
relay_gate.policies.write

Per-event admission decision, run before the host persists an event.
"""

from __future__ import annotations

from relay_gate.errors import AuthorizationIndeterminate
from relay_gate.observability.logging import get_logger
from relay_gate.policies.decision import Decision
from relay_gate.policies.identity import IdentityAuthority
from relay_gate.relay.models import AuthSession, NostrEvent

log = get_logger(__name__)

AUTHORIZATION_ERROR = "error: could not verify authorization"
WRITE_DENIED = "restricted: this is a private relay, only authorized users can write here"


class WritePolicy:
    """
    Judges the event author only. Structural validators (kind, tag size) run
    as separate, earlier policies in the same chain.
    """

    def __init__(self, authority: IdentityAuthority) -> None:
        self._authority = authority

    async def __call__(self, session: AuthSession, event: NostrEvent) -> Decision:
        try:
            allowed = await self._authority.is_authorized(event.pubkey)
        except AuthorizationIndeterminate as e:
            log.error(
                "authorization_indeterminate", hook="write", pubkey=event.pubkey, error=str(e)
            )
            return Decision.deny(AUTHORIZATION_ERROR)

        if allowed:
            return Decision.accept()
        return Decision.deny(WRITE_DENIED)
