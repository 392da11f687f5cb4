"""
relay_gate.policies.decision

Decision values and ordered policy chains.

Responsibilities:
- Represent an accept/reject outcome plus the reason relayed to the client.
- Evaluate an ordered list of policies, stopping at the first reject.
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable, Iterator, Sequence
from dataclasses import dataclass
from typing import Any

from relay_gate.observability.logging import get_logger
from relay_gate.relay.models import AuthSession

log = get_logger(__name__)

# A policy takes the connection session and the request subject (event, filter or call).
Policy = Callable[[AuthSession, Any], Awaitable["Decision"]]


@dataclass(frozen=True, slots=True)
class Decision:
    reject: bool
    message: str = ""

    @classmethod
    def accept(cls) -> Decision:
        return _ACCEPT

    @classmethod
    def deny(cls, message: str) -> Decision:
        return cls(reject=True, message=message)

    def __iter__(self) -> Iterator[bool | str]:
        # Lets hosts unpack `reject, msg = decision` like a plain callback result.
        yield self.reject
        yield self.message


_ACCEPT = Decision(reject=False)


def policy_name(policy: object) -> str:
    return getattr(policy, "__name__", None) or type(policy).__name__


class PolicyChain:
    """
    Ordered, short-circuiting list of independent policies. The order is the
    list order given here, never registration side effects.
    """

    def __init__(self, name: str, policies: Sequence[Policy]) -> None:
        self.name = name
        self._policies = tuple(policies)

    @property
    def policies(self) -> tuple[Policy, ...]:
        return self._policies

    async def __call__(self, session: AuthSession, subject: Any) -> Decision:
        for policy in self._policies:
            decision = await policy(session, subject)
            if decision.reject:
                log.info(
                    "policy_reject",
                    chain=self.name,
                    policy=policy_name(policy),
                    pubkey=session.pubkey,
                    reason=decision.message,
                )
                return decision
        return Decision.accept()
