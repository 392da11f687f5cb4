"""
relay_gate.policies.builtin

Structural validators that run ahead of the identity policies.

Responsibilities:
- Reject malformed or deprecated event kinds.
- Bound tag value sizes on events.
- Refuse filters that would be expensive to serve.

These judge the shape of a request only; they know nothing about identities.
"""

from __future__ import annotations

import json

from relay_gate.policies.decision import Decision, Policy
from relay_gate.relay.models import AuthSession, NostrEvent, NostrFilter

MAX_KIND = 65535
KIND_METADATA = 0
KIND_RECOMMEND_RELAY = 2


async def validate_kind(session: AuthSession, event: NostrEvent) -> Decision:
    if not 0 <= event.kind <= MAX_KIND:
        return Decision.deny(f"invalid: kind {event.kind} is out of range")

    if event.kind == KIND_RECOMMEND_RELAY:
        return Decision.deny("invalid: kind 2 is deprecated")

    if event.kind == KIND_METADATA:
        # Metadata content must be a JSON object (NIP-01).
        try:
            content = json.loads(event.content)
        except ValueError:
            return Decision.deny("invalid: kind 0 content is not valid json")
        if not isinstance(content, dict):
            return Decision.deny("invalid: kind 0 content must be a json object")

    return Decision.accept()


def prevent_large_tags(max_tag_value_len: int) -> Policy:
    async def prevent_large_tags(session: AuthSession, event: NostrEvent) -> Decision:
        for tag in event.tags:
            if len(tag) > 1 and len(tag[1]) > max_tag_value_len:
                return Decision.deny("event contains too large tags")
        return Decision.accept()

    return prevent_large_tags


async def no_complex_filters(session: AuthSession, nostr_filter: NostrFilter) -> Decision:
    tag_keys = len(nostr_filter.tags)
    items = tag_keys + len(nostr_filter.kinds or [])
    if items > 4 and tag_keys > 2:
        return Decision.deny("too complex filter")
    return Decision.accept()
