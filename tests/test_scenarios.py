"""
tests.test_scenarios

End-to-end flows through the relay hooks, owner = "owner1".
"""

from __future__ import annotations

import pytest

from relay_gate.errors import NotFoundError
from relay_gate.policies.management import MANAGEMENT_DENIED
from relay_gate.policies.read import AUTH_REQUIRED_PREFIX
from relay_gate.policies.write import WRITE_DENIED
from relay_gate.relay.hooks import RelayHooks
from relay_gate.relay.models import ANONYMOUS, AuthSession, MethodParams, NostrEvent, NostrFilter

OWNER = AuthSession(pubkey="owner1")


@pytest.mark.asyncio
async def test_writes_from_allowed_and_unknown_authors(hooks: RelayHooks, store) -> None:
    await store.add("alice", "friend")

    reject, msg = await hooks.reject_event(ANONYMOUS, NostrEvent(pubkey="alice", kind=1))
    assert (reject, msg) == (False, "")

    reject, msg = await hooks.reject_event(ANONYMOUS, NostrEvent(pubkey="bob", kind=1))
    assert reject
    assert msg == WRITE_DENIED


@pytest.mark.asyncio
async def test_reads_need_authentication(hooks: RelayHooks, store) -> None:
    await store.add("alice", "friend")
    filt = NostrFilter(kinds=[1], limit=20)

    assert not (await hooks.reject_filter(AuthSession(pubkey="alice"), filt)).reject

    decision = await hooks.reject_filter(ANONYMOUS, filt)
    assert decision.reject
    assert decision.message.startswith(AUTH_REQUIRED_PREFIX)


@pytest.mark.asyncio
async def test_only_owner_can_allow(hooks: RelayHooks, store) -> None:
    call = MethodParams(method="allowpubkey", params=["carol", ""])

    decision = await hooks.reject_api_call(AuthSession(pubkey="alice"), call)
    assert decision.reject
    assert decision.message == MANAGEMENT_DENIED
    assert await store.list_pubkeys() == []

    assert not (await hooks.reject_api_call(OWNER, call)).reject
    await hooks.call_management(OWNER, call)
    assert "carol" in await store.list_pubkeys()


@pytest.mark.asyncio
async def test_ban_of_never_added_pubkey(hooks: RelayHooks) -> None:
    with pytest.raises(NotFoundError):
        await hooks.call_management(OWNER, MethodParams(method="banpubkey", params=["dave"]))


@pytest.mark.asyncio
async def test_structural_checks_run_before_identity(
    outage_hooks: RelayHooks, outage_store
) -> None:
    # A malformed event is refused on shape alone; storage is never consulted.
    decision = await outage_hooks.reject_event(
        ANONYMOUS, NostrEvent(pubkey="alice", kind=1, tags=[["p", "x" * 101]])
    )
    assert decision.message == "event contains too large tags"
    assert outage_store.calls == 0


@pytest.mark.asyncio
async def test_ban_then_write_is_rejected(hooks: RelayHooks) -> None:
    await hooks.call_management(OWNER, MethodParams(method="allowpubkey", params=["alice"]))
    assert not (await hooks.reject_event(ANONYMOUS, NostrEvent(pubkey="alice", kind=1))).reject

    await hooks.call_management(OWNER, MethodParams(method="banpubkey", params=["alice"]))
    assert (await hooks.reject_event(ANONYMOUS, NostrEvent(pubkey="alice", kind=1))).reject
    assert (await hooks.reject_filter(AuthSession(pubkey="alice"), NostrFilter())).reject
