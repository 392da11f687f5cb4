"""
tests.test_management

Owner-only management gate and allowlist operations.
"""

from __future__ import annotations

import pytest

from relay_gate.errors import ConnectivityError, ManagementDenied, NotFoundError, ValidationError
from relay_gate.policies.management import MANAGEMENT_DENIED
from relay_gate.relay.hooks import RelayHooks
from relay_gate.relay.models import ANONYMOUS, AuthSession, MethodParams, PubKeyReason

OWNER = AuthSession(pubkey="owner1")

ALL_CALLS = [
    MethodParams(method="allowpubkey", params=["carol", ""]),
    MethodParams(method="banpubkey", params=["carol", "spam"]),
    MethodParams(method="listallowedpubkeys"),
    MethodParams(method="listbannedpubkeys"),
    MethodParams(method="supportedmethods"),
    MethodParams(method="nosuchmethod"),
]


@pytest.mark.asyncio
@pytest.mark.parametrize("mp", ALL_CALLS, ids=lambda mp: mp.method)
@pytest.mark.parametrize("caller", [ANONYMOUS, AuthSession(pubkey="alice")], ids=["anon", "alice"])
async def test_non_owner_denied_uniformly(hooks: RelayHooks, store, caller, mp) -> None:
    await store.add("alice")
    decision = await hooks.reject_api_call(caller, mp)
    assert decision.reject
    assert decision.message == MANAGEMENT_DENIED

    with pytest.raises(ManagementDenied) as exc:
        await hooks.call_management(caller, mp)
    assert exc.value.message == MANAGEMENT_DENIED
    assert await store.list_pubkeys() == ["alice"]


@pytest.mark.asyncio
async def test_owner_passes_precheck(hooks: RelayHooks) -> None:
    decision = await hooks.reject_api_call(OWNER, MethodParams(method="listallowedpubkeys"))
    assert not decision.reject


@pytest.mark.asyncio
async def test_allow_and_list_with_reasons(hooks: RelayHooks) -> None:
    m = hooks.management
    await m.allow_pubkey("alice", "friend")
    await m.allow_pubkey("bob")
    assert await m.list_allowed_pubkeys() == [
        PubKeyReason(pubkey="alice", reason="friend"),
        PubKeyReason(pubkey="bob", reason=""),
    ]


@pytest.mark.asyncio
async def test_ban_removes_allow_entry(hooks: RelayHooks, store) -> None:
    await hooks.management.allow_pubkey("alice", "friend")
    await hooks.management.ban_pubkey("alice", "misbehaved")
    assert not await store.contains("alice")
    assert await hooks.management.list_banned_pubkeys() == []


@pytest.mark.asyncio
async def test_ban_unknown_surfaces_not_found(hooks: RelayHooks) -> None:
    with pytest.raises(NotFoundError):
        await hooks.management.ban_pubkey("dave", "")


@pytest.mark.asyncio
async def test_owner_cannot_be_banned(hooks: RelayHooks) -> None:
    with pytest.raises(ValidationError):
        await hooks.management.ban_pubkey("owner1", "")


@pytest.mark.asyncio
async def test_owner_is_never_stored(hooks: RelayHooks, store) -> None:
    with pytest.raises(ValidationError):
        await hooks.call_management(
            OWNER, MethodParams(method="allowpubkey", params=["owner1", "me"])
        )
    with pytest.raises(ValidationError):
        await hooks.management.allow_pubkey("owner1")
    assert await store.list_pubkeys() == []
    assert await hooks.call_management(OWNER, MethodParams(method="listallowedpubkeys")) == []
    # Still authorized through the owner bypass.
    assert await hooks.authority.is_authorized("owner1")


@pytest.mark.asyncio
async def test_allow_empty_pubkey_rejected(hooks: RelayHooks) -> None:
    with pytest.raises(ValidationError):
        await hooks.call_management(OWNER, MethodParams(method="allowpubkey", params=[""]))


@pytest.mark.asyncio
async def test_list_banned_is_always_empty(hooks: RelayHooks) -> None:
    await hooks.management.allow_pubkey("alice")
    await hooks.management.ban_pubkey("alice")
    assert await hooks.call_management(OWNER, MethodParams(method="listbannedpubkeys")) == []


@pytest.mark.asyncio
async def test_call_management_by_method_name(hooks: RelayHooks, store) -> None:
    call = hooks.call_management
    assert await call(OWNER, MethodParams(method="allowpubkey", params=["carol", "new"])) is True
    assert await call(OWNER, MethodParams(method="listallowedpubkeys")) == [
        {"pubkey": "carol", "reason": "new"}
    ]
    assert await call(OWNER, MethodParams(method="banpubkey", params=["carol"])) is True
    assert not await store.contains("carol")
    assert "allowpubkey" in await call(OWNER, MethodParams(method="supportedmethods"))


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "mp",
    [
        MethodParams(method="allowpubkey"),
        MethodParams(method="allowpubkey", params=[42]),
        MethodParams(method="banpubkey", params=["carol", 7]),
        MethodParams(method="changerelayname", params=["x"]),
    ],
)
async def test_call_management_rejects_bad_calls(hooks: RelayHooks, mp) -> None:
    with pytest.raises(ValidationError):
        await hooks.call_management(OWNER, mp)


@pytest.mark.asyncio
async def test_storage_errors_reach_owner_verbatim(outage_hooks: RelayHooks) -> None:
    with pytest.raises(ConnectivityError, match="connection refused"):
        await outage_hooks.call_management(
            OWNER, MethodParams(method="allowpubkey", params=["carol"])
        )
    with pytest.raises(ConnectivityError):
        await outage_hooks.management.list_allowed_pubkeys()


@pytest.mark.asyncio
async def test_denial_does_not_touch_storage(outage_hooks: RelayHooks, outage_store) -> None:
    with pytest.raises(ManagementDenied):
        await outage_hooks.call_management(
            AuthSession(pubkey="alice"), MethodParams(method="allowpubkey", params=["carol"])
        )
    assert outage_store.calls == 0
