"""
tests.conftest

Shared fixtures: a file-backed SQLite allowlist store, an always-failing store
for outage paths, and relay hooks wired to a fixed owner.
"""

from __future__ import annotations

from collections.abc import AsyncIterator
from pathlib import Path

import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import create_async_engine

from relay_gate.db.init_db import init_db
from relay_gate.db.session import create_sessionmaker
from relay_gate.errors import ConnectivityError
from relay_gate.relay.hooks import RelayHooks, build_relay_hooks
from relay_gate.services.allowlist import AllowlistStore
from relay_gate.settings import Settings

OWNER = "owner1"


def sqlite_url(path: Path) -> str:
    return f"sqlite+aiosqlite:///{path}"


class OutageStore:
    """Stands in for an allowlist store whose database is down."""

    def __init__(self) -> None:
        self.calls = 0

    async def _fail(self, *_: object) -> None:
        self.calls += 1
        raise ConnectivityError("allowlist contains failed: connection refused")

    async def contains(self, pubkey: str) -> bool:
        await self._fail(pubkey)
        return False

    async def add(self, pubkey: str, reason: str = "") -> None:
        await self._fail(pubkey, reason)

    async def remove(self, pubkey: str) -> None:
        await self._fail(pubkey)

    async def list_entries(self) -> list:
        await self._fail()
        return []


@pytest.fixture
def settings(tmp_path: Path) -> Settings:
    return Settings(
        env="test",
        owner_pubkey=OWNER,
        database_url=sqlite_url(tmp_path / "relay.db"),
    )


@pytest_asyncio.fixture
async def store(tmp_path: Path) -> AsyncIterator[AllowlistStore]:
    engine = create_async_engine(sqlite_url(tmp_path / "allowlist.db"))
    await init_db(engine)
    s = AllowlistStore(create_sessionmaker(engine), engine=engine)
    try:
        yield s
    finally:
        await s.close()


@pytest.fixture
def outage_store() -> OutageStore:
    return OutageStore()


@pytest.fixture
def hooks(settings: Settings, store: AllowlistStore) -> RelayHooks:
    return build_relay_hooks(settings=settings, store=store)


@pytest.fixture
def outage_hooks(settings: Settings, outage_store: OutageStore) -> RelayHooks:
    return build_relay_hooks(settings=settings, store=outage_store)  # type: ignore[arg-type]
