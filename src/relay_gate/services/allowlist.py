"""
relay_gate.services.allowlist

Durable, concurrency-safe set of authorized identities.

Responsibilities:
- Run every operation in its own session and transaction (independently atomic).
- Validate identities before touching storage.
- Translate driver/ORM failures into `ConnectivityError`.
- Return listings in insertion order.
"""

from __future__ import annotations

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from dataclasses import dataclass
from datetime import datetime

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from relay_gate.db.models import PUBKEY_MAX_LEN
from relay_gate.db.repositories.allowed_pubkeys import AllowedPubkeyRepo
from relay_gate.errors import ConnectivityError, NotFoundError, ValidationError
from relay_gate.observability.logging import get_logger

log = get_logger(__name__)


@dataclass(frozen=True, slots=True)
class AllowlistEntry:
    pubkey: str
    reason: str
    created_at: datetime


def validate_pubkey(pubkey: str) -> str:
    if not pubkey or not pubkey.strip():
        raise ValidationError("pubkey cannot be empty")
    if len(pubkey) > PUBKEY_MAX_LEN:
        raise ValidationError(f"pubkey cannot be longer than {PUBKEY_MAX_LEN} characters")
    return pubkey


class AllowlistStore:
    """
    No in-process cache: every call reads or writes persisted state directly.
    Concurrent add/remove of the same pubkey is last-writer-wins.
    """

    def __init__(
        self,
        session_factory: async_sessionmaker[AsyncSession],
        *,
        engine: AsyncEngine | None = None,
    ) -> None:
        self._sessions = session_factory
        # Only set when the store owns the engine and should dispose it on close().
        self._engine = engine

    @asynccontextmanager
    async def _transaction(self, op: str) -> AsyncIterator[AllowedPubkeyRepo]:
        try:
            async with self._sessions() as session, session.begin():
                yield AllowedPubkeyRepo(session)
        except (SQLAlchemyError, OSError) as e:
            log.error("allowlist_storage_error", op=op, error=str(e))
            raise ConnectivityError(f"allowlist {op} failed: {e}") from e

    async def add(self, pubkey: str, reason: str = "") -> None:
        validate_pubkey(pubkey)
        async with self._transaction("add") as repo:
            await repo.insert_ignore(pubkey=pubkey, reason=reason)

    async def remove(self, pubkey: str) -> None:
        validate_pubkey(pubkey)
        async with self._transaction("remove") as repo:
            removed = await repo.remove(pubkey)
        if removed == 0:
            raise NotFoundError(pubkey)

    async def contains(self, pubkey: str) -> bool:
        if not pubkey:
            return False
        async with self._transaction("contains") as repo:
            return await repo.exists(pubkey)

    async def list_entries(self) -> list[AllowlistEntry]:
        async with self._transaction("list") as repo:
            rows = await repo.list_ordered()
        return [
            AllowlistEntry(pubkey=r.pubkey, reason=r.reason or "", created_at=r.created_at)
            for r in rows
        ]

    async def list_pubkeys(self) -> list[str]:
        return [e.pubkey for e in await self.list_entries()]

    async def health_check(self) -> None:
        async with self._transaction("health_check") as repo:
            await repo.ping()

    async def close(self) -> None:
        if self._engine is not None:
            await self._engine.dispose()


# --- Module Notes -----------------------------------------------------------
# Each method touches at most one row, so no cross-operation transaction is needed.
