from __future__ import annotations

from sqlalchemy import delete, exists, select, text
from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.ext.asyncio import AsyncSession

from relay_gate.db.models import AllowedPubkey, utcnow_monotonic

_UPSERT_DIALECTS = {
    "postgresql": postgresql.insert,
    "sqlite": sqlite.insert,
}


class AllowedPubkeyRepo:
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def insert_ignore(self, *, pubkey: str, reason: str | None) -> None:
        dialect = self._session.get_bind().dialect.name
        insert = _UPSERT_DIALECTS.get(dialect)
        if insert is not None:
            stmt = (
                insert(AllowedPubkey)
                .values(pubkey=pubkey, reason=reason, created_at=utcnow_monotonic())
                .on_conflict_do_nothing(index_elements=["pubkey"])
            )
            await self._session.execute(stmt)
            return

        # Other backends: check first; a racing duplicate surfaces as a storage error.
        if await self.exists(pubkey):
            return
        self._session.add(AllowedPubkey(pubkey=pubkey, reason=reason))
        await self._session.flush()

    async def remove(self, pubkey: str) -> int:
        result = await self._session.execute(
            delete(AllowedPubkey).where(AllowedPubkey.pubkey == pubkey)
        )
        return result.rowcount or 0

    async def exists(self, pubkey: str) -> bool:
        stmt = select(exists().where(AllowedPubkey.pubkey == pubkey))
        return bool((await self._session.execute(stmt)).scalar())

    async def list_ordered(self) -> list[AllowedPubkey]:
        stmt = select(AllowedPubkey).order_by(AllowedPubkey.created_at, AllowedPubkey.pubkey)
        return list((await self._session.execute(stmt)).scalars().all())

    async def ping(self) -> None:
        await self._session.execute(text("SELECT 1"))
