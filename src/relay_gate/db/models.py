"""
relay_gate.db.models

Persistence schema for relay access control.

Responsibilities:
- Define the `allowed_pubkeys` table: identities authorized beyond the owner.
"""

from __future__ import annotations

import threading
from datetime import UTC, datetime, timedelta

from sqlalchemy import String, Text
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column

PUBKEY_MAX_LEN = 64

_clock_lock = threading.Lock()
_last_ts: datetime | None = None


def utcnow_monotonic() -> datetime:
    # Naive UTC, strictly increasing within the process so listings keep insertion order
    # even when two inserts land in the same clock tick.
    global _last_ts
    with _clock_lock:
        now = datetime.now(tz=UTC).replace(tzinfo=None)
        if _last_ts is not None and now <= _last_ts:
            now = _last_ts + timedelta(microseconds=1)
        _last_ts = now
        return now


class Base(DeclarativeBase):
    pass


class AllowedPubkey(Base):
    __tablename__ = "allowed_pubkeys"

    pubkey: Mapped[str] = mapped_column(String(PUBKEY_MAX_LEN), primary_key=True)
    reason: Mapped[str | None] = mapped_column(Text, nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        nullable=False, default=utcnow_monotonic, index=True
    )


# --- Module Notes -----------------------------------------------------------
# The owner pubkey is configuration, not data: it is never written to this table.
