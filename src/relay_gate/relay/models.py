"""
relay_gate.relay.models

Interface types shared with the host relay framework.

Responsibilities:
- Model the NIP-01 event and filter shapes the policies inspect.
- Model the per-connection authentication state (NIP-42) owned by the transport.
- Model NIP-86 management calls and listing rows.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from pydantic import BaseModel, Field, model_validator


@dataclass(frozen=True, slots=True)
class AuthSession:
    """
    Per-connection authentication state. Created and expired by the transport;
    policies only read it.
    """

    pubkey: str | None = None

    @property
    def is_authenticated(self) -> bool:
        return bool(self.pubkey)


ANONYMOUS = AuthSession()


class NostrEvent(BaseModel):
    id: str = ""
    pubkey: str
    created_at: int = 0
    kind: int
    tags: list[list[str]] = Field(default_factory=list)
    content: str = ""
    sig: str = ""


class NostrFilter(BaseModel):
    ids: list[str] | None = None
    authors: list[str] | None = None
    kinds: list[int] | None = None
    # Tag queries keyed by tag name, e.g. {"e": [...]} for a "#e" filter key.
    tags: dict[str, list[str]] = Field(default_factory=dict)
    since: int | None = None
    until: int | None = None
    limit: int | None = None
    search: str | None = None

    @model_validator(mode="before")
    @classmethod
    def _collect_tag_queries(cls, data: Any) -> Any:
        if not isinstance(data, dict):
            return data
        tags = dict(data.get("tags") or {})
        rest: dict[str, Any] = {}
        for key, value in data.items():
            if key.startswith("#") and len(key) > 1:
                tags[key[1:]] = value
            elif key != "tags":
                rest[key] = value
        rest["tags"] = tags
        return rest


class MethodParams(BaseModel):
    method: str
    params: list[Any] = Field(default_factory=list)


class PubKeyReason(BaseModel):
    pubkey: str
    reason: str = ""


# --- Module Notes -----------------------------------------------------------
# Signature and id verification happen in the host before any policy runs; these
# models carry the fields without checking them.
