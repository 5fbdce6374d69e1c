"""Domain Types — the journal entry and the shapes that flow between layers.

Invariants:
    - EntryId wraps the store's integer identity — the wire string never enters core
    - JournalEntry is immutable once built; layers hold transient copies only
    - updated_at >= created_at for every entry produced by a store

Design Decisions:
    - NewType over dataclass wrapper for EntryId: zero runtime cost, full type-checker support
    - frozen dataclasses over ORM rows: the Manager never sees SQLAlchemy objects
    - str Enums: serialize to JSON without custom encoders
"""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import NewType


# ─── Identity Types ──────────────────────────────────────────────

EntryId = NewType("EntryId", int)


# ─── Entities ────────────────────────────────────────────────────

@dataclass(frozen=True)
class JournalEntry:
    """A journal record as stored — id and timestamps are store-assigned."""
    id: EntryId
    title: str
    content: str
    created_at: datetime
    updated_at: datetime


@dataclass(frozen=True)
class ListEntriesResult:
    """One page of entries plus the token for the next page ("" at the end)."""
    entries: list[JournalEntry] = field(default_factory=list)
    next_page_token: str = ""
    total_count: int = 0


# ─── Enums ───────────────────────────────────────────────────────

class RpcStatus(str, Enum):
    """Wire status classes reported alongside the HTTP status."""
    OK = "OK"
    INVALID_ARGUMENT = "INVALID_ARGUMENT"
    NOT_FOUND = "NOT_FOUND"
    INTERNAL = "INTERNAL"
